# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

from .tokens import estimate_token_count

__all__ = ["estimate_token_count"]
