# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Configuration package for the failover library.

All tunable defaults live in defaults.py.
"""

from .defaults import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TEMPERATURE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_MODELS_TIMEOUT,
    CHAT_COMPLETIONS_PATH,
    MODELS_PATH,
    PROBE_PROMPT,
    PROBE_SYSTEM_PROMPT,
    PROBE_TEMPERATURE,
    PROBE_DEFAULT_MODEL,
    CATALOG_PLACEHOLDER,
)

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_MODELS_TIMEOUT",
    "CHAT_COMPLETIONS_PATH",
    "MODELS_PATH",
    "PROBE_PROMPT",
    "PROBE_SYSTEM_PROMPT",
    "PROBE_TEMPERATURE",
    "PROBE_DEFAULT_MODEL",
    "CATALOG_PLACEHOLDER",
]
