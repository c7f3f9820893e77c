# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Centralized defaults for the failover library.

This file contains all tunable default values for:
- Failover attempts across API keys
- Remote completion calls (temperature, timeouts)
- Connectivity probing
- Model catalog refresh

Environment variables can override at runtime (see core/config.py).
"""

from typing import Optional

# =============================================================================
# FAILOVER DEFAULTS
# =============================================================================

# Maximum attempts per invocation.
# None = try every configured key exactly once.
# Override via environment variable: FAILOVER_MAX_ATTEMPTS=<n>
DEFAULT_MAX_ATTEMPTS: Optional[int] = None

# Sampling temperature used when settings do not provide one
# Override via environment variable: CUSTOM_TEMPERATURE=<float>
DEFAULT_TEMPERATURE: float = 0.7

# =============================================================================
# HTTP DEFAULTS
# =============================================================================

# Timeout (seconds) for a single completion call
DEFAULT_REQUEST_TIMEOUT: int = 60

# Timeout (seconds) for a single models-listing call
DEFAULT_MODELS_TIMEOUT: int = 20

# Path appended to the endpoint URL for completions
CHAT_COMPLETIONS_PATH: str = "/chat/completions"

# Path appended to the endpoint URL for model listing
MODELS_PATH: str = "/models"

# =============================================================================
# CONNECTIVITY PROBE DEFAULTS
# =============================================================================

# Minimal prompt sent to each key during diagnostics (costs very few tokens)
PROBE_PROMPT: str = "Say 'test'"

PROBE_SYSTEM_PROMPT: str = "You are a test assistant."

PROBE_TEMPERATURE: float = 0.1

# Model used by the probe when none is configured
PROBE_DEFAULT_MODEL: str = "gpt-3.5-turbo"

# =============================================================================
# MODEL CATALOG DEFAULTS
# =============================================================================

# Entry shown in the catalog when no key could list models
CATALOG_PLACEHOLDER: str = "Failed to fetch model list"
