# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Constants and default values for the failover library.

This module re-exports all tunable defaults from the config package and
adds the non-tunable constants (env var names, logger name, sentinels).
"""

from ..config import (
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

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_API_URL = "CUSTOM_API_URL"
ENV_API_KEY = "CUSTOM_API_KEY"
ENV_MODEL_NAME = "CUSTOM_MODEL_NAME"
ENV_TEMPERATURE = "CUSTOM_TEMPERATURE"
ENV_MAX_ATTEMPTS = "FAILOVER_MAX_ATTEMPTS"

# =============================================================================
# CREDENTIALS
# =============================================================================

KEY_SEPARATOR = ","

# Stored values made only of hex digits and longer than this are leftovers
# from the old encrypted storage format
LEGACY_ENCRYPTED_MIN_LENGTH = 32

# =============================================================================
# OUTCOMES
# =============================================================================

# Text form of a suspended invocation, for callers that still need a string
SUSPENDED_SENTINEL = "suspended"

UNKNOWN_ERROR = "Unknown error"

__all__ = [
    # From config package
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
    # Environment variables
    "ENV_API_URL",
    "ENV_API_KEY",
    "ENV_MODEL_NAME",
    "ENV_TEMPERATURE",
    "ENV_MAX_ATTEMPTS",
    # Credentials
    "KEY_SEPARATOR",
    "LEGACY_ENCRYPTED_MIN_LENGTH",
    # Outcomes
    "SUSPENDED_SENTINEL",
    "UNKNOWN_ERROR",
]
