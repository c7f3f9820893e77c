# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Core package for the failover library.

Provides shared infrastructure used by the client package:
- types: Shared dataclasses and the invocation outcome
- errors: All custom exceptions
- config: ApiSettings and ConfigLoader
- constants: Default values and magic numbers
- interfaces: Collaborator protocols
"""

from .types import (
    OutcomeKind,
    ProbeMode,
    ParseReport,
    AttemptResult,
    CatalogRefreshResult,
    Success,
    Suspended,
    Failure,
    InvocationOutcome,
)

from .errors import (
    # Base exceptions
    FailoverError,
    InputError,
    ConfigurationError,
    CredentialInvalidError,
    TransportError,
    StreamedAPIError,
    AggregateFailure,
    # Utilities
    mask_credential,
    error_message,
    classify_http_error,
)

from .config import ApiSettings, ConfigLoader

__all__ = [
    # Types
    "OutcomeKind",
    "ProbeMode",
    "ParseReport",
    "AttemptResult",
    "CatalogRefreshResult",
    "Success",
    "Suspended",
    "Failure",
    "InvocationOutcome",
    # Errors
    "FailoverError",
    "InputError",
    "ConfigurationError",
    "CredentialInvalidError",
    "TransportError",
    "StreamedAPIError",
    "AggregateFailure",
    "mask_credential",
    "error_message",
    "classify_http_error",
    # Config
    "ApiSettings",
    "ConfigLoader",
]
