# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

from .client import (
    CancellationGate,
    CancellationToken,
    ConnectivityProbe,
    FailoverInvoker,
    HttpModelClient,
    ModelCatalogSync,
)
from .collaborators import (
    AutoConfirmPrompt,
    BackgroundPromptHandle,
    LoggingNotifier,
    MemoryModelCatalog,
)
from .core import (
    AggregateFailure,
    ApiSettings,
    AttemptResult,
    CatalogRefreshResult,
    ConfigLoader,
    ConfigurationError,
    CredentialInvalidError,
    Failure,
    FailoverError,
    InputError,
    InvocationOutcome,
    OutcomeKind,
    ParseReport,
    ProbeMode,
    Success,
    Suspended,
    TransportError,
    mask_credential,
)
from .credentials import CredentialSet, normalize_keys, parse_credentials
from .utils import estimate_token_count

__all__ = [
    "FailoverInvoker",
    "ConnectivityProbe",
    "ModelCatalogSync",
    "CancellationGate",
    "CancellationToken",
    "HttpModelClient",
    "CredentialSet",
    "parse_credentials",
    "normalize_keys",
    "ApiSettings",
    "ConfigLoader",
    "Success",
    "Suspended",
    "Failure",
    "InvocationOutcome",
    "OutcomeKind",
    "ProbeMode",
    "ParseReport",
    "AttemptResult",
    "CatalogRefreshResult",
    "FailoverError",
    "InputError",
    "ConfigurationError",
    "CredentialInvalidError",
    "TransportError",
    "AggregateFailure",
    "mask_credential",
    "LoggingNotifier",
    "MemoryModelCatalog",
    "AutoConfirmPrompt",
    "BackgroundPromptHandle",
    "estimate_token_count",
]
