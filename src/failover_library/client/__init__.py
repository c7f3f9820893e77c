# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Client package for LLM API key failover.

Public API:
    FailoverInvoker: Round-robin failover across API keys
    ConnectivityProbe: Per-key connectivity diagnostics
    ModelCatalogSync: Model list refresh

Components (for advanced usage):
    CancellationGate: "Continue in background / abort" prompt
    CancellationToken: Flag polled by the failover loop
    HttpModelClient: OpenAI-compatible completion client
"""

from .invoker import FailoverInvoker
from .probe import ConnectivityProbe
from .catalog import ModelCatalogSync, models_url
from .gate import CancellationGate, CancellationToken
from .remote import HttpModelClient

__all__ = [
    # Main public API
    "FailoverInvoker",
    "ConnectivityProbe",
    "ModelCatalogSync",
    # Components
    "CancellationGate",
    "CancellationToken",
    "HttpModelClient",
    "models_url",
]
