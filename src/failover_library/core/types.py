# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Shared type definitions for the failover library.

Dataclasses for parse reports, per-key attempt results, catalog refresh
results, and the tagged outcome of a failover invocation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .constants import SUSPENDED_SENTINEL
from .errors import AggregateFailure


# =============================================================================
# ENUMS
# =============================================================================


class OutcomeKind(str, Enum):
    """Discriminant of an InvocationOutcome."""

    SUCCESS = "success"
    SUSPENDED = "suspended"
    FAILURE = "failure"


class ProbeMode(str, Enum):
    """Which keys a diagnostics run exercises."""

    FIRST = "first"  # Only the first configured key
    ALL = "all"  # Every configured key


# =============================================================================
# CREDENTIALS
# =============================================================================


@dataclass
class ParseReport:
    """
    Summary of normalizing a raw comma-separated key string.

    invalid_keys_count and duplicates_removed are computed in sequence
    (blanks first, then duplicates among the non-blank keys), so the three
    counts do not need to add up to total_keys.
    """

    processed_key: str  # Unique keys joined back with ","
    total_keys: int  # Number of comma-separated fields in the raw input
    remaining_keys: int
    duplicates_removed: int
    invalid_keys_count: int  # Blank fields
    message: str


@dataclass
class AttemptResult:
    """
    Outcome of calling the remote service with one key.
    """

    key_index: int  # Position in the credential list (0-based)
    success: bool
    error: Optional[str] = None
    masked_key: Optional[str] = None  # For diagnostic listings only

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"keyIndex": self.key_index, "success": self.success}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class CatalogRefreshResult:
    """Result of a model catalog refresh."""

    success: bool
    model_count: int = 0
    invalid_keys: List[AttemptResult] = field(default_factory=list)
    checked_keys: int = 0


# =============================================================================
# INVOCATION OUTCOME
# =============================================================================


@dataclass(frozen=True)
class Success:
    """The remote call completed with this text."""

    text: str

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.SUCCESS

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Suspended:
    """The user aborted the failover loop."""

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.SUSPENDED

    def __str__(self) -> str:
        return SUSPENDED_SENTINEL


@dataclass(frozen=True)
class Failure:
    """
    Every attempt failed.

    message names the attempt count and the last error's message.
    """

    message: str
    attempts: int = 0
    last_error: Optional[BaseException] = field(default=None, compare=False)

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.FAILURE

    def as_exception(self) -> AggregateFailure:
        """Return the equivalent AggregateFailure, e.g. to raise it."""
        return AggregateFailure(self.attempts, self.last_error)

    def __str__(self) -> str:
        return f"Error: {self.message}"


InvocationOutcome = Union[Success, Suspended, Failure]
