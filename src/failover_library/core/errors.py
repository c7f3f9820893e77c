# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Error handling for the failover library.

Exception classes for every failure kind the invocation layer reports,
plus helpers for masking credentials and normalizing error messages.

Failure kinds:
- ConfigurationError: missing URL / model / keys. Fails fast, never retried.
- CredentialInvalidError: a key was rejected by the remote service.
- TransportError: network, timeout or other remote failure.
- AggregateFailure: every attempt in a failover loop failed.

CredentialInvalidError and TransportError are handled identically by the
failover loop: the error is recorded and the next key is tried.
"""

import math
from typing import Any, Optional

from .constants import UNKNOWN_ERROR


# =============================================================================
# EXCEPTION CLASSES
# =============================================================================


class FailoverError(Exception):
    """Base class for all failover library errors."""


class InputError(FailoverError, ValueError):
    """Raised when a required argument is missing (e.g. parsing None)."""


class ConfigurationError(FailoverError):
    """
    Raised when the endpoint URL, model name or credentials are missing
    or unusable.

    Zero attempts are made when this is raised.
    """


class CredentialInvalidError(FailoverError):
    """
    A single key was rejected by the remote service (401/403).

    Attributes:
        status_code: HTTP status returned by the service
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(FailoverError):
    """
    Network, timeout or unexpected remote failure for a single call.

    Attributes:
        status_code: HTTP status if the failure came from a response
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StreamedAPIError(TransportError):
    """
    Custom exception to signal an API error received over a stream.

    Attributes:
        message: Human-readable error message
        data: The parsed error data (dict or exception)
    """

    def __init__(self, message: str, data=None):
        super().__init__(message)
        self.data = data


class AggregateFailure(FailoverError):
    """
    Every attempt of a failover loop failed.

    The string form names the attempt count and the last error's message.
    """

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        self.attempts = attempts
        self.last_error = last_error
        last_message = error_message(last_error) if last_error is not None else None
        super().__init__(
            f"All {attempts} attempts failed. Last error: {last_message or UNKNOWN_ERROR}"
        )


# =============================================================================
# UTILITIES
# =============================================================================


def mask_credential(credential: str) -> str:
    """
    Mask an API key for logs and user-facing listings.

    Keys of 8 characters or fewer show their first half; longer keys show
    the first and last 4 characters.

    Args:
        credential: The raw API key

    Returns:
        Masked representation, never the full secret
    """
    length = len(credential)
    if length == 0:
        return "[empty key]"
    if length <= 8:
        return credential[: math.ceil(length / 2)] + "..."
    return f"{credential[:4]}...{credential[-4:]}"


def error_message(error: Any) -> str:
    """
    Normalize an error-like value into a message string.

    Exceptions yield their message, strings are returned unchanged,
    anything else falls back to its string form or "Unknown error".
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    if isinstance(error, str):
        return error
    if error is not None:
        text = str(error)
        if text:
            return text
    return UNKNOWN_ERROR


def classify_http_error(status_code: int, body: str = "") -> FailoverError:
    """
    Build the exception matching an HTTP error response.

    401 and 403 mean the key itself was rejected; everything else is
    treated as a transport failure.
    """
    message = f"Request failed: {status_code}"
    if body:
        message += f" - {body}"
    if status_code in (401, 403):
        return CredentialInvalidError(message, status_code=status_code)
    return TransportError(message, status_code=status_code)


__all__ = [
    # Exception classes
    "FailoverError",
    "InputError",
    "ConfigurationError",
    "CredentialInvalidError",
    "TransportError",
    "StreamedAPIError",
    "AggregateFailure",
    # Utilities
    "mask_credential",
    "error_message",
    "classify_http_error",
]
