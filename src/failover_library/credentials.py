# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
API key parsing and normalization.

Keys are entered as one comma-separated string. Parsing trims each field,
drops blanks and removes duplicates (first occurrence wins, order kept).
Keys are treated as opaque plaintext; nothing here encrypts or decrypts.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from .core.constants import KEY_SEPARATOR, LEGACY_ENCRYPTED_MIN_LENGTH
from .core.errors import InputError
from .core.interfaces import Notifier, SettingsStore
from .core.types import ParseReport

lib_logger = logging.getLogger("failover_library")

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


def is_legacy_encrypted(value: str) -> bool:
    """
    Check if a stored key string looks like the old encrypted format.

    Heuristic: only hex digits, longer than 32 characters, no separator.
    """
    return (
        bool(_HEX_PATTERN.match(value))
        and len(value) > LEGACY_ENCRYPTED_MIN_LENGTH
        and KEY_SEPARATOR not in value
    )


def normalize_keys(keys: Iterable[str]) -> List[str]:
    """Trim, drop blanks and de-duplicate keys, keeping first occurrences in order."""
    return list(dict.fromkeys(k.strip() for k in keys if k and k.strip()))


class CredentialSet:
    """
    Normalized view of the configured API keys.

    Usage:
        keys, report = CredentialSet.parse("sk-a, sk-b, sk-a")
        credentials = CredentialSet(settings)
        keys = credentials.get()
    """

    def __init__(self, settings: SettingsStore, notifier: Optional[Notifier] = None):
        """
        Args:
            settings: Store holding the raw key string in api_key
            notifier: Receives a warning when a legacy encrypted value is found
        """
        self._settings = settings
        self._notifier = notifier

    @staticmethod
    def parse(raw: str) -> Tuple[List[str], ParseReport]:
        """
        Split, trim, drop blanks and de-duplicate a raw key string.

        Counting rule:
            invalid_keys_count = total_keys - keys left after dropping blanks
            duplicates_removed = keys left after dropping blanks - unique keys

        Args:
            raw: Comma-separated key string

        Returns:
            Tuple of (unique keys, ParseReport)

        Raises:
            InputError: If raw is None
        """
        if raw is None:
            raise InputError("API key string is required")

        fields = raw.split(KEY_SEPARATOR)
        keys = [k.strip() for k in fields if k.strip()]
        unique_keys = normalize_keys(keys)

        total_keys = len(fields)
        invalid_keys_count = total_keys - len(keys)
        duplicates_removed = len(keys) - len(unique_keys)
        remaining_keys = len(unique_keys)

        message = f"Updated API keys: {remaining_keys} key(s)"
        removed_parts = []
        if duplicates_removed > 0:
            removed_parts.append(f"{duplicates_removed} duplicate key(s)")
        if invalid_keys_count > 0:
            removed_parts.append(f"{invalid_keys_count} blank value(s)")
        if removed_parts:
            message += f" (removed {', '.join(removed_parts)})"

        report = ParseReport(
            processed_key=KEY_SEPARATOR.join(unique_keys),
            total_keys=total_keys,
            remaining_keys=remaining_keys,
            duplicates_removed=duplicates_removed,
            invalid_keys_count=invalid_keys_count,
            message=message,
        )
        return unique_keys, report

    def get_raw(self) -> Optional[str]:
        """
        Return the stored key string, or None if unset.

        A legacy encrypted value counts as unset; the user is asked to
        enter the key again.
        """
        raw = self._settings.api_key
        if not raw:
            return None
        if is_legacy_encrypted(raw):
            lib_logger.warning("Stored API key is in the legacy encrypted format")
            if self._notifier:
                self._notifier.warning(
                    "Found an API key saved in the old encrypted format. "
                    "Please enter your API key again."
                )
            return None
        return raw

    def get(self) -> Optional[List[str]]:
        """
        Return the configured keys, or None if unset.

        The result may be empty when the stored string holds only blanks.
        """
        raw = self.get_raw()
        if raw is None:
            return None
        keys, _ = self.parse(raw)
        return keys


def parse_credentials(raw: str) -> Tuple[List[str], ParseReport]:
    """Module-level shortcut for CredentialSet.parse."""
    return CredentialSet.parse(raw)
