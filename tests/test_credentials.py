# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import unittest

from failover_library import (
    ApiSettings,
    CredentialSet,
    InputError,
    normalize_keys,
    parse_credentials,
)
from failover_library.credentials import is_legacy_encrypted


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def clear(self) -> None:
        self.messages.append(("clear", ""))


class ParseTest(unittest.TestCase):
    def test_duplicates_and_blanks_are_counted(self) -> None:
        keys, report = CredentialSet.parse("a, a, ,b")
        self.assertEqual(keys, ["a", "b"])
        self.assertEqual(report.total_keys, 4)
        self.assertEqual(report.invalid_keys_count, 1)
        self.assertEqual(report.duplicates_removed, 1)
        self.assertEqual(report.remaining_keys, 2)
        self.assertEqual(report.processed_key, "a,b")

    def test_parsed_keys_have_no_blanks_or_duplicates(self) -> None:
        samples = [
            "",
            ",",
            " , ,, ",
            "sk-1",
            "sk-1,sk-1,sk-1",
            " sk-1 ,sk-2,, sk-1,sk-3 ",
            "b,a,b,a,c",
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                keys, report = CredentialSet.parse(raw)
                self.assertNotIn("", keys)
                self.assertEqual(len(keys), len(set(keys)))
                non_blank = [k.strip() for k in raw.split(",") if k.strip()]
                self.assertEqual(report.total_keys, len(raw.split(",")))
                self.assertEqual(
                    report.invalid_keys_count, report.total_keys - len(non_blank)
                )
                self.assertEqual(
                    report.duplicates_removed, len(non_blank) - report.remaining_keys
                )
                self.assertEqual(report.remaining_keys, len(keys))

    def test_first_occurrence_wins_and_order_is_kept(self) -> None:
        keys, _ = parse_credentials("c, b, c, a, b")
        self.assertEqual(keys, ["c", "b", "a"])

    def test_key_list_follows_the_same_rules(self) -> None:
        self.assertEqual(normalize_keys([" c", "b ", "  ", "", "c", "a"]), ["c", "b", "a"])
        self.assertEqual(normalize_keys(["  ", " "]), [])

    def test_empty_string_is_one_blank_field(self) -> None:
        keys, report = CredentialSet.parse("")
        self.assertEqual(keys, [])
        self.assertEqual(report.total_keys, 1)
        self.assertEqual(report.invalid_keys_count, 1)
        self.assertEqual(report.remaining_keys, 0)

    def test_none_raises_input_error(self) -> None:
        with self.assertRaises(InputError):
            CredentialSet.parse(None)
        with self.assertRaises(ValueError):
            CredentialSet.parse(None)

    def test_message_lists_only_nonzero_removals(self) -> None:
        _, clean = CredentialSet.parse("a,b")
        self.assertEqual(clean.message, "Updated API keys: 2 key(s)")

        _, dupes = CredentialSet.parse("a,a")
        self.assertIn("1 duplicate key(s)", dupes.message)
        self.assertNotIn("blank", dupes.message)

        _, both = CredentialSet.parse("a,a,,")
        self.assertIn("1 duplicate key(s)", both.message)
        self.assertIn("2 blank value(s)", both.message)


class CredentialSetGetTest(unittest.TestCase):
    def test_unset_key_returns_none(self) -> None:
        self.assertIsNone(CredentialSet(ApiSettings()).get())
        self.assertIsNone(CredentialSet(ApiSettings(api_key="")).get())

    def test_get_returns_normalized_list(self) -> None:
        credentials = CredentialSet(ApiSettings(api_key=" k1, k2 ,k1,"))
        self.assertEqual(credentials.get(), ["k1", "k2"])

    def test_blank_only_value_returns_empty_list(self) -> None:
        self.assertEqual(CredentialSet(ApiSettings(api_key=" , ")).get(), [])

    def test_legacy_encrypted_value_is_treated_as_unset(self) -> None:
        notifier = RecordingNotifier()
        legacy = "0123456789abcdef" * 3
        credentials = CredentialSet(ApiSettings(api_key=legacy), notifier)
        self.assertIsNone(credentials.get())
        self.assertEqual(notifier.messages[0][0], "warning")

    def test_legacy_detection_heuristic(self) -> None:
        self.assertTrue(is_legacy_encrypted("ab" * 17))
        self.assertFalse(is_legacy_encrypted("ab" * 16))
        self.assertFalse(is_legacy_encrypted("sk-" + "a" * 40))
        self.assertFalse(is_legacy_encrypted("ab" * 17 + ",cd"))


if __name__ == "__main__":
    unittest.main()
