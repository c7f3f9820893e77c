# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import asyncio
import unittest

from failover_library import (
    ApiSettings,
    AttemptResult,
    AutoConfirmPrompt,
    ConnectivityProbe,
    CredentialSet,
    ProbeMode,
    TransportError,
)


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

    def of(self, level: str):
        return [m for lvl, m in self.messages if lvl == level]


class ScriptedClients:
    def __init__(self, script) -> None:
        self.script = script
        self.calls = []

    def __call__(self, **kwargs):
        owner = self

        class _Client:
            async def call(self, prompt, on_chunk=None):
                owner.calls.append(dict(kwargs, prompt=prompt))
                outcome = owner.script[kwargs["credential"]]
                if isinstance(outcome, BaseException):
                    raise outcome
                return outcome

        return _Client()


class OddError(Exception):
    def __str__(self) -> str:
        return ""


class ConnectivityProbeTest(unittest.TestCase):
    def setUp(self) -> None:
        self.notifier = RecordingNotifier()

    def test_every_key_is_tried_in_list_order(self) -> None:
        clients = ScriptedClients(
            {"k1": "test", "k2": TransportError("Request failed: 401 - nope"), "k3": "test"}
        )
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        results = asyncio.run(
            probe.test_all("https://api.example.com/v1", ["k1", "k2", "k3"], "m")
        )

        self.assertEqual([c["credential"] for c in clients.calls], ["k1", "k2", "k3"])
        self.assertEqual(
            [(r.key_index, r.success, r.error) for r in results],
            [(0, True, None), (1, False, "Request failed: 401 - nope"), (2, True, None)],
        )

    def test_probe_uses_minimal_prompt(self) -> None:
        clients = ScriptedClients({"k1": "test"})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        asyncio.run(probe.test_all("https://api.example.com/v1", ["k1"], None))

        call = clients.calls[0]
        self.assertEqual(call["prompt"], "Say 'test'")
        self.assertEqual(call["system_prompt"], "You are a test assistant.")
        self.assertEqual(call["temperature"], 0.1)
        self.assertEqual(call["model_name"], "gpt-3.5-turbo")

    def test_empty_response_is_a_failure(self) -> None:
        clients = ScriptedClients({"k1": ""})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        results = asyncio.run(probe.test_all("https://api.example.com/v1", ["k1"], "m"))

        self.assertEqual(
            results[0],
            AttemptResult(
                key_index=0,
                success=False,
                error="Invalid or empty response received.",
                masked_key="k...",
            ),
        )

    def test_error_without_message_uses_type_name(self) -> None:
        clients = ScriptedClients({"k1": OddError()})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        results = asyncio.run(probe.test_all("https://api.example.com/v1", ["k1"], "m"))

        self.assertEqual(results[0].error, "OddError")

    def test_no_usable_keys_makes_no_call(self) -> None:
        clients = ScriptedClients({})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        for credentials in ([], " , ,", None):
            with self.subTest(credentials=credentials):
                results = asyncio.run(
                    probe.test_all("https://api.example.com/v1", credentials, "m")
                )
                self.assertEqual(results, [])
        self.assertEqual(clients.calls, [])
        self.assertEqual(len(self.notifier.of("error")), 3)

    def test_missing_url_makes_no_call(self) -> None:
        clients = ScriptedClients({"k1": "test"})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        self.assertEqual(asyncio.run(probe.test_all("", ["k1"], "m")), [])
        self.assertEqual(clients.calls, [])

    def test_raw_key_string_is_normalized(self) -> None:
        clients = ScriptedClients({"k1": "test", "k2": "test"})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        results = asyncio.run(
            probe.test_all("https://api.example.com/v1", " k1 ,k2,k1,", "m")
        )

        self.assertEqual(len(results), 2)

    def test_blank_key_list_makes_no_call(self) -> None:
        clients = ScriptedClients({})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        results = asyncio.run(probe.test_all("https://api.example.com/v1", ["  ", " ", ""], "m"))

        self.assertEqual(results, [])
        self.assertEqual(clients.calls, [])
        self.assertEqual(len(self.notifier.of("error")), 1)

    def test_key_list_is_trimmed_and_deduplicated(self) -> None:
        clients = ScriptedClients({"k1": "test", "k2": "test"})
        probe = ConnectivityProbe(notifier=self.notifier, client_factory=clients)

        results = asyncio.run(
            probe.test_all("https://api.example.com/v1", [" k2", "k1 ", "k2 ", "  "], "m")
        )

        self.assertEqual([c["credential"] for c in clients.calls], ["k2", "k1"])
        self.assertEqual([r.key_index for r in results], [0, 1])

    def test_result_serializes_like_the_ui_expects(self) -> None:
        self.assertEqual(
            AttemptResult(key_index=1, success=False, error="x").to_dict(),
            {"keyIndex": 1, "success": False, "error": "x"},
        )
        self.assertEqual(
            AttemptResult(key_index=0, success=True).to_dict(),
            {"keyIndex": 0, "success": True},
        )


class ConnectivityProbeRunTest(unittest.TestCase):
    def make_probe(self, script, keys="k1,k2", answer=True):
        self.notifier = RecordingNotifier()
        self.clients = ScriptedClients(script)
        self.confirm = AutoConfirmPrompt(answer)
        return ConnectivityProbe(
            credentials=CredentialSet(ApiSettings(api_key=keys)),
            notifier=self.notifier,
            client_factory=self.clients,
            confirm_prompt=self.confirm,
        )

    def test_first_mode_tests_only_first_key(self) -> None:
        probe = self.make_probe({"k1": "test", "k2": "test"})

        results = asyncio.run(probe.run("https://api.example.com/v1", "m"))

        self.assertEqual(len(results), 1)
        self.assertEqual([c["credential"] for c in self.clients.calls], ["k1"])
        self.assertIn("Found 2 API key(s).", self.confirm.messages[0])
        self.assertEqual(self.notifier.of("success"), ["1 key(s) passed the test!"])

    def test_all_mode_reports_failures(self) -> None:
        probe = self.make_probe({"k1": "test", "k2": TransportError("bad gateway")})

        results = asyncio.run(
            probe.run("https://api.example.com/v1", "m", mode=ProbeMode.ALL)
        )

        self.assertEqual(len(results), 2)
        errors = self.notifier.of("error")
        self.assertIn("1 key(s) failed the test. Check the logs for details.", errors)
        self.assertIn("API endpoint: https://api.example.com/v1", errors)
        self.assertIn("Error details: bad gateway", errors)
        self.assertEqual(self.notifier.of("success"), ["1 key(s) passed the test!"])

    def test_declined_confirmation_tests_nothing(self) -> None:
        for answer in (False, None):
            with self.subTest(answer=answer):
                probe = self.make_probe({"k1": "test"}, answer=answer)
                self.assertEqual(asyncio.run(probe.run("https://api.example.com/v1")), [])
                self.assertEqual(self.clients.calls, [])

    def test_confirmation_can_be_skipped(self) -> None:
        probe = self.make_probe({"k1": "test", "k2": "test"}, answer=False)

        results = asyncio.run(
            probe.run("https://api.example.com/v1", confirm=False)
        )

        self.assertEqual(len(results), 1)
        self.assertEqual(self.confirm.messages, [])

    def test_missing_configuration_is_reported(self) -> None:
        probe = self.make_probe({}, keys="")
        self.assertEqual(asyncio.run(probe.run("https://api.example.com/v1")), [])
        self.assertEqual(asyncio.run(probe.run("")), [])
        self.assertEqual(len(self.notifier.of("error")), 2)
        self.assertEqual(self.clients.calls, [])

    def test_probe_does_not_touch_rotation(self) -> None:
        # The probe has no cursor; running it twice tests the same first key
        probe = self.make_probe({"k1": "test", "k2": "test"})

        async def run():
            await probe.run("https://api.example.com/v1")
            await probe.run("https://api.example.com/v1")

        asyncio.run(run())
        self.assertEqual([c["credential"] for c in self.clients.calls], ["k1", "k1"])


if __name__ == "__main__":
    unittest.main()
