# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Connectivity diagnostics for API keys.

Sends a tiny prompt with each key and reports which keys work. Unlike
FailoverInvoker, keys are tried in list order, every key is tried even
after a success, and no rotation cursor is touched.
"""

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from ..collaborators import LoggingNotifier
from ..core.constants import (
    PROBE_DEFAULT_MODEL,
    PROBE_PROMPT,
    PROBE_SYSTEM_PROMPT,
    PROBE_TEMPERATURE,
    UNKNOWN_ERROR,
)
from ..core.errors import ConfigurationError, error_message, mask_credential
from ..core.interfaces import ClientFactory, ConfirmPrompt, Notifier
from ..core.types import AttemptResult, ProbeMode
from ..credentials import CredentialSet, normalize_keys
from .remote import HttpModelClient

lib_logger = logging.getLogger("failover_library")


class ConnectivityProbe:
    """
    Test API keys against the completion endpoint.

    Usage:
        probe = ConnectivityProbe(credentials=CredentialSet(settings))
        results = await probe.test_all(url, ["sk-a", "sk-b"], "gpt-4o-mini")
    """

    def __init__(
        self,
        credentials: Optional[CredentialSet] = None,
        notifier: Optional[Notifier] = None,
        client_factory: Optional[ClientFactory] = None,
        confirm_prompt: Optional[ConfirmPrompt] = None,
    ):
        """
        Args:
            credentials: Key reader used by run()
            notifier: Receives the summary of a run()
            client_factory: Builds a RemoteModelClient per key
            confirm_prompt: Asks before run() spends tokens
        """
        self._credentials = credentials
        self._notifier = notifier or LoggingNotifier()
        self._client_factory = client_factory or HttpModelClient
        self._confirm_prompt = confirm_prompt

    async def test_all(
        self,
        endpoint_url: Optional[str],
        credentials: Union[str, Sequence[str], None],
        model_name: Optional[str] = None,
    ) -> List[AttemptResult]:
        """
        Call the endpoint once with every key, in list order.

        Missing URL or no usable keys is a configuration problem: it is
        reported and an empty list is returned without any network call.

        Args:
            endpoint_url: Base URL of the completion endpoint
            credentials: Key list, or a raw comma-separated key string
            model_name: Model to call; a cheap default is used if empty

        Returns:
            One AttemptResult per key
        """
        keys = self._normalize(credentials)
        if not endpoint_url or not keys:
            problem = ConfigurationError(
                "API URL is missing" if not endpoint_url else "No usable API key to test"
            )
            lib_logger.error(f"Connectivity probe skipped: {problem}")
            self._notifier.error(str(problem))
            return []

        results: List[AttemptResult] = []
        for index, api_key in enumerate(keys):
            masked = mask_credential(api_key)
            lib_logger.debug(f"Testing API key index {index} ({masked})")
            try:
                client = self._client_factory(
                    endpoint_url=endpoint_url,
                    credential=api_key,
                    model_name=model_name or PROBE_DEFAULT_MODEL,
                    system_prompt=PROBE_SYSTEM_PROMPT,
                    temperature=PROBE_TEMPERATURE,
                )
                response = await client.call(PROBE_PROMPT)
                if not response or not isinstance(response, str):
                    raise ValueError("Invalid or empty response received.")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                message = error_message(e) or UNKNOWN_ERROR
                lib_logger.warning(f"API key index {index} ({masked}) test failed: {message}")
                results.append(
                    AttemptResult(
                        key_index=index, success=False, error=message, masked_key=masked
                    )
                )
                continue

            lib_logger.info(f"API key index {index} ({masked}) test succeeded")
            results.append(AttemptResult(key_index=index, success=True, masked_key=masked))
        return results

    async def run(
        self,
        endpoint_url: Optional[str],
        model_name: Optional[str] = None,
        mode: ProbeMode = ProbeMode.FIRST,
        confirm: bool = True,
    ) -> List[AttemptResult]:
        """
        User-facing diagnostics: read the configured keys, confirm, test
        and report the outcome through the notifier.

        Args:
            endpoint_url: Base URL of the completion endpoint
            model_name: Model to call
            mode: Test only the first key, or all of them
            confirm: Ask through the confirm prompt before sending requests

        Returns:
            The per-key results; empty if nothing was tested
        """
        if not endpoint_url:
            self._notifier.error("Please enter the API URL and API key first.")
            return []

        keys = self._credentials.get() if self._credentials else None
        if keys is None:
            self._notifier.error("API key could not be read or is not set!")
            return []
        if not keys:
            self._notifier.error("No valid API key found.")
            return []

        if confirm and self._confirm_prompt is not None:
            ok_label = "Test first key" if mode == ProbeMode.FIRST else "Test all keys"
            answer = await self._confirm_prompt.confirm(
                f"Found {len(keys)} API key(s).\n"
                "Each test sends one short message (very few tokens). "
                "Mind the cost if your API bills per request.",
                ok_label,
                "Cancel",
            )
            if not answer:
                return []

        keys_to_test = keys[:1] if mode == ProbeMode.FIRST else list(keys)
        self._notifier.info(f"Testing {len(keys_to_test)} API key(s)...")

        try:
            results = await self.test_all(endpoint_url, keys_to_test, model_name)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._notifier.error(f"Error during API test: {error_message(e)}")
            lib_logger.exception("API test error")
            return [
                AttemptResult(
                    key_index=keys.index(api_key),
                    success=False,
                    error=f"Error during test: {error_message(e)}",
                    masked_key=mask_credential(api_key),
                )
                for api_key in keys_to_test
            ]

        self.report(endpoint_url, results)
        return results

    def report(self, endpoint_url: str, results: Sequence[AttemptResult]) -> None:
        """Summarize probe results through the notifier."""
        if not results:
            return
        self._notifier.clear()
        failures = [r for r in results if not r.success]
        successes = len(results) - len(failures)

        for result in failures:
            lib_logger.error(
                f"Key {result.key_index + 1} ({result.masked_key or '?'}) test failed: {result.error}"
            )
        if failures:
            self._notifier.error(
                f"{len(failures)} key(s) failed the test. Check the logs for details."
            )
            self._notifier.error(f"API endpoint: {endpoint_url}")
            self._notifier.error(f"Error details: {failures[0].error or UNKNOWN_ERROR}")
        if successes:
            self._notifier.success(f"{successes} key(s) passed the test!")

    @staticmethod
    def _normalize(credentials: Union[str, Sequence[str], None]) -> List[str]:
        if credentials is None:
            return []
        if isinstance(credentials, str):
            keys, _ = CredentialSet.parse(credentials)
            return keys
        return normalize_keys(credentials)
