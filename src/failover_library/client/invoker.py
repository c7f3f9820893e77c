# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Round-robin failover across API keys.

FailoverInvoker tries the configured keys one after another until a call
succeeds, the user aborts, or the attempt budget runs out. The rotation
cursor lives on the invoker instance and survives across calls, so
repeated invocations spread load over all keys instead of always
starting with the first one.
"""

import asyncio
import logging
from typing import Optional

from ..collaborators import LoggingNotifier
from ..core.constants import DEFAULT_TEMPERATURE
from ..core.errors import (
    AggregateFailure,
    ConfigurationError,
    error_message,
    mask_credential,
)
from ..core.interfaces import (
    ChunkCallback,
    ClientFactory,
    Notifier,
    PromptInput,
    SettingsStore,
)
from ..core.types import Failure, InvocationOutcome, Success, Suspended
from ..credentials import CredentialSet
from .gate import CancellationGate, CancellationToken
from .remote import HttpModelClient

lib_logger = logging.getLogger("failover_library")


class FailoverInvoker:
    """
    Call the remote model with automatic failover across keys.

    Usage:
        invoker = FailoverInvoker(settings)
        outcome = await invoker.invoke("You are helpful.", "Summarize this")
        if isinstance(outcome, Success):
            print(outcome.text)
    """

    def __init__(
        self,
        settings: SettingsStore,
        credentials: Optional[CredentialSet] = None,
        gate: Optional[CancellationGate] = None,
        notifier: Optional[Notifier] = None,
        client_factory: Optional[ClientFactory] = None,
        max_attempts: Optional[int] = None,
        cursor: int = 0,
    ):
        """
        Args:
            settings: Source of URL, model name, key string and temperature
            credentials: Key reader; built from settings if omitted
            gate: Cancellation prompt; shared gates keep one prompt visible
            notifier: Receives progress and error notifications
            client_factory: Builds a RemoteModelClient per attempt
            max_attempts: Attempt cap. None tries every key once; larger
                values are clamped to the number of keys.
            cursor: Initial rotation cursor

        Raises:
            ConfigurationError: If max_attempts is less than 1
        """
        if max_attempts is None:
            max_attempts = getattr(settings, "max_attempts", None)
        if max_attempts is not None and max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be at least 1, got {max_attempts}"
            )

        self._settings = settings
        self._notifier = notifier or LoggingNotifier()
        self._credentials = credentials or CredentialSet(settings, self._notifier)
        self._gate = gate or CancellationGate()
        self._client_factory = client_factory or HttpModelClient
        self._max_attempts = max_attempts
        self._cursor = cursor

    @property
    def cursor(self) -> int:
        """Rotation cursor: incremented once per attempt, never reset here."""
        return self._cursor

    @cursor.setter
    def cursor(self, value: int) -> None:
        self._cursor = value

    @property
    def max_attempts(self) -> Optional[int]:
        return self._max_attempts

    def _attempt_count(self, total_keys: int) -> int:
        if self._max_attempts is None:
            return total_keys
        return min(self._max_attempts, total_keys)

    async def invoke(
        self,
        system_prompt: PromptInput,
        user_prompt: str,
        *,
        silent: bool = False,
        stream: bool = False,
        on_chunk: Optional[ChunkCallback] = None,
    ) -> InvocationOutcome:
        """
        Run the failover loop.

        Args:
            system_prompt: System prompt text, or a full message list. A
                message list is sent as-is and user_prompt is ignored.
            user_prompt: User prompt text
            silent: Do not show the cancellation prompt
            stream: Forward partial text to on_chunk as it arrives
            on_chunk: Streaming callback

        Returns:
            Success, Suspended or Failure

        Raises:
            ConfigurationError: URL, model or keys missing (no attempt made)
        """
        api_url = self._settings.api_url
        model_name = self._settings.model_name
        if not api_url or not model_name:
            self._notifier.error(
                "Please complete the custom API configuration (URL and model)"
            )
            raise ConfigurationError("Custom API URL and model name are required")

        keys = self._credentials.get()
        if keys is None:
            self._notifier.error("API key is missing, please check your API key settings")
            raise ConfigurationError("No API key configured")
        if not keys:
            self._notifier.error("No valid API key found, please check your input")
            raise ConfigurationError("No valid API key found")

        total_keys = len(keys)
        attempts = self._attempt_count(total_keys)
        temperature = self._settings.temperature
        if temperature is None:
            temperature = DEFAULT_TEMPERATURE

        if isinstance(system_prompt, list):
            prompt: PromptInput = system_prompt
            client_system_prompt = ""
        else:
            prompt = user_prompt
            client_system_prompt = system_prompt
        callback = on_chunk if stream else None

        token = CancellationToken()
        token.watch(self._gate.open(is_primary=False, silent=silent))

        last_error: Optional[BaseException] = None
        try:
            for _ in range(attempts):
                # Let a pending abort decision land before starting the next call
                await asyncio.sleep(0)
                if token.cancelled:
                    break

                key_index = self._cursor % total_keys
                api_key = keys[key_index]
                self._cursor += 1

                lib_logger.debug(
                    f"Attempt with key index {key_index} ({mask_credential(api_key)})"
                )
                self._gate.update_text(
                    f"Trying custom API key {key_index + 1}/{total_keys}..."
                )

                try:
                    client = self._client_factory(
                        endpoint_url=api_url,
                        credential=api_key,
                        model_name=model_name,
                        system_prompt=client_system_prompt,
                        temperature=temperature,
                    )
                    response = await client.call(prompt, callback)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    last_error = e
                    lib_logger.warning(
                        f"Call with key index {key_index} ({mask_credential(api_key)}) failed: {e}"
                    )
                    self._notifier.error(
                        f"Call with key #{key_index + 1} failed: {error_message(e)}"
                    )
                    continue

                lib_logger.info(f"Custom API call succeeded with key index {key_index}")
                return Success(response)
        finally:
            self._gate.close()
            token.stop()

        if token.cancelled:
            self._notifier.warning("Operation aborted by user.")
            return Suspended()

        failure = AggregateFailure(attempts, last_error)
        self._notifier.error(str(failure))
        lib_logger.error(f"All API call attempts failed: {failure}")
        return Failure(message=str(failure), attempts=attempts, last_error=last_error)
