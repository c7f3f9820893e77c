# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Cancellation gate for the failover loop.

While a failover loop runs, the user is shown a prompt offering
"Continue in background" or "Abort". The loop never waits for the answer:
a watcher task sets a CancellationToken when the user aborts, and the
loop checks the token before each new attempt. An attempt already in
flight always runs to completion.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..collaborators import BackgroundPromptHandle
from ..core.interfaces import PromptHandle

lib_logger = logging.getLogger("failover_library")

CONTINUE_LABEL = "Continue in background"
ABORT_LABEL = "Abort"

PromptFactory = Callable[[], PromptHandle]


class CancellationToken:
    """
    Single-writer, multi-reader cancellation flag.

    The watcher task is the only writer; the failover loop reads
    `cancelled` between attempts.
    """

    def __init__(self):
        self._cancelled = False
        self._watcher: Optional["asyncio.Task[None]"] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def watch(self, decision: Awaitable[bool]) -> "asyncio.Task[None]":
        """
        Start a background task that cancels this token if decision
        resolves True. Does not wait for it.
        """

        async def _wait() -> None:
            try:
                abort = await decision
            except asyncio.CancelledError:
                raise
            except Exception as e:
                lib_logger.warning(f"Cancellation prompt failed, continuing: {e}")
                return
            if abort:
                lib_logger.debug("Abort requested by user")
                self.cancel()

        self._watcher = asyncio.ensure_future(_wait())
        return self._watcher

    def stop(self) -> None:
        """Stop watching. The cancelled flag keeps its current value."""
        if self._watcher is not None and not self._watcher.done():
            self._watcher.cancel()
        self._watcher = None


class CancellationGate:
    """
    Shows the "continue in background / abort" prompt.

    At most one prompt is visible per gate: opening a new one closes the
    previous one first. Closing a prompt never changes its answer.

    Usage:
        gate = CancellationGate(prompt_factory=MyPopup)
        token = CancellationToken()
        token.watch(gate.open(is_primary=False, silent=False))
    """

    def __init__(self, prompt_factory: Optional[PromptFactory] = None):
        """
        Args:
            prompt_factory: Creates a new PromptHandle each time the gate
                opens. Defaults to a headless prompt that never resolves
                unless resolve() is called on it.
        """
        self._prompt_factory = prompt_factory or BackgroundPromptHandle
        self._current: Optional[PromptHandle] = None

    @property
    def current(self) -> Optional[PromptHandle]:
        """The visible prompt, if any."""
        return self._current

    def open(self, is_primary: bool = True, silent: bool = False) -> Awaitable[bool]:
        """
        Open the gate.

        Args:
            is_primary: Selects the message (main API vs custom API)
            silent: Skip the prompt and answer "continue in background"

        Returns:
            Awaitable resolving True for abort, False for continue
        """
        if silent:
            return self._resolved(False)

        self.close()
        handle = self._prompt_factory()
        self._current = handle
        message = (
            "Regenerating tables with the main API..."
            if is_primary
            else "Regenerating tables with the custom API..."
        )
        shown = handle.show(message, CONTINUE_LABEL, ABORT_LABEL)
        return self._decide(handle, shown)

    def update_text(self, text: str) -> None:
        """Show progress text on the visible prompt."""
        if self._current is not None:
            self._current.text = text

    def close(self) -> None:
        """Close the visible prompt, if any."""
        if self._current is not None:
            self._current.close()
            self._current = None

    async def _decide(self, handle: PromptHandle, shown: Awaitable[bool]) -> bool:
        try:
            return bool(await shown)
        finally:
            handle.close()
            if self._current is handle:
                self._current = None

    @staticmethod
    async def _resolved(value: bool) -> bool:
        return value
