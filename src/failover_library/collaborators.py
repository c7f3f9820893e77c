# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Default in-process collaborators.

Headless implementations of the collaborator interfaces, used when no UI
is attached and in tests.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

lib_logger = logging.getLogger("failover_library")


class LoggingNotifier:
    """Notifier that forwards user notifications to the library logger."""

    def info(self, message: str) -> None:
        lib_logger.info(message)

    def success(self, message: str) -> None:
        lib_logger.info(message)

    def warning(self, message: str) -> None:
        lib_logger.warning(message)

    def error(self, message: str) -> None:
        lib_logger.error(message)

    def clear(self) -> None:
        pass


class MemoryModelCatalog:
    """
    Model catalog held in memory.

    Attributes:
        models: Model ids currently listed
        selected: Currently selected model id, if any
    """

    def __init__(self):
        self.models: List[str] = []
        self.selected: Optional[str] = None
        self.placeholder: Optional[str] = None
        self.replace_count = 0

    def replace(self, model_ids: Sequence[str]) -> None:
        self.models = list(model_ids)
        self.selected = None
        self.placeholder = None
        self.replace_count += 1

    def select(self, model_id: str) -> None:
        if model_id in self.models:
            self.selected = model_id

    def reset(self, placeholder: str) -> None:
        self.models = []
        self.selected = None
        self.placeholder = placeholder


class AutoConfirmPrompt:
    """ConfirmPrompt that always gives the same answer without asking."""

    def __init__(self, answer: Optional[bool] = True):
        self.answer = answer
        self.messages: List[str] = []

    async def confirm(
        self, message: str, ok_label: str, cancel_label: str
    ) -> Optional[bool]:
        self.messages.append(message)
        return self.answer


class BackgroundPromptHandle:
    """
    Prompt that stays pending until resolve() is called.

    Stands in for a UI popup: show() returns a future that resolves False
    for "continue in background" or True for "abort". Closing the handle
    hides it but leaves the future untouched.
    """

    def __init__(self):
        self.text = ""
        self.message: Optional[str] = None
        self.closed = False
        self._future: Optional["asyncio.Future[bool]"] = None

    def show(
        self, message: str, continue_label: str, abort_label: str
    ) -> "asyncio.Future[bool]":
        self.message = message
        self.text = message
        self.closed = False
        self._future = asyncio.get_running_loop().create_future()
        return self._future

    def resolve(self, abort: bool) -> None:
        """Simulate the user pressing abort (True) or continue (False)."""
        if self._future is not None and not self._future.done():
            self._future.set_result(abort)

    def close(self) -> None:
        self.closed = True
