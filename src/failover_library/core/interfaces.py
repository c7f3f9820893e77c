# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Collaborator interfaces.

The invocation layer talks to the outside world only through these
protocols: the remote model, the cancellation prompt, user notifications,
the settings store and the UI model catalog.
"""

from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    Union,
)

# A prompt is either plain user text or a full chat message list
MessageList = List[Dict[str, Any]]
PromptInput = Union[str, MessageList]

ChunkCallback = Callable[[str], None]


class RemoteModelClient(Protocol):
    """
    One completion call against the remote endpoint.

    Implementations are constructed with endpoint_url, credential,
    model_name, system_prompt and temperature.
    """

    async def call(
        self, prompt: PromptInput, on_chunk: Optional[ChunkCallback] = None
    ) -> str:
        """Return the final text, streaming partial text to on_chunk if given."""
        ...


# Builds a RemoteModelClient from the keyword arguments listed above
ClientFactory = Callable[..., RemoteModelClient]


class PromptHandle(Protocol):
    """A visible two-button prompt."""

    text: str

    def show(
        self, message: str, continue_label: str, abort_label: str
    ) -> Awaitable[bool]:
        """Show the prompt; resolves False for continue, True for abort."""
        ...

    def close(self) -> None: ...


class ConfirmPrompt(Protocol):
    """Async yes/no dialog. Returns None when dismissed."""

    async def confirm(
        self, message: str, ok_label: str, cancel_label: str
    ) -> Optional[bool]: ...


class Notifier(Protocol):
    """User-facing notifications (toasts)."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def clear(self) -> None: ...


class SettingsStore(Protocol):
    """Where the custom API configuration lives."""

    api_url: Optional[str]
    api_key: Optional[str]
    model_name: Optional[str]
    temperature: Optional[float]


class ModelCatalog(Protocol):
    """The model list shown to the user."""

    def replace(self, model_ids: Sequence[str]) -> None: ...

    def select(self, model_id: str) -> None: ...

    def reset(self, placeholder: str) -> None: ...


__all__ = [
    "MessageList",
    "PromptInput",
    "ChunkCallback",
    "RemoteModelClient",
    "ClientFactory",
    "PromptHandle",
    "ConfirmPrompt",
    "Notifier",
    "SettingsStore",
    "ModelCatalog",
]
