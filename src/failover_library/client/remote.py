# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
OpenAI-compatible completion client.

Performs a single chat completion call with one API key. Retries and key
rotation are not handled here; that is FailoverInvoker's job.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.constants import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
)
from ..core.errors import (
    StreamedAPIError,
    TransportError,
    classify_http_error,
    mask_credential,
)
from ..core.interfaces import ChunkCallback, MessageList, PromptInput

lib_logger = logging.getLogger("failover_library")


class HttpModelClient:
    """
    Chat completion client for one endpoint, key and model.

    Usage:
        client = HttpModelClient(
            endpoint_url="https://api.example.com/v1",
            credential="sk-...",
            model_name="gpt-4o-mini",
            system_prompt="You are helpful.",
        )
        text = await client.call("Hello")
    """

    def __init__(
        self,
        endpoint_url: str,
        credential: str,
        model_name: str,
        system_prompt: str = "",
        temperature: Optional[float] = DEFAULT_TEMPERATURE,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            endpoint_url: Base URL (e.g. https://api.example.com/v1)
            credential: API key sent as a Bearer token
            model_name: Model id
            system_prompt: Prepended as a system message for plain-text prompts
            temperature: Sampling temperature
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.endpoint_url = endpoint_url
        self.credential = credential
        self.model_name = model_name
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    @property
    def completions_url(self) -> str:
        base = self.endpoint_url.rstrip("/")
        if base.endswith(CHAT_COMPLETIONS_PATH):
            return base
        return base + CHAT_COMPLETIONS_PATH

    def _build_messages(self, prompt: PromptInput) -> MessageList:
        if isinstance(prompt, list):
            return prompt
        messages: List[Dict[str, Any]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _build_payload(self, prompt: PromptInput, stream: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model_name,
            "messages": self._build_messages(prompt),
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if stream:
            payload["stream"] = True
        return payload

    async def call(
        self, prompt: PromptInput, on_chunk: Optional[ChunkCallback] = None
    ) -> str:
        """
        Perform one completion call.

        Args:
            prompt: User text or a full message list
            on_chunk: If given, the response is streamed and each text delta
                is passed to it as it arrives

        Returns:
            The complete response text

        Raises:
            CredentialInvalidError: The key was rejected (401/403)
            TransportError: Network failure, other HTTP error, or empty response
        """
        stream = on_chunk is not None
        payload = self._build_payload(prompt, stream)
        headers = {
            "Authorization": f"Bearer {self.credential}",
            "Content-Type": "application/json",
        }
        lib_logger.debug(
            f"Calling {self.completions_url} with key {mask_credential(self.credential)} "
            f"(model={self.model_name}, stream={stream})"
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                if not stream:
                    response = await client.post(
                        self.completions_url, json=payload, headers=headers
                    )
                    if not response.is_success:
                        raise classify_http_error(response.status_code, response.text)
                    text = self._extract_content(response)
                else:
                    async with client.stream(
                        "POST", self.completions_url, json=payload, headers=headers
                    ) as response:
                        if not response.is_success:
                            body = (await response.aread()).decode(
                                "utf-8", errors="replace"
                            )
                            raise classify_http_error(response.status_code, body)
                        text = await self._consume_stream(response, on_chunk)
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e

        if not text:
            raise TransportError("Empty response from model")
        return text

    @staticmethod
    def _extract_content(response: httpx.Response) -> str:
        """Pull choices[0].message.content out of a non-streaming response."""
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response: {e}") from e

        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise TransportError(message or "API returned an error")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise TransportError("Response did not contain a completion")
        return content or ""

    @staticmethod
    async def _consume_stream(
        response: httpx.Response, on_chunk: ChunkCallback
    ) -> str:
        """Read an SSE stream, forwarding each text delta to on_chunk."""
        parts: List[str] = []
        async for line in response.aiter_lines():
            line = line.strip()
            if not line.startswith("data:"):
                continue
            data = line[len("data:") :].strip()
            if data == "[DONE]":
                break
            try:
                chunk = json.loads(data)
            except json.JSONDecodeError:
                lib_logger.debug(f"Skipping malformed stream line: {data[:200]}")
                continue

            if not isinstance(chunk, dict):
                continue
            if chunk.get("error"):
                error = chunk["error"]
                message = (
                    error.get("message") if isinstance(error, dict) else str(error)
                )
                raise StreamedAPIError(message or "Error received in stream", data=chunk)

            choices = chunk.get("choices") or []
            if not choices:
                continue
            content = (choices[0].get("delta") or {}).get("content")
            if content:
                parts.append(content)
                on_chunk(content)
        return "".join(parts)
