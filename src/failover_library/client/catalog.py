# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Model catalog refresh.

Lists the models available at the endpoint and replaces the UI model
catalog with them. The first key that returns a non-empty list wins and
fills the catalog; the remaining keys are still queried so that every
invalid key is reported.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from ..collaborators import LoggingNotifier
from ..core.constants import CATALOG_PLACEHOLDER, DEFAULT_MODELS_TIMEOUT, MODELS_PATH
from ..core.errors import (
    ConfigurationError,
    TransportError,
    classify_http_error,
    error_message,
    mask_credential,
)
from ..core.interfaces import ModelCatalog, Notifier, SettingsStore
from ..core.types import AttemptResult, CatalogRefreshResult
from ..credentials import CredentialSet, normalize_keys

lib_logger = logging.getLogger("failover_library")


def models_url(endpoint_url: str) -> str:
    """
    Build the models-listing URL for an endpoint.

    One trailing slash is stripped from the path before appending /models.

    Raises:
        ConfigurationError: If the URL is not an absolute http(s) URL
    """
    try:
        url = httpx.URL(endpoint_url.strip())
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"Invalid API URL: {endpoint_url}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Invalid API URL: {endpoint_url}")

    path = url.path
    if path.endswith("/"):
        path = path[:-1]
    return str(url.copy_with(path=path + MODELS_PATH))


class ModelCatalogSync:
    """
    Refresh the model catalog using the configured keys.

    Usage:
        sync = ModelCatalogSync(settings, MemoryModelCatalog())
        result = await sync.refresh()
    """

    def __init__(
        self,
        settings: SettingsStore,
        catalog: ModelCatalog,
        credentials: Optional[CredentialSet] = None,
        notifier: Optional[Notifier] = None,
        timeout: float = DEFAULT_MODELS_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Source of URL, key string and the configured model
            catalog: Catalog to replace on success
            credentials: Key reader; built from settings if omitted
            notifier: Receives the refresh summary
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._settings = settings
        self._catalog = catalog
        self._notifier = notifier or LoggingNotifier()
        self._credentials = credentials or CredentialSet(settings, self._notifier)
        self._timeout = timeout
        self._transport = transport

    async def refresh(
        self,
        endpoint_url: Optional[str] = None,
        credentials: Optional[Sequence[str]] = None,
    ) -> CatalogRefreshResult:
        """
        Query the models endpoint with each key and refresh the catalog.

        Args:
            endpoint_url: Base URL; defaults to the configured URL
            credentials: Keys to use; default to the configured keys

        Returns:
            CatalogRefreshResult with the model count and every failed key

        Raises:
            ConfigurationError: URL missing or invalid, or no usable key
        """
        endpoint_url = (endpoint_url or self._settings.api_url or "").strip()
        keys = list(credentials) if credentials is not None else self._credentials.get()

        if keys is None:
            self._notifier.error("API key is missing, please check your API key settings!")
            raise ConfigurationError("No API key configured")
        if not endpoint_url:
            self._notifier.error("Please enter the API URL")
            raise ConfigurationError("API URL is required")
        keys = normalize_keys(keys)
        if not keys:
            self._notifier.error("No valid API key found, please check your input.")
            raise ConfigurationError("No valid API key found")

        try:
            url = models_url(endpoint_url)
        except ConfigurationError:
            self._notifier.error(f"Invalid API URL: {endpoint_url}")
            raise

        model_ids: Optional[List[str]] = None
        invalid_keys: List[AttemptResult] = []

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            for index, api_key in enumerate(keys):
                try:
                    ids = await self._list_models(client, url, api_key)
                    if model_ids is None:
                        if not ids:
                            raise TransportError("Request succeeded but returned no models")
                        model_ids = ids
                        lib_logger.info(
                            f"Fetched {len(ids)} models with key index {index} "
                            f"({mask_credential(api_key)})"
                        )
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    message = error_message(e)
                    lib_logger.warning(
                        f"Fetching models with key #{index + 1} ({mask_credential(api_key)}) failed: {message}"
                    )
                    invalid_keys.append(
                        AttemptResult(
                            key_index=index,
                            success=False,
                            error=message,
                            masked_key=mask_credential(api_key),
                        )
                    )

        if model_ids is not None:
            self._catalog.replace(model_ids)
            configured_model = self._settings.model_name
            if configured_model and configured_model in model_ids:
                self._catalog.select(configured_model)
            self._notifier.success(
                f"Fetched {len(model_ids)} models and updated the list "
                f"(checked {len(keys)} keys)"
            )
        else:
            self._catalog.reset(CATALOG_PLACEHOLDER)
            self._notifier.error("Could not fetch the model list with any of the API keys")

        if invalid_keys:
            details = "\n".join(
                f"Key #{r.key_index + 1} ({r.masked_key}) is invalid: {r.error}"
                for r in invalid_keys
            )
            self._notifier.error(f"The following API keys are invalid:\n{details}")

        return CatalogRefreshResult(
            success=model_ids is not None,
            model_count=len(model_ids) if model_ids is not None else 0,
            invalid_keys=invalid_keys,
            checked_keys=len(keys),
        )

    @staticmethod
    async def _list_models(
        client: httpx.AsyncClient, url: str, api_key: str
    ) -> List[str]:
        """GET the models list with one key and return the model ids."""
        try:
            response = await client.get(
                url,
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e

        if not response.is_success:
            raise classify_http_error(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response: {e}") from e
        models = data.get("data") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return []
        return [m["id"] for m in models if isinstance(m, dict) and m.get("id")]
