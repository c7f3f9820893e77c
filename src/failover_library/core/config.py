# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Centralized configuration loader for the failover library.

This module provides a ConfigLoader class that builds ApiSettings from:
1. System defaults (from config/defaults.py)
2. Explicit values passed by the caller
3. Environment variables (ALWAYS override explicit values)
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TEMPERATURE,
    ENV_API_KEY,
    ENV_API_URL,
    ENV_MAX_ATTEMPTS,
    ENV_MODEL_NAME,
    ENV_TEMPERATURE,
)

lib_logger = logging.getLogger("failover_library")


@dataclass
class ApiSettings:
    """
    Custom API configuration.

    api_key holds the raw comma-separated key string exactly as entered;
    it is normalized by CredentialSet when read.
    """

    api_url: Optional[str] = None
    api_key: Optional[str] = None
    model_name: Optional[str] = None
    temperature: Optional[float] = DEFAULT_TEMPERATURE
    max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS

    def is_complete(self) -> bool:
        """True if URL, model and key string are all set."""
        return bool(self.api_url and self.model_name and self.api_key)


class ConfigLoader:
    """
    Centralized configuration loader.

    Usage:
        loader = ConfigLoader()
        settings = loader.load(api_url="https://api.example.com/v1")
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """
        Initialize the ConfigLoader.

        Args:
            environ: Mapping to read overrides from. Defaults to os.environ.
        """
        self._environ = environ

    def load(self, **overrides: Any) -> ApiSettings:
        """
        Load settings.

        Configuration is loaded in this order (later overrides earlier):
        1. System defaults
        2. Explicit keyword overrides
        3. Environment variables (ALWAYS win)

        Returns:
            ApiSettings instance
        """
        settings = ApiSettings()
        for name, value in overrides.items():
            if not hasattr(settings, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(settings, name, value)

        return self._apply_env_overrides(settings)

    # =========================================================================
    # INTERNAL METHODS
    # =========================================================================

    def _get(self, key: str) -> Optional[str]:
        if self._environ is not None:
            return self._environ.get(key)
        return os.getenv(key)

    def _apply_env_overrides(self, settings: ApiSettings) -> ApiSettings:
        """Apply environment variable overrides to settings."""
        env_url = self._get(ENV_API_URL)
        if env_url:
            settings.api_url = env_url.strip()

        env_key = self._get(ENV_API_KEY)
        if env_key:
            settings.api_key = env_key

        env_model = self._get(ENV_MODEL_NAME)
        if env_model:
            settings.model_name = env_model.strip()

        env_temperature = self._get(ENV_TEMPERATURE)
        if env_temperature:
            try:
                settings.temperature = float(env_temperature)
            except ValueError:
                lib_logger.warning(
                    f"Ignoring invalid {ENV_TEMPERATURE}: {env_temperature!r}"
                )

        env_attempts = self._get(ENV_MAX_ATTEMPTS)
        if env_attempts:
            try:
                settings.max_attempts = int(env_attempts)
            except ValueError:
                lib_logger.warning(
                    f"Ignoring invalid {ENV_MAX_ATTEMPTS}: {env_attempts!r}"
                )

        return settings
