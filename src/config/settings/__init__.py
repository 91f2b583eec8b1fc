"""Agregador de settings do github-webhook-filter.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Relay settings
from config.settings.relay import (
    DEFAULT_ENV_FILE,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_USER_AGENT,
    RelaySettings,
    get_relay_settings,
)

__all__ = [
    # Constants
    "DEFAULT_ENV_FILE",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_SERVICE_NAME",
    "DEFAULT_USER_AGENT",
    # Base
    "BaseSettings",
    "Environment",
    # Relay
    "RelaySettings",
    "get_base_settings",
    "get_relay_settings",
]
