"""Agregador de settings do qr_contacts.

Re-exporta as settings de cada domínio.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.infra import (
    CacheBackend,
    CacheSettings,
    RemoteBackend,
    RemoteSettings,
    get_cache_settings,
    get_remote_settings,
)

__all__ = [
    "BaseSettings",
    "CacheBackend",
    "CacheSettings",
    "Environment",
    "RemoteBackend",
    "RemoteSettings",
    "get_base_settings",
    "get_cache_settings",
    "get_remote_settings",
]
