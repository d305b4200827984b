"""Agregador de settings de infraestrutura (cache local e store remoto)."""

from __future__ import annotations

from config.settings.infra.cache import (
    CacheBackend,
    CacheSettings,
    get_cache_settings,
)
from config.settings.infra.remote import (
    RemoteBackend,
    RemoteSettings,
    get_remote_settings,
)

__all__ = [
    "CacheBackend",
    "CacheSettings",
    "RemoteBackend",
    "RemoteSettings",
    "get_cache_settings",
    "get_remote_settings",
]
