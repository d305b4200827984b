"""Cache local em memória — apenas para desenvolvimento e testes.

Guarda o texto JSON (não o objeto) para que corrupção e round-trip
se comportem como nos stores duráveis.
"""

from __future__ import annotations

from typing import Any

from app.infra.stores._json_blob import decode_blob, encode_blob
from app.protocols.cache_store import CacheStoreProtocol


class MemoryCacheStore(CacheStoreProtocol):
    """Store de cache em memória — sem persistência entre reinícios."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def read(self, key: str) -> Any | None:
        return decode_blob(key, self._blobs.get(key), backend="memory")

    def write(self, key: str, value: Any) -> None:
        self._blobs[key] = encode_blob(key, value)

    def clear(self, key: str) -> None:
        self._blobs.pop(key, None)

    def put_raw(self, key: str, text: str) -> None:
        """Grava texto bruto (apenas para testes de corrupção)."""
        self._blobs[key] = text

    def raw(self, key: str) -> str | None:
        """Retorna texto bruto armazenado (apenas para testes)."""
        return self._blobs.get(key)
