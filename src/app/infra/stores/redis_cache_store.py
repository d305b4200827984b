"""Cache local em Redis (opcional, ex: instalação compartilhada)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.infra.stores._json_blob import decode_blob, encode_blob
from app.protocols.cache_store import CacheStoreProtocol, CacheWriteError

if TYPE_CHECKING:
    from redis import Redis

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "qr_contacts:"


class RedisCacheStore(CacheStoreProtocol):
    """Store de cache usando Redis (cliente síncrono).

    Args:
        redis_client: Cliente Redis síncrono
        key_prefix: Namespace das chaves
    """

    def __init__(self, redis_client: Redis[bytes], key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._redis = redis_client
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def read(self, key: str) -> Any | None:
        try:
            data = self._redis.get(self._key(key))
        except Exception as exc:
            logger.warning(
                "cache_read_failed",
                extra={"key": key, "backend": "redis", "error_type": type(exc).__name__},
            )
            return None
        return decode_blob(key, data, backend="redis")

    def write(self, key: str, value: Any) -> None:
        payload = encode_blob(key, value)
        try:
            self._redis.set(self._key(key), payload)
        except Exception as exc:
            raise CacheWriteError(key, exc) from exc

    def clear(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except Exception as exc:
            raise CacheWriteError(key, exc) from exc
