"""Serialização dos blobs JSON do cache local."""

from __future__ import annotations

import json
import logging
from typing import Any

from app.protocols.cache_store import CacheWriteError
from config.logging import log_fallback

logger = logging.getLogger(__name__)


def encode_blob(key: str, value: Any) -> str:
    """Serializa valor para texto JSON.

    Raises:
        CacheWriteError: Se o valor não for serializável.
    """
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise CacheWriteError(key, exc) from exc


def decode_blob(key: str, data: str | bytes | None, backend: str) -> Any | None:
    """Desserializa texto JSON; corrompido degrada para None (logado)."""
    if data is None:
        return None
    try:
        text = data if isinstance(data, str) else data.decode("utf-8")
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning(
            "cache_corrupt",
            extra={"key": key, "backend": backend, "error_type": type(exc).__name__},
        )
        log_fallback(logger, "cache_store", reason="cache_corrupt")
        return None
