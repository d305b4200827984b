"""Cache local em arquivos JSON — backend durável padrão.

Um arquivo por chave (`<dir>/<key>.json`). A gravação usa arquivo
temporário + `os.replace`, então um blob nunca fica parcialmente escrito.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from app.infra.stores._json_blob import decode_blob, encode_blob
from app.protocols.cache_store import CacheStoreProtocol, CacheWriteError

logger = logging.getLogger(__name__)


class FileCacheStore(CacheStoreProtocol):
    """Store de cache em disco.

    Args:
        directory: Diretório dos blobs (criado sob demanda).
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def read(self, key: str) -> Any | None:
        path = self._path(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning(
                "cache_read_failed",
                extra={"key": key, "backend": "file", "error_type": type(exc).__name__},
            )
            return None
        return decode_blob(key, data, backend="file")

    def write(self, key: str, value: Any) -> None:
        text = encode_blob(key, value)
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CacheWriteError(key, exc) from exc
        logger.debug("cache_written", extra={"key": key, "backend": "file"})

    def clear(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise CacheWriteError(key, exc) from exc
