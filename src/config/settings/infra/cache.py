"""Settings do cache local (fonte autoritativa de leitura)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

CacheBackend = Literal["memory", "file", "redis"]

_VALID_BACKENDS = ("memory", "file", "redis")


@dataclass(frozen=True)
class CacheSettings:
    """Configurações do cache local.

    Attributes:
        backend: memory (dev/test), file (padrão, durável) ou redis
        directory: Diretório dos blobs JSON quando backend=file
        key_prefix: Namespace das chaves quando backend=redis
    """

    backend: CacheBackend = "file"
    directory: str = ".qr_contacts_cache"
    key_prefix: str = "qr_contacts:"

    def validate(self, redis_url: str = "") -> list[str]:
        """Valida configurações do cache.

        Args:
            redis_url: URL do Redis (obrigatória para backend=redis).

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        if self.backend not in _VALID_BACKENDS:
            errors.append(f"CACHE_BACKEND inválido: {self.backend}")
        if self.backend == "file" and not self.directory:
            errors.append("CACHE_DIR deve estar configurado para backend=file")
        if self.backend == "redis" and not redis_url:
            errors.append("REDIS_URL deve estar configurado para backend=redis")
        return errors


def _load_cache_from_env() -> CacheSettings:
    return CacheSettings(
        backend=os.getenv("CACHE_BACKEND", "file").lower(),  # type: ignore[arg-type]
        directory=os.getenv("CACHE_DIR", ".qr_contacts_cache"),
        key_prefix=os.getenv("CACHE_KEY_PREFIX", "qr_contacts:"),
    )


@lru_cache(maxsize=1)
def get_cache_settings() -> CacheSettings:
    """Retorna instância cacheada de CacheSettings."""
    return _load_cache_from_env()
