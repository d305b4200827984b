"""Stores — implementações concretas de persistência local.

Módulos disponíveis:
    - memory_cache_store: cache em memória (dev/testes)
    - file_cache_store: cache durável em arquivos JSON (padrão)
    - redis_cache_store: cache em Redis (opcional)
    - memory_user_repository: contas de usuário em memória
"""

from __future__ import annotations

from app.infra.stores.file_cache_store import FileCacheStore
from app.infra.stores.memory_cache_store import MemoryCacheStore
from app.infra.stores.memory_user_repository import MemoryUserRepository
from app.infra.stores.redis_cache_store import RedisCacheStore

__all__ = [
    "FileCacheStore",
    "MemoryCacheStore",
    "MemoryUserRepository",
    "RedisCacheStore",
]
