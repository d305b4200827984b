"""Factories de cache, adapter remoto e repositórios.

Backends escolhidos pelas settings (env). Remoto sem configuração
resulta na variante `UnavailableSyncAdapter` (modo só-cache).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_firestore_client, create_redis_client
from app.infra.remote import FirestoreSyncAdapter, MemorySyncAdapter, UnavailableSyncAdapter
from app.infra.stores import (
    FileCacheStore,
    MemoryCacheStore,
    MemoryUserRepository,
    RedisCacheStore,
)
from app.records.workspace import UserWorkspace
from app.services.auth_service import AuthService, SessionPersistence
from config.logging import log_fallback
from config.settings import get_base_settings, get_cache_settings, get_remote_settings

if TYPE_CHECKING:
    from app.protocols.cache_store import CacheStoreProtocol
    from app.protocols.remote_sync import RemoteSyncAdapter
    from app.protocols.user_repository import UserRepositoryProtocol
    from config.settings import BaseSettings, CacheSettings, RemoteSettings

logger = logging.getLogger(__name__)


def create_cache_store(
    settings: CacheSettings | None = None,
    base: BaseSettings | None = None,
) -> CacheStoreProtocol:
    """Cria cache local conforme CACHE_BACKEND."""
    settings = settings or get_cache_settings()
    base = base or get_base_settings()
    backend = settings.backend

    if backend == "file":
        logger.info("cache_store_created", extra={"backend": "file"})
        return FileCacheStore(settings.directory)

    if backend == "redis":
        store = RedisCacheStore(create_redis_client(base.redis_url), settings.key_prefix)
        logger.info("cache_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        if not base.is_development:
            logger.warning(
                "memory_cache_in_non_dev",
                extra={"backend": "memory", "environment": base.environment},
            )
        logger.info("cache_store_created", extra={"backend": "memory"})
        return MemoryCacheStore()

    msg = f"CACHE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_remote_adapter(
    settings: RemoteSettings | None = None,
    base: BaseSettings | None = None,
) -> RemoteSyncAdapter:
    """Cria adapter remoto conforme REMOTE_BACKEND.

    Backend desabilitado ou sem projeto configurado degrada para o
    adapter indisponível (nunca levanta).
    """
    settings = settings or get_remote_settings()
    base = base or get_base_settings()

    if settings.backend == "memory":
        logger.info("remote_adapter_created", extra={"backend": "memory"})
        return MemorySyncAdapter()

    if settings.backend == "firestore" and settings.is_configured(base.gcp_project):
        client = create_firestore_client(settings.effective_project(base.gcp_project))
        logger.info("remote_adapter_created", extra={"backend": "firestore"})
        return FirestoreSyncAdapter(
            client,
            contacts_collection=settings.collection_contacts,
            profiles_collection=settings.collection_profiles,
            qr_settings_collection=settings.collection_qr_settings,
            timeout_seconds=settings.timeout_seconds,
        )

    logger.warning(
        "remote_not_configured",
        extra={"backend": settings.backend, "mode": "cache_only"},
    )
    log_fallback(logger, "remote_adapter", reason="remote_not_configured")
    return UnavailableSyncAdapter()


def create_user_repository() -> UserRepositoryProtocol:
    """Repositório de usuários (memória; ciclo de vida do processo)."""
    return MemoryUserRepository()


def create_auth_service(
    repository: UserRepositoryProtocol,
    cache: CacheStoreProtocol,
) -> AuthService:
    return AuthService(repository, SessionPersistence(cache))


def create_workspace(
    cache: CacheStoreProtocol,
    remote: RemoteSyncAdapter,
    user_id: str | None = None,
) -> UserWorkspace:
    """Cria e ativa o workspace do usuário.

    Requer event loop em execução quando `user_id` é informado
    (a reconciliação roda em background).
    """
    workspace = UserWorkspace(cache, remote)
    workspace.activate(user_id)
    return workspace
