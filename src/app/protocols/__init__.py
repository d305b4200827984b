"""Protocolos e contratos do core da aplicação."""

from .cache_store import CacheStoreProtocol, CacheWriteError
from .remote_sync import (
    REMOTE_ERROR,
    REMOTE_NOT_FOUND,
    REMOTE_UNAVAILABLE,
    RemoteError,
    RemoteResult,
    RemoteSyncAdapter,
    require_user_id,
)
from .user_repository import UserRepositoryProtocol

__all__ = [
    "REMOTE_ERROR",
    "REMOTE_NOT_FOUND",
    "REMOTE_UNAVAILABLE",
    "CacheStoreProtocol",
    "CacheWriteError",
    "RemoteError",
    "RemoteResult",
    "RemoteSyncAdapter",
    "UserRepositoryProtocol",
    "require_user_id",
]
