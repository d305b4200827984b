"""Adapters de sincronização com o banco remoto.

Módulos disponíveis:
    - firestore_sync_adapter: Firestore (produção)
    - memory_sync_adapter: remoto em memória (dev/testes)
    - unavailable_sync_adapter: variante sem backend configurado
"""

from __future__ import annotations

from app.infra.remote.firestore_sync_adapter import FirestoreSyncAdapter
from app.infra.remote.memory_sync_adapter import MemorySyncAdapter
from app.infra.remote.unavailable_sync_adapter import (
    UNAVAILABLE_MESSAGE,
    UnavailableSyncAdapter,
)

__all__ = [
    "UNAVAILABLE_MESSAGE",
    "FirestoreSyncAdapter",
    "MemorySyncAdapter",
    "UnavailableSyncAdapter",
]
