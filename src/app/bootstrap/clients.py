"""Factories de clientes externos — Redis e Firestore."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from redis import Redis

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Redis Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_redis_client(redis_url: str) -> Redis[bytes]:
    """Cria cliente Redis síncrono (singleton por URL).

    Raises:
        ValueError: Se a URL estiver vazia
    """
    import redis

    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: Redis[bytes] = redis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
        retry_on_timeout=True,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("redis_client_created", extra={"host": host})
    return client


# ──────────────────────────────────────────────────────────────────────────────
# Firestore Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_firestore_client(project_id: str) -> FirestoreClient:
    """Cria cliente Firestore (singleton por projeto)."""
    from google.cloud import firestore

    client = firestore.Client(project=project_id or None)
    logger.info("firestore_client_created", extra={"project": project_id})
    return client
