"""Adapter remoto sobre Google Cloud Firestore.

Uma collection por tipo de registro. Contatos usam o id do contato
como document id e carregam `user_id`; perfil e configurações usam o
próprio `user_id` como document id. O SDK síncrono roda em
`asyncio.to_thread` para não bloquear o event loop.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.infra.remote._row_mapping import (
    contact_to_row,
    profile_to_row,
    row_to_contact,
    row_to_profile,
    row_to_settings,
    settings_to_row,
    stamp,
)
from app.observability.metrics import record_latency
from app.protocols.remote_sync import (
    REMOTE_ERROR,
    REMOTE_NOT_FOUND,
    RemoteResult,
    RemoteSyncAdapter,
    require_user_id,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.contact import ContactRecord
    from app.domain.display_settings import DisplaySettings
    from app.domain.profile import ProfileRecord

logger = logging.getLogger(__name__)

INVALID_ROW = "invalid_row"


class FirestoreSyncAdapter(RemoteSyncAdapter):
    """Espelho remoto em Firestore.

    Args:
        firestore_client: Cliente Firestore síncrono
        contacts_collection: Collection de contatos
        profiles_collection: Collection de perfis
        qr_settings_collection: Collection de configurações do cartão
        timeout_seconds: Timeout por chamada ao Firestore
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        *,
        contacts_collection: str = "contacts",
        profiles_collection: str = "profiles",
        qr_settings_collection: str = "qr_settings",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._db = firestore_client
        self._contacts = contacts_collection
        self._profiles = profiles_collection
        self._qr_settings = qr_settings_collection
        self._timeout = timeout_seconds

    @property
    def available(self) -> bool:
        return True

    async def _run(
        self,
        operation: str,
        user_id: str,
        func: Callable[..., RemoteResult[Any]],
        *args: Any,
    ) -> RemoteResult[Any]:
        require_user_id(user_id)
        start = time.perf_counter()
        result = await asyncio.to_thread(self._guarded, operation, func, user_id, *args)
        record_latency("firestore_sync", operation, (time.perf_counter() - start) * 1000)
        return result

    def _guarded(
        self,
        operation: str,
        func: Callable[..., RemoteResult[Any]],
        *args: Any,
    ) -> RemoteResult[Any]:
        try:
            return func(*args)
        except ValidationError as exc:
            logger.warning(
                "firestore_invalid_row",
                extra={"operation": operation, "error_count": exc.error_count()},
            )
            return RemoteResult.failure(INVALID_ROW, str(exc))
        except Exception as exc:
            logger.error(
                "firestore_operation_failed",
                extra={
                    "operation": operation,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            return RemoteResult.failure(REMOTE_ERROR, str(exc))

    # ──────────────────────────────────────────────────────────────
    # Contatos
    # ──────────────────────────────────────────────────────────────

    async def fetch_contacts(self, user_id: str) -> RemoteResult[list[ContactRecord]]:
        return await self._run("fetch_contacts", user_id, self._fetch_contacts_sync)

    def _fetch_contacts_sync(self, user_id: str) -> RemoteResult[list[ContactRecord]]:
        from google.cloud.firestore_v1.base_query import FieldFilter

        query = self._db.collection(self._contacts).where(
            filter=FieldFilter("user_id", "==", user_id)
        )
        rows = [doc.to_dict() or {} for doc in query.stream(timeout=self._timeout)]
        # Ordenado aqui para não exigir índice composto no Firestore
        rows.sort(key=lambda row: str(row.get("created_at") or ""), reverse=True)
        return RemoteResult.success([row_to_contact(row) for row in rows])

    async def insert_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        return await self._run("insert_contact", user_id, self._insert_contact_sync, contact)

    def _insert_contact_sync(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        row = stamp(contact_to_row(user_id, contact), created=True)
        self._db.collection(self._contacts).document(contact.id).set(row, timeout=self._timeout)
        logger.debug("firestore_contact_inserted", extra={"contact_id": contact.id})
        return RemoteResult.success()

    async def update_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        return await self._run("update_contact", user_id, self._update_contact_sync, contact)

    def _update_contact_sync(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        ref = self._db.collection(self._contacts).document(contact.id)
        if not self._owned_by(ref, user_id):
            return RemoteResult.failure(REMOTE_NOT_FOUND, "contact not found")
        row = stamp(contact_to_row(user_id, contact), created=False)
        ref.set(row, merge=True, timeout=self._timeout)
        return RemoteResult.success()

    async def delete_contact(self, user_id: str, contact_id: str) -> RemoteResult[None]:
        return await self._run("delete_contact", user_id, self._delete_contact_sync, contact_id)

    def _delete_contact_sync(self, user_id: str, contact_id: str) -> RemoteResult[None]:
        ref = self._db.collection(self._contacts).document(contact_id)
        if not self._owned_by(ref, user_id):
            return RemoteResult.failure(REMOTE_NOT_FOUND, "contact not found")
        ref.delete(timeout=self._timeout)
        return RemoteResult.success()

    def _owned_by(self, ref: Any, user_id: str) -> bool:
        snapshot = ref.get(timeout=self._timeout)
        if not snapshot.exists:
            return False
        return (snapshot.to_dict() or {}).get("user_id") == user_id

    # ──────────────────────────────────────────────────────────────
    # Perfil e configurações do cartão (um documento por usuário)
    # ──────────────────────────────────────────────────────────────

    async def fetch_profile(self, user_id: str) -> RemoteResult[ProfileRecord]:
        return await self._run("fetch_profile", user_id, self._fetch_single_sync, self._profiles)

    async def upsert_profile(self, user_id: str, profile: ProfileRecord) -> RemoteResult[None]:
        row = profile_to_row(user_id, profile)
        return await self._run(
            "upsert_profile", user_id, self._upsert_single_sync, self._profiles, row
        )

    async def fetch_display_settings(self, user_id: str) -> RemoteResult[DisplaySettings]:
        return await self._run(
            "fetch_display_settings", user_id, self._fetch_single_sync, self._qr_settings
        )

    async def upsert_display_settings(
        self, user_id: str, settings: DisplaySettings
    ) -> RemoteResult[None]:
        row = settings_to_row(user_id, settings)
        return await self._run(
            "upsert_display_settings", user_id, self._upsert_single_sync, self._qr_settings, row
        )

    def _fetch_single_sync(self, user_id: str, collection: str) -> RemoteResult[Any]:
        snapshot = self._db.collection(collection).document(user_id).get(timeout=self._timeout)
        if not snapshot.exists:
            return RemoteResult.failure(REMOTE_NOT_FOUND, f"{collection} row not found")
        row = snapshot.to_dict() or {}
        if collection == self._profiles:
            return RemoteResult.success(row_to_profile(row))
        return RemoteResult.success(row_to_settings(row))

    def _upsert_single_sync(
        self, user_id: str, collection: str, row: dict[str, Any]
    ) -> RemoteResult[None]:
        ref = self._db.collection(collection).document(user_id)
        created = not ref.get(timeout=self._timeout).exists
        ref.set(stamp(row, created=created), merge=True, timeout=self._timeout)
        return RemoteResult.success()
