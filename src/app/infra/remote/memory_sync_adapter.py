"""Banco remoto em memória — desenvolvimento e testes.

Guarda linhas em snake_case (como o remoto real) e permite injetar
falhas por operação para exercitar os modos degradados das facades.
"""

from __future__ import annotations

import itertools
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
from app.protocols.remote_sync import (
    REMOTE_NOT_FOUND,
    RemoteError,
    RemoteResult,
    RemoteSyncAdapter,
    require_user_id,
)

if TYPE_CHECKING:
    from app.domain.contact import ContactRecord
    from app.domain.display_settings import DisplaySettings
    from app.domain.profile import ProfileRecord

INVALID_ROW = "invalid_row"


class MemorySyncAdapter(RemoteSyncAdapter):
    """Adapter remoto em memória com injeção de falhas."""

    def __init__(self) -> None:
        self.contacts: dict[str, dict[str, Any]] = {}
        self.profiles: dict[str, dict[str, Any]] = {}
        self.qr_settings: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self._failures: dict[str, RemoteError] = {}
        self._sequence = itertools.count()

    @property
    def available(self) -> bool:
        return True

    # ──────────────────────────────────────────────────────────────
    # Injeção de falhas (testes)
    # ──────────────────────────────────────────────────────────────

    def fail_with(
        self,
        code: str,
        message: str = "simulated failure",
        operations: tuple[str, ...] | None = None,
    ) -> None:
        """Faz as operações indicadas (ou todas) retornarem erro."""
        error = RemoteError(code=code, message=message)
        for operation in operations or ("*",):
            self._failures[operation] = error

    def recover(self) -> None:
        self._failures.clear()

    def _begin(self, operation: str, user_id: str) -> RemoteError | None:
        require_user_id(user_id)
        self.calls.append((operation, user_id))
        return self._failures.get(operation) or self._failures.get("*")

    # ──────────────────────────────────────────────────────────────
    # Contatos
    # ──────────────────────────────────────────────────────────────

    async def fetch_contacts(self, user_id: str) -> RemoteResult[list[ContactRecord]]:
        if error := self._begin("fetch_contacts", user_id):
            return RemoteResult(error=error)
        rows = [row for row in self.contacts.values() if row["user_id"] == user_id]
        rows.sort(key=lambda row: (row["created_at"], row["_seq"]), reverse=True)
        try:
            return RemoteResult.success([row_to_contact(row) for row in rows])
        except ValidationError as exc:
            return RemoteResult.failure(INVALID_ROW, str(exc))

    async def insert_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        if error := self._begin("insert_contact", user_id):
            return RemoteResult(error=error)
        row = stamp(contact_to_row(user_id, contact), created=True)
        row["_seq"] = next(self._sequence)
        self.contacts[contact.id] = row
        return RemoteResult.success()

    async def update_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        if error := self._begin("update_contact", user_id):
            return RemoteResult(error=error)
        existing = self.contacts.get(contact.id)
        if existing is None or existing["user_id"] != user_id:
            return RemoteResult.failure(REMOTE_NOT_FOUND, "contact not found")
        existing.update(stamp(contact_to_row(user_id, contact), created=False))
        return RemoteResult.success()

    async def delete_contact(self, user_id: str, contact_id: str) -> RemoteResult[None]:
        if error := self._begin("delete_contact", user_id):
            return RemoteResult(error=error)
        existing = self.contacts.get(contact_id)
        if existing is None or existing["user_id"] != user_id:
            return RemoteResult.failure(REMOTE_NOT_FOUND, "contact not found")
        del self.contacts[contact_id]
        return RemoteResult.success()

    # ──────────────────────────────────────────────────────────────
    # Perfil e configurações do cartão
    # ──────────────────────────────────────────────────────────────

    async def fetch_profile(self, user_id: str) -> RemoteResult[ProfileRecord]:
        if error := self._begin("fetch_profile", user_id):
            return RemoteResult(error=error)
        row = self.profiles.get(user_id)
        if row is None:
            return RemoteResult.failure(REMOTE_NOT_FOUND, "profile not found")
        try:
            return RemoteResult.success(row_to_profile(row))
        except ValidationError as exc:
            return RemoteResult.failure(INVALID_ROW, str(exc))

    async def upsert_profile(self, user_id: str, profile: ProfileRecord) -> RemoteResult[None]:
        if error := self._begin("upsert_profile", user_id):
            return RemoteResult(error=error)
        _upsert_row(self.profiles, user_id, profile_to_row(user_id, profile))
        return RemoteResult.success()

    async def fetch_display_settings(self, user_id: str) -> RemoteResult[DisplaySettings]:
        if error := self._begin("fetch_display_settings", user_id):
            return RemoteResult(error=error)
        row = self.qr_settings.get(user_id)
        if row is None:
            return RemoteResult.failure(REMOTE_NOT_FOUND, "qr settings not found")
        try:
            return RemoteResult.success(row_to_settings(row))
        except ValidationError as exc:
            return RemoteResult.failure(INVALID_ROW, str(exc))

    async def upsert_display_settings(
        self, user_id: str, settings: DisplaySettings
    ) -> RemoteResult[None]:
        if error := self._begin("upsert_display_settings", user_id):
            return RemoteResult(error=error)
        _upsert_row(self.qr_settings, user_id, settings_to_row(user_id, settings))
        return RemoteResult.success()


def _upsert_row(table: dict[str, dict[str, Any]], user_id: str, row: dict[str, Any]) -> None:
    existing = table.get(user_id)
    stamped = stamp(row, created=existing is None)
    if existing is not None:
        stamped["created_at"] = existing.get("created_at")
    table[user_id] = stamped
