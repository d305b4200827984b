"""Adapter remoto sem backend configurado.

Variante explícita do protocolo: toda operação reporta o mesmo erro
"indisponível", então o caminho de falha das facades é exercitado da
mesma forma com o remoto fora do ar ou simplesmente não configurado.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.remote_sync import (
    REMOTE_UNAVAILABLE,
    RemoteResult,
    RemoteSyncAdapter,
    require_user_id,
)

if TYPE_CHECKING:
    from app.domain.contact import ContactRecord
    from app.domain.display_settings import DisplaySettings
    from app.domain.profile import ProfileRecord

UNAVAILABLE_MESSAGE = "Remote store not configured; using local cache only"


class UnavailableSyncAdapter(RemoteSyncAdapter):
    """Adapter no-op: sempre indisponível."""

    @property
    def available(self) -> bool:
        return False

    @staticmethod
    def _unavailable(user_id: str) -> RemoteResult:
        require_user_id(user_id)
        return RemoteResult.failure(REMOTE_UNAVAILABLE, UNAVAILABLE_MESSAGE)

    async def fetch_contacts(self, user_id: str) -> RemoteResult[list[ContactRecord]]:
        return self._unavailable(user_id)

    async def insert_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        return self._unavailable(user_id)

    async def update_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]:
        return self._unavailable(user_id)

    async def delete_contact(self, user_id: str, contact_id: str) -> RemoteResult[None]:
        return self._unavailable(user_id)

    async def fetch_profile(self, user_id: str) -> RemoteResult[ProfileRecord]:
        return self._unavailable(user_id)

    async def upsert_profile(self, user_id: str, profile: ProfileRecord) -> RemoteResult[None]:
        return self._unavailable(user_id)

    async def fetch_display_settings(self, user_id: str) -> RemoteResult[DisplaySettings]:
        return self._unavailable(user_id)

    async def upsert_display_settings(
        self, user_id: str, settings: DisplaySettings
    ) -> RemoteResult[None]:
        return self._unavailable(user_id)
