"""ProfileStore - perfil do usuário ativo (singleton)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.profile import ProfileRecord
from app.domain.record_kind import RecordKind
from app.records.base import RecordStore

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.protocols.remote_sync import RemoteResult

logger = logging.getLogger(__name__)


class ProfileStore(RecordStore[ProfileRecord]):
    """Perfil criado com defaults no primeiro acesso; nunca removido."""

    kind = RecordKind.PROFILE

    def _default(self) -> ProfileRecord:
        return ProfileRecord()

    def _decode(self, raw: Any) -> ProfileRecord:
        return ProfileRecord.model_validate(raw)

    def _encode(self, state: ProfileRecord) -> dict[str, Any]:
        return state.to_cache_dict()

    async def _fetch_remote(self, user_id: str) -> RemoteResult[ProfileRecord]:
        return await self._remote.fetch_profile(user_id)

    @property
    def profile(self) -> ProfileRecord:
        return self._state

    async def replace(self, profile: ProfileRecord) -> ProfileRecord:
        """Substitui o perfil inteiro."""
        self._commit(profile)
        logger.info("profile_replaced")
        self._push("upsert", lambda user_id: self._remote.upsert_profile(user_id, profile))
        return profile

    async def update(self, partial: Mapping[str, Any]) -> ProfileRecord:
        """Aplica atualização parcial (chaves camelCase ou snake_case).

        Raises:
            pydantic.ValidationError: Se algum valor for inválido
                (o perfil atual permanece intacto).
        """
        return await self.replace(self._state.merged(partial))
