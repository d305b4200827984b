"""DisplaySettingsStore - aparência do cartão QR do usuário ativo."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.display_settings import DisplaySettings
from app.domain.record_kind import RecordKind
from app.records.base import RecordStore

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.protocols.remote_sync import RemoteResult

logger = logging.getLogger(__name__)


class DisplaySettingsStore(RecordStore[DisplaySettings]):
    """Configurações do cartão QR (singleton, atualização parcial)."""

    kind = RecordKind.DISPLAY_SETTINGS

    def _default(self) -> DisplaySettings:
        return DisplaySettings()

    def _decode(self, raw: Any) -> DisplaySettings:
        """Mescla o blob salvo sobre os defaults, descartando só o que for inválido."""
        if not isinstance(raw, dict):
            raise TypeError("blob de configurações deve ser um objeto")
        try:
            return DisplaySettings.model_validate(raw)
        except ValidationError:
            pass
        settings = DisplaySettings()
        dropped: list[str] = []
        for key, value in raw.items():
            try:
                settings = settings.merged({key: value})
            except ValidationError:
                dropped.append(key)
        logger.warning("cache_settings_fields_dropped", extra={"fields": dropped})
        return settings

    def _encode(self, state: DisplaySettings) -> dict[str, Any]:
        return state.to_cache_dict()

    async def _fetch_remote(self, user_id: str) -> RemoteResult[DisplaySettings]:
        return await self._remote.fetch_display_settings(user_id)

    @property
    def settings(self) -> DisplaySettings:
        return self._state

    async def update(self, partial: Mapping[str, Any]) -> DisplaySettings:
        """Mescla atualização parcial sobre as configurações atuais.

        Raises:
            pydantic.ValidationError: Se algum valor for inválido
                (as configurações atuais permanecem intactas).
        """
        settings = self._state.merged(partial)
        self._commit(settings)
        logger.info("display_settings_updated", extra={"fields": sorted(partial)})
        self._push(
            "upsert",
            lambda user_id: self._remote.upsert_display_settings(user_id, settings),
        )
        return settings

    async def reset(self) -> DisplaySettings:
        """Volta todas as configurações para o default."""
        return await self.update(DisplaySettings().model_dump())
