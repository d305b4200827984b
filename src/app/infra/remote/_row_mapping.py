"""Tradução entre registros de domínio (camelCase no cache) e linhas
remotas (snake_case, com `user_id` e timestamps).

Único ponto do sistema que conhece o formato das linhas remotas.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from app.domain.contact import ContactRecord
from app.domain.display_settings import DisplaySettings
from app.domain.profile import ProfileRecord

# Colunas que existem apenas no remoto
ROW_METADATA_COLUMNS = frozenset({"user_id", "created_at", "updated_at"})


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat()


def contact_to_row(user_id: str, contact: ContactRecord) -> dict[str, Any]:
    """Linha da tabela de contatos (sem timestamps)."""
    row = contact.model_dump()
    row["user_id"] = user_id
    return row


def row_to_contact(row: dict[str, Any]) -> ContactRecord:
    """Converte linha remota; strings vazias viram campos ausentes."""
    fields = {
        key: (value or None)
        for key, value in row.items()
        if key in ContactRecord.model_fields
    }
    fields["id"] = row.get("id")
    fields["name"] = row.get("name")
    fields["date"] = row.get("date")
    return ContactRecord.model_validate(fields)


def profile_to_row(user_id: str, profile: ProfileRecord) -> dict[str, Any]:
    row = profile.model_dump()
    row["user_id"] = user_id
    return row


def row_to_profile(row: dict[str, Any]) -> ProfileRecord:
    fields = {key: value for key, value in row.items() if key in ProfileRecord.model_fields}
    if not fields.get("profile_picture"):
        fields["profile_picture"] = None
    return ProfileRecord.model_validate(fields)


def settings_to_row(user_id: str, settings: DisplaySettings) -> dict[str, Any]:
    row = settings.model_dump()
    row["user_id"] = user_id
    return row


def row_to_settings(row: dict[str, Any]) -> DisplaySettings:
    """Colunas nulas caem no default do campo."""
    fields = {
        key: value
        for key, value in row.items()
        if key in DisplaySettings.model_fields and value is not None
    }
    return DisplaySettings.model_validate(fields)


def stamp(row: dict[str, Any], *, created: bool) -> dict[str, Any]:
    """Adiciona `updated_at` (e `created_at` em inserções)."""
    now = utc_timestamp()
    stamped = dict(row)
    stamped["updated_at"] = now
    if created:
        stamped["created_at"] = now
    return stamped
