"""Tipos de registro persistidos (unidade de escopo do cache e do remoto)."""

from __future__ import annotations

from enum import StrEnum


class RecordKind(StrEnum):
    """Chave lógica de cada tipo de registro no cache local."""

    CONTACTS = "contacts"
    PROFILE = "profile"
    DISPLAY_SETTINGS = "qrSettings"
