"""ContactRecord - contato coletado em encontros presenciais.

Criado por scan de QR, cadastro manual ou fallback do parser.
Serializado em camelCase no cache local (`metAt`); a tradução para
snake_case do store remoto fica exclusivamente no adapter remoto.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_MET_AT = "QR Code Scan"


def normalize_socials(value: dict[str, str] | None) -> dict[str, str] | None:
    """Normaliza chaves de redes sociais para minúsculas."""
    if value is None:
        return None
    return {str(platform).lower(): url for platform, url in value.items()}


class PartialContact(BaseModel):
    """Saída do parser: campos extraídos, ainda sem id/data."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str | None = None
    title: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    notes: str | None = None
    met_at: str | None = None
    socials: dict[str, str] | None = None

    @field_validator("socials")
    @classmethod
    def validate_socials(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        return normalize_socials(value)

    @property
    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())


class ContactRecord(BaseModel):
    """Contato persistido (cache local + store remoto)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    name: str
    title: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    notes: str | None = None
    met_at: str | None = None
    date: str
    socials: dict[str, str] | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id do contato não pode ser vazio")
        return value

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("nome do contato não pode ser vazio")
        return value

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        """Data do encontro em ISO-8601 (não é a data de persistência)."""
        datetime.fromisoformat(value)
        return value

    @field_validator("socials")
    @classmethod
    def validate_socials(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        return normalize_socials(value)

    def to_cache_dict(self) -> dict[str, Any]:
        """Formato do blob local (camelCase, sem campos ausentes)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def matches(self, query: str) -> bool:
        """Busca case-insensitive em nome, empresa e notas."""
        needle = query.lower()
        return any(
            needle in field.lower()
            for field in (self.name, self.company, self.notes)
            if field
        )


class ContactIdGenerator:
    """Gera ids em milissegundos, estritamente crescentes no processo.

    Ids crescentes permitem ordenar por recência sem consultar `date`.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)
