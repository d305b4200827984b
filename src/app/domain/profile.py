"""ProfileRecord - identidade do próprio usuário exibida no cartão QR.

Um por usuário, criado com defaults no primeiro acesso e nunca removido.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain._mergeable import MergeableModel
from app.domain.contact import normalize_socials


class ProfileRecord(MergeableModel):
    """Perfil do usuário (mesmo formato do contato, sem notas/metAt)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str = ""
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    socials: dict[str, str] = Field(default_factory=dict)
    profile_picture: str | None = None

    @field_validator("name", "title", "company", "email", "phone", mode="before")
    @classmethod
    def coerce_missing_text(cls, value: Any) -> Any:
        """Colunas nulas do remoto viram string vazia."""
        return "" if value is None else value

    @field_validator("socials", mode="before")
    @classmethod
    def validate_socials(cls, value: Any) -> Any:
        if value is None:
            return {}
        return normalize_socials(value) if isinstance(value, dict) else value

    def to_cache_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
