"""Base para registros singleton atualizáveis parcialmente."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import Mapping


class MergeableModel(BaseModel):
    """Modelo plano que aceita atualização parcial validada."""

    @classmethod
    def field_key(cls, key: str) -> str | None:
        """Resolve chave camelCase ou snake_case para o nome do campo."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    def merged(self, partial: Mapping[str, Any]) -> Self:
        """Retorna nova instância com `partial` aplicado.

        Chaves desconhecidas são ignoradas; valores inválidos levantam
        `pydantic.ValidationError` e não alteram a instância atual.
        """
        data = self.model_dump()
        for key, value in partial.items():
            name = self.field_key(key)
            if name is not None:
                data[name] = value
        return type(self).model_validate(data)
