"""DisplaySettings - aparência do cartão QR do usuário.

Objeto plano: todos os campos têm default, então uma atualização parcial
pode ser mesclada sem invalidar o restante.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain._mergeable import MergeableModel

_HEX_COLOR = r"^#[0-9A-Fa-f]{3,8}$"


class DisplaySettings(MergeableModel):
    """Configuração de renderização do cartão QR."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    # Cores
    bg_color: str = Field(default="#FFFFFF", pattern=_HEX_COLOR)
    fg_color: str = Field(default="#000000", pattern=_HEX_COLOR)
    page_background_color: str = Field(default="#FFFFFF", pattern=_HEX_COLOR)
    card_background_color: str = Field(default="#FFFFFF", pattern=_HEX_COLOR)
    text_color: str = Field(default="#000000", pattern=_HEX_COLOR)

    # Visibilidade por campo
    show_name: bool = True
    show_title: bool = True
    show_company: bool = True
    show_contact: bool = True
    show_socials: bool = True
    show_profile_picture: bool = True

    # Layout e tipografia
    layout_style: str = "card"
    qr_size: int = Field(default=220, ge=0)
    border_radius: int = Field(default=12, ge=0)
    card_padding: int = Field(default=24, ge=0)
    font_family: str = "Inter"
    font_size: int = Field(default=14, ge=1)

    def to_cache_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
