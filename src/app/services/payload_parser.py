"""Classificador e parser de payloads escaneados (QR).

Transforma o texto bruto decodificado pelo scanner em um `PartialContact`.
A classificação é first-match-wins sobre uma lista ordenada de formatos;
a ordem é uma prioridade deliberada:

    1. vCard         (linha BEGIN:VCARD, em qualquer posição)
    2. JSON          (objeto com `name`; inválido cai para o próximo)
    3. LinkedIn      (contém linkedin.com/in/)
    4. URL genérica  (começa com http)
    5. Texto puro    (qualquer texto não vazio)

Função pura: sem IO, sem estado, determinística.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from app.domain.contact import PartialContact
from app.services._payload_formats import (
    LINKEDIN_MARKER,
    VCARD_BEGIN,
    extract_json,
    extract_linkedin,
    extract_text,
    extract_url,
    extract_vcard,
)

if TYPE_CHECKING:
    from collections.abc import Callable

ParseFailureReason = Literal["empty", "unrecognized", "missing_name"]

PARSE_FAILURE_MESSAGE = "Could not extract contact information"


@dataclass(frozen=True)
class ParseFailure:
    """Resultado tipado de "nenhum contato extraível"."""

    reason: ParseFailureReason
    message: str = PARSE_FAILURE_MESSAGE


@dataclass(frozen=True)
class PayloadFormat:
    """Formato reconhecível: detector + extrator.

    O extrator pode retornar None para recusar o payload (ex: JSON
    malformado), e a classificação segue para o próximo formato.
    """

    name: str
    detect: Callable[[str], bool]
    extract: Callable[[str, str], dict[str, Any] | None]


def _is_vcard(text: str) -> bool:
    """BEGIN:VCARD no início ou em qualquer linha (linhas fora de ordem)."""
    if text.startswith(VCARD_BEGIN):
        return True
    return any(line.strip() == VCARD_BEGIN for line in text.split("\n"))


def _is_json_object(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")


PAYLOAD_FORMATS: tuple[PayloadFormat, ...] = (
    PayloadFormat(
        "vcard",
        _is_vcard,
        lambda text, _raw: extract_vcard(text),
    ),
    PayloadFormat(
        "json",
        _is_json_object,
        lambda text, _raw: extract_json(text),
    ),
    PayloadFormat(
        "linkedin",
        lambda text: LINKEDIN_MARKER in text,
        lambda text, _raw: extract_linkedin(text),
    ),
    PayloadFormat(
        "url",
        lambda text: text.startswith("http"),
        lambda text, _raw: extract_url(text),
    ),
    PayloadFormat(
        "text",
        lambda text: bool(text),
        lambda _text, raw: extract_text(raw),
    ),
)


def _match(raw: str) -> tuple[str, dict[str, Any]] | None:
    text = raw.strip()
    if not text:
        return None
    for payload_format in PAYLOAD_FORMATS:
        if not payload_format.detect(text):
            continue
        fields = payload_format.extract(text, raw)
        if fields is not None:
            return payload_format.name, fields
    return None


def classify_payload(raw: str) -> str | None:
    """Retorna o nome do formato reconhecido (ou None se vazio)."""
    matched = _match(raw)
    return matched[0] if matched else None


def parse_payload(raw: str) -> PartialContact | ParseFailure:
    """Converte payload bruto em contato parcial.

    Um `PartialContact` sem nome (ex: vCard sem FN) ainda é retornado;
    o passo de criação do registro revalida e o trata como falha.

    Args:
        raw: Texto decodificado do QR code.

    Returns:
        PartialContact extraído ou ParseFailure.
    """
    if not isinstance(raw, str) or not raw.strip():
        return ParseFailure(reason="empty")

    matched = _match(raw)
    if matched is None:
        return ParseFailure(reason="unrecognized")
    return PartialContact.model_validate(matched[1])
