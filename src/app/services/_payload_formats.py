"""Extratores por formato de payload escaneado.

Funções puras: recebem o texto (já sem espaços nas bordas, exceto onde
indicado) e retornam os campos extraídos como dict.
"""

from __future__ import annotations

import json
import re
from typing import Any

from app.domain.contact import DEFAULT_MET_AT

VCARD_BEGIN = "BEGIN:VCARD"
VCARD_END = "END:VCARD"
VCARD_DEFAULT_NOTES = "Contact from vCard"
JSON_FIXED_NOTES = "Contact information from QR code"
LINKEDIN_MARKER = "linkedin.com/in/"
TEXT_CONTACT_NAME = "Text Contact"

_VCARD_FIELDS = {
    "FN": "name",
    "TITLE": "title",
    "ORG": "company",
    "EMAIL": "email",
    "TEL": "phone",
    "NOTE": "notes",
}
_VCARD_URL_TYPE = re.compile(r"type=([^;]+)", re.IGNORECASE)
_HANDLE_TERMINATORS = re.compile(r"[/?#]")
_JSON_TEXT_FIELDS = ("title", "company", "email", "phone")

# Ordem importa: primeira substring encontrada define a plataforma
_URL_PLATFORMS: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("twitter.com", "x.com"), "Twitter/X", "Twitter Contact"),
    (("instagram.com",), "Instagram", "Instagram Contact"),
    (("facebook.com",), "Facebook", "Facebook Contact"),
)
_DEFAULT_PLATFORM = ("Website", "Web Contact")


def extract_vcard(text: str) -> dict[str, Any]:
    """Extrai campos de um vCard linha a linha.

    Linhas sem ':' ou com valor vazio são ignoradas; chaves desconhecidas
    são descartadas. URLs viram redes sociais (`type=` ou `website`).
    """
    fields: dict[str, Any] = {
        "met_at": DEFAULT_MET_AT,
        "notes": VCARD_DEFAULT_NOTES,
        "socials": {},
    }
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or line in (VCARD_BEGIN, VCARD_END) or line.startswith("VERSION:"):
            continue

        key, sep, value = line.partition(":")
        if not sep or not value:
            continue

        target = _VCARD_FIELDS.get(key)
        if target is not None:
            fields[target] = value
        elif key.startswith("URL"):
            match = _VCARD_URL_TYPE.search(key)
            platform = match.group(1) if match else "website"
            fields["socials"][platform.lower()] = value
    return fields


def extract_json(text: str) -> dict[str, Any] | None:
    """Extrai campos do formato JSON legado.

    Returns:
        Campos extraídos, ou None quando o JSON é inválido, não é objeto
        ou não tem `name` (o próximo detector é tentado).
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    name = _scalar_text(data.get("name"))
    if name is None or not name.strip():
        return None

    fields: dict[str, Any] = {
        "name": name,
        "met_at": DEFAULT_MET_AT,
        "notes": JSON_FIXED_NOTES,
    }
    for key in _JSON_TEXT_FIELDS:
        fields[key] = _scalar_text(data.get(key))
    fields["socials"] = _clean_socials(data.get("socials"))
    return fields


def extract_linkedin(text: str) -> dict[str, Any]:
    """Extrai handle de uma URL de perfil do LinkedIn."""
    # notas e socials guardam a URL aparada, nunca o payload bruto
    tail = text.split(LINKEDIN_MARKER, 1)[1]
    handle = _HANDLE_TERMINATORS.split(tail, 1)[0]
    return {
        "name": f"LinkedIn: {handle}",
        "notes": f"LinkedIn profile: {text}",
        "socials": {"linkedin": text},
        "met_at": DEFAULT_MET_AT,
    }


def extract_url(text: str) -> dict[str, Any]:
    """Classifica URL genérica por plataforma (substring, em ordem)."""
    platform, name = _DEFAULT_PLATFORM
    for markers, label, contact_name in _URL_PLATFORMS:
        if any(marker in text for marker in markers):
            platform, name = label, contact_name
            break
    return {
        "name": name,
        "notes": f"{platform} profile: {text}",
        "socials": {platform.lower(): text},
        "met_at": DEFAULT_MET_AT,
    }


def extract_text(raw: str) -> dict[str, Any]:
    """Fallback de texto puro: o payload original vira nota."""
    return {
        "name": TEXT_CONTACT_NAME,
        "notes": raw,
        "met_at": DEFAULT_MET_AT,
    }


def _scalar_text(value: Any) -> str | None:
    """Texto de um escalar JSON; vazio, bool, null e containers viram None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _clean_socials(value: Any) -> dict[str, str] | None:
    if not isinstance(value, dict) or not value:
        return None
    socials = {str(platform): _scalar_text(url) for platform, url in value.items()}
    return {platform: url for platform, url in socials.items() if url} or None
