"""Busca e ordenação de contatos para exibição.

Sempre retornam listas novas; a ordem armazenada (mais recente
primeiro) nunca é alterada.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.contact import ContactRecord

SortOrder = Literal["recent", "name", "company"]


def search_contacts(contacts: Iterable[ContactRecord], query: str) -> list[ContactRecord]:
    """Filtra por substring (case-insensitive) em nome, empresa e notas."""
    needle = query.strip()
    if not needle:
        return list(contacts)
    return [contact for contact in contacts if contact.matches(needle)]


def sort_contacts(
    contacts: Iterable[ContactRecord],
    order: SortOrder = "recent",
) -> list[ContactRecord]:
    """Ordena uma cópia dos contatos.

    - recent: data do encontro, mais recente primeiro (empate: id)
    - name: alfabética, case-insensitive
    - company: alfabética por empresa; sem empresa vai para o fim
    """
    items = list(contacts)
    if order == "recent":
        return sorted(items, key=lambda c: (_date_key(c.date), _id_key(c.id)), reverse=True)
    if order == "name":
        return sorted(items, key=lambda c: c.name.casefold())
    if order == "company":
        return sorted(
            items,
            key=lambda c: (c.company is None, (c.company or "").casefold(), c.name.casefold()),
        )
    raise ValueError(f"Ordenação inválida: {order}")


def find_contact(contacts: Iterable[ContactRecord], contact_id: str) -> ContactRecord | None:
    return next((contact for contact in contacts if contact.id == contact_id), None)


def _id_key(contact_id: str) -> tuple[int, str]:
    # Ids numéricos (milissegundos) ordenam por valor, não lexicamente
    return (int(contact_id), "") if contact_id.isdigit() else (-1, contact_id)


def _date_key(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
