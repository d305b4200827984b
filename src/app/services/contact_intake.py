"""Entrada de contatos: scan de QR e cadastro manual.

Fluxo: payload -> parser -> revalidação do nome -> ContactRecord com
id/data -> ContactsStore.add (cache síncrono, remoto em background).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.contact import DEFAULT_MET_AT, ContactIdGenerator, ContactRecord, PartialContact
from app.observability.metrics import record_parse_result
from app.services.payload_parser import ParseFailure, classify_payload, parse_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from app.records.contacts import ContactsStore

logger = logging.getLogger(__name__)

DEFAULT_SCAN_NOTES = "Added via QR code scan"

_MANUAL_FIELDS = ("name", "title", "company", "email", "phone", "notes", "met_at", "socials")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_contact(
    partial: PartialContact,
    *,
    id_generator: Callable[[], str],
    now: datetime,
) -> ContactRecord | ParseFailure:
    """Cria o registro a partir do contato parcial do parser.

    Contato sem nome (ex: vCard sem FN) é falha, mesmo que o parser
    tenha retornado um objeto.
    """
    if not partial.has_name:
        return ParseFailure(reason="missing_name")
    return ContactRecord(
        id=id_generator(),
        name=partial.name or "",
        title=partial.title,
        company=partial.company,
        email=partial.email,
        phone=partial.phone,
        socials=partial.socials,
        notes=partial.notes or DEFAULT_SCAN_NOTES,
        met_at=partial.met_at or DEFAULT_MET_AT,
        date=now.isoformat(),
    )


class ContactIntake:
    """Cria contatos e os entrega à facade de contatos.

    Args:
        contacts: Facade de contatos do usuário ativo
        id_generator: Gerador de ids (padrão: milissegundos crescentes)
        clock: Relógio UTC (injetável em testes)
    """

    def __init__(
        self,
        contacts: ContactsStore,
        id_generator: Callable[[], str] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._contacts = contacts
        self._id_generator = id_generator or ContactIdGenerator()
        self._clock = clock

    async def ingest_scan(self, raw: str) -> ContactRecord | ParseFailure:
        """Processa um payload decodificado pelo scanner."""
        payload_format = classify_payload(raw) if isinstance(raw, str) else None
        parsed = parse_payload(raw)
        if isinstance(parsed, ParseFailure):
            record_parse_result(payload_format, ok=False)
            logger.info("scan_rejected", extra={"reason": parsed.reason})
            return parsed

        contact = build_contact(parsed, id_generator=self._id_generator, now=self._clock())
        if isinstance(contact, ParseFailure):
            record_parse_result(payload_format, ok=False)
            logger.info(
                "scan_rejected",
                extra={"reason": contact.reason, "payload_format": payload_format},
            )
            return contact

        await self._contacts.add(contact)
        record_parse_result(payload_format, ok=True)
        logger.info(
            "scan_contact_created",
            extra={"contact_id": contact.id, "payload_format": payload_format},
        )
        return contact

    async def add_manual(self, fields: Mapping[str, Any]) -> ContactRecord | ParseFailure:
        """Cadastro manual (formulário). Nome vazio é rejeitado.

        Raises:
            pydantic.ValidationError: Se algum campo for inválido (ex: data).
        """
        name = fields.get("name")
        if not isinstance(name, str) or not name.strip():
            return ParseFailure(reason="missing_name")

        values = {key: fields.get(key) or None for key in _MANUAL_FIELDS}
        if values["met_at"] is None:
            values["met_at"] = fields.get("metAt") or None
        date = fields.get("date") or self._clock().isoformat()
        try:
            contact = ContactRecord(id=self._id_generator(), date=date, **values)
        except ValidationError:
            logger.info("manual_contact_invalid")
            raise
        await self._contacts.add(contact)
        logger.info("manual_contact_created", extra={"contact_id": contact.id})
        return contact
