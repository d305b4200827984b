"""ContactsStore - coleção de contatos do usuário ativo."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from app.domain.contact import ContactRecord
from app.domain.record_kind import RecordKind
from app.protocols.remote_sync import RemoteResult
from app.records.base import RecordStore

logger = logging.getLogger(__name__)


class ContactsStore(RecordStore[tuple[ContactRecord, ...]]):
    """Contatos em ordem mais-recente-primeiro.

    Novos contatos entram no início; ordenações alternativas (nome,
    empresa) são aplicadas pelo chamador sobre uma cópia.
    """

    kind = RecordKind.CONTACTS

    def _default(self) -> tuple[ContactRecord, ...]:
        return ()

    def _decode(self, raw: Any) -> tuple[ContactRecord, ...]:
        if not isinstance(raw, list):
            raise TypeError("blob de contatos deve ser uma lista")
        contacts: list[ContactRecord] = []
        skipped = 0
        for item in raw:
            try:
                contacts.append(ContactRecord.model_validate(item))
            except ValidationError:
                skipped += 1
        if skipped:
            logger.warning(
                "cache_contacts_skipped",
                extra={"skipped": skipped, "kept": len(contacts)},
            )
        return tuple(contacts)

    def _encode(self, state: tuple[ContactRecord, ...]) -> list[dict[str, Any]]:
        return [contact.to_cache_dict() for contact in state]

    async def _fetch_remote(self, user_id: str) -> RemoteResult[tuple[ContactRecord, ...]]:
        result = await self._remote.fetch_contacts(user_id)
        if not result.ok or result.data is None:
            return result  # type: ignore[return-value]
        return RemoteResult.success(tuple(result.data))

    # ──────────────────────────────────────────────────────────────
    # Leitura
    # ──────────────────────────────────────────────────────────────

    @property
    def contacts(self) -> tuple[ContactRecord, ...]:
        return self._state

    def get(self, contact_id: str) -> ContactRecord | None:
        return next((c for c in self._state if c.id == contact_id), None)

    def __len__(self) -> int:
        return len(self._state)

    # ──────────────────────────────────────────────────────────────
    # Mutação
    # ──────────────────────────────────────────────────────────────

    async def add(self, contact: ContactRecord) -> ContactRecord:
        """Insere no início da coleção.

        Raises:
            ValueError: Se já existir contato com o mesmo id.
        """
        if self.get(contact.id) is not None:
            raise ValueError(f"Contato duplicado: {contact.id}")
        self._commit((contact, *self._state))
        logger.info("contact_added", extra={"contact_id": contact.id, "total": len(self._state)})
        self._push("insert", lambda user_id: self._remote.insert_contact(user_id, contact))
        return contact

    async def update(self, contact: ContactRecord) -> bool:
        """Substitui o contato de mesmo id, mantendo a posição.

        Returns:
            False se o id não existir (nada é alterado nem enviado).
        """
        if self.get(contact.id) is None:
            logger.info("contact_update_unknown_id", extra={"contact_id": contact.id})
            return False
        self._commit(tuple(contact if c.id == contact.id else c for c in self._state))
        logger.info("contact_updated", extra={"contact_id": contact.id})
        self._push("update", lambda user_id: self._remote.update_contact(user_id, contact))
        return True

    async def delete(self, contact_id: str) -> bool:
        """Remove um contato. Returns False se o id não existir."""
        return await self.delete_many([contact_id]) == 1

    async def delete_many(self, contact_ids: Iterable[str]) -> int:
        """Remove exatamente os ids informados, preservando a ordem do restante.

        Returns:
            Quantidade de contatos removidos.
        """
        targets = set(contact_ids)
        removed = [c.id for c in self._state if c.id in targets]
        if not removed:
            return 0
        self._commit(tuple(c for c in self._state if c.id not in targets))
        logger.info("contacts_deleted", extra={"removed": len(removed), "total": len(self._state)})
        for contact_id in removed:
            self._push(
                "delete",
                lambda user_id, contact_id=contact_id: self._remote.delete_contact(
                    user_id, contact_id
                ),
            )
        return len(removed)
