"""Testes de busca e ordenação de contatos."""

from __future__ import annotations

import pytest

from app.domain.contact import ContactRecord
from app.services.contact_queries import find_contact, search_contacts, sort_contacts


def _contact(contact_id: str, name: str, **kwargs: str) -> ContactRecord:
    kwargs.setdefault("date", "2026-01-01T00:00:00+00:00")
    return ContactRecord(id=contact_id, name=name, **kwargs)


@pytest.fixture
def contacts() -> list[ContactRecord]:
    return [
        _contact("3", "bob", company="Zeta", date="2026-03-01T00:00:00+00:00"),
        _contact("2", "Alice", notes="met at PyCon", date="2026-02-01T00:00:00"),
        _contact("1", "Carol", company="acme", date="2026-01-01T00:00:00+00:00"),
    ]


class TestSearchContacts:
    """Testes de search_contacts."""

    def test_matches_name_company_and_notes(self, contacts: list[ContactRecord]) -> None:
        assert [c.id for c in search_contacts(contacts, "ALI")] == ["2"]
        assert [c.id for c in search_contacts(contacts, "acme")] == ["1"]
        assert [c.id for c in search_contacts(contacts, "pycon")] == ["2"]

    def test_blank_query_returns_copy(self, contacts: list[ContactRecord]) -> None:
        result = search_contacts(contacts, "  ")
        assert result == contacts
        assert result is not contacts


class TestSortContacts:
    """Testes de sort_contacts."""

    def test_recent_first(self, contacts: list[ContactRecord]) -> None:
        assert [c.id for c in sort_contacts(reversed(contacts))] == ["3", "2", "1"]

    def test_recent_tie_breaks_on_numeric_id(self) -> None:
        items = [_contact("9", "a"), _contact("10", "b")]
        assert [c.id for c in sort_contacts(items, "recent")] == ["10", "9"]

    def test_by_name_case_insensitive(self, contacts: list[ContactRecord]) -> None:
        assert [c.name for c in sort_contacts(contacts, "name")] == ["Alice", "bob", "Carol"]

    def test_by_company_missing_last(self, contacts: list[ContactRecord]) -> None:
        assert [c.id for c in sort_contacts(contacts, "company")] == ["1", "3", "2"]

    def test_does_not_mutate_input(self, contacts: list[ContactRecord]) -> None:
        before = list(contacts)
        sort_contacts(contacts, "name")
        assert contacts == before

    def test_invalid_order_raises(self, contacts: list[ContactRecord]) -> None:
        with pytest.raises(ValueError, match="Ordenação inválida"):
            sort_contacts(contacts, "email")  # type: ignore[arg-type]


def test_find_contact(contacts: list[ContactRecord]) -> None:
    assert find_contact(contacts, "2").name == "Alice"
    assert find_contact(contacts, "missing") is None
