"""Testes da tradução camelCase <-> snake_case das linhas remotas."""

from __future__ import annotations

from app.domain.contact import ContactRecord
from app.domain.display_settings import DisplaySettings
from app.domain.profile import ProfileRecord
from app.infra.remote._row_mapping import (
    contact_to_row,
    profile_to_row,
    row_to_contact,
    row_to_profile,
    row_to_settings,
    settings_to_row,
    stamp,
)


class TestContactRows:
    """Linhas de contatos."""

    def test_contact_to_row_is_snake_case(self) -> None:
        contact = ContactRecord(
            id="1", name="Jane", met_at="Expo", date="2026-10-19T12:00:00+00:00"
        )
        row = contact_to_row("u1", contact)
        assert row["met_at"] == "Expo"
        assert row["user_id"] == "u1"
        assert "metAt" not in row

    def test_row_to_contact_ignores_metadata_and_blank_columns(self) -> None:
        row = {
            "id": "1",
            "name": "Jane",
            "company": "",
            "met_at": "Expo",
            "date": "2026-10-19T12:00:00+00:00",
            "user_id": "u1",
            "created_at": "2026-10-19T12:00:01+00:00",
            "socials": {},
        }
        contact = row_to_contact(row)
        assert contact.company is None
        assert contact.socials is None
        assert contact.met_at == "Expo"
        assert contact.to_cache_dict() == {
            "id": "1",
            "name": "Jane",
            "metAt": "Expo",
            "date": "2026-10-19T12:00:00+00:00",
        }


class TestSingletonRows:
    """Linhas de perfil e configurações."""

    def test_profile_null_columns(self) -> None:
        row = profile_to_row("u1", ProfileRecord(name="Jane"))
        row.update({"title": None, "socials": None, "profile_picture": ""})
        assert row_to_profile(row) == ProfileRecord(name="Jane")

    def test_settings_null_columns_fall_back_to_defaults(self) -> None:
        row = settings_to_row("u1", DisplaySettings(fg_color="#123456"))
        row["qr_size"] = None
        settings = row_to_settings(row)
        assert settings.fg_color == "#123456"
        assert settings.qr_size == 220


def test_stamp_sets_created_only_on_insert() -> None:
    assert set(stamp({}, created=True)) == {"created_at", "updated_at"}
    assert set(stamp({}, created=False)) == {"updated_at"}
