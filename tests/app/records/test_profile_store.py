"""Testes do ProfileStore."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.domain.profile import ProfileRecord
from app.infra.remote import MemorySyncAdapter, UnavailableSyncAdapter
from app.infra.stores import MemoryCacheStore
from app.records import BackgroundTasks, ProfileStore


def _store(cache, remote=None, user_id: str | None = "u1") -> tuple[ProfileStore, BackgroundTasks]:
    tasks = BackgroundTasks()
    store = ProfileStore(cache, remote or MemorySyncAdapter(), tasks, user_id)
    store.start()
    return store, tasks


class TestProfileStore:
    """Perfil singleton com defaults."""

    def test_defaults_on_first_access(self) -> None:
        store, _ = _store(MemoryCacheStore(), user_id=None)
        assert store.profile == ProfileRecord()
        assert store.profile.socials == {}

    def test_hydrates_camel_case_blob(self) -> None:
        cache = MemoryCacheStore()
        cache.write("profile", {"name": "Jane", "profilePicture": "data:image/png;base64,AA"})
        store, _ = _store(cache, user_id=None)
        assert store.profile.profile_picture == "data:image/png;base64,AA"

    def test_corrupt_blob_uses_defaults(self) -> None:
        cache = MemoryCacheStore()
        cache.write("profile", ["not", "an", "object"])
        store, _ = _store(cache, user_id=None)
        assert store.profile == ProfileRecord()

    @pytest.mark.asyncio
    async def test_missing_remote_profile_keeps_local(self) -> None:
        cache = MemoryCacheStore()
        cache.write("profile", {"name": "Local"})
        store, _ = _store(cache, MemorySyncAdapter())
        await store.wait_settled()
        assert store.profile.name == "Local"

    @pytest.mark.asyncio
    async def test_remote_profile_wins(self) -> None:
        cache = MemoryCacheStore()
        cache.write("profile", {"name": "Local", "title": "Dev"})
        remote = MemorySyncAdapter()
        await remote.upsert_profile("u1", ProfileRecord(name="Remote"))

        store, _ = _store(cache, remote)
        await store.wait_settled()

        assert store.profile == ProfileRecord(name="Remote")
        assert cache.read("profile")["name"] == "Remote"
        assert cache.read("profile")["title"] == ""

    @pytest.mark.asyncio
    async def test_partial_update_merges_and_upserts(self) -> None:
        cache = MemoryCacheStore()
        remote = MemorySyncAdapter()
        store, tasks = _store(cache, remote)
        await store.wait_settled()

        await store.update({"name": "Jane", "company": "Acme"})
        updated = await store.update({"profilePicture": "p.png", "unknown": 1})
        await tasks.drain()

        assert updated.name == "Jane"
        assert updated.profile_picture == "p.png"
        assert cache.read("profile")["profilePicture"] == "p.png"
        assert remote.profiles["u1"]["profile_picture"] == "p.png"
        assert remote.profiles["u1"]["company"] == "Acme"

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_profile_intact(self) -> None:
        store, _ = _store(MemoryCacheStore(), user_id=None)
        await store.update({"name": "Jane"})
        with pytest.raises(ValidationError):
            await store.update({"socials": "not-a-dict"})
        assert store.profile.name == "Jane"

    @pytest.mark.asyncio
    async def test_remote_failure_keeps_replaced_profile(self) -> None:
        cache = MemoryCacheStore()
        store, tasks = _store(cache, UnavailableSyncAdapter())
        await store.wait_settled()

        await store.replace(ProfileRecord(name="Jane"))
        await tasks.drain()

        assert store.profile.name == "Jane"
        assert cache.read("profile")["name"] == "Jane"
