"""Testes do ContactsStore (cache autoritativo + remoto best-effort)."""

from __future__ import annotations

import pytest

from app.domain.contact import ContactRecord
from app.infra.remote import MemorySyncAdapter, UnavailableSyncAdapter
from app.infra.stores import MemoryCacheStore
from app.protocols.cache_store import CacheWriteError
from app.protocols.remote_sync import REMOTE_UNAVAILABLE
from app.records import BackgroundTasks, ContactsStore


def _contact(contact_id: str, name: str | None = None, **kwargs: str) -> ContactRecord:
    kwargs.setdefault("date", "2026-10-19T12:00:00+00:00")
    return ContactRecord(id=contact_id, name=name or f"Contact {contact_id}", **kwargs)


def _store(
    cache: MemoryCacheStore,
    remote: MemorySyncAdapter | UnavailableSyncAdapter | None = None,
    user_id: str | None = "u1",
) -> tuple[ContactsStore, BackgroundTasks]:
    tasks = BackgroundTasks()
    store = ContactsStore(cache, remote or MemorySyncAdapter(), tasks, user_id)
    store.start()
    return store, tasks


class TestInit:
    """Hidratação a partir do cache."""

    def test_absent_cache_starts_empty(self) -> None:
        store, _ = _store(MemoryCacheStore(), user_id=None)
        assert store.contacts == ()
        assert store.is_loading is False

    def test_hydrates_from_cache(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("2").to_cache_dict(), _contact("1").to_cache_dict()])

        store, _ = _store(cache, user_id=None)

        assert [c.id for c in store.contacts] == ["2", "1"]

    def test_corrupt_cache_falls_back_to_empty(self) -> None:
        cache = MemoryCacheStore()
        cache.put_raw("contacts", "[{broken")
        store, _ = _store(cache, user_id=None)
        assert store.contacts == ()

    def test_non_list_blob_falls_back_to_empty(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", {"id": "1"})
        store, _ = _store(cache, user_id=None)
        assert store.contacts == ()

    def test_invalid_items_are_skipped(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("1").to_cache_dict(), {"id": "2", "name": ""}])
        store, _ = _store(cache, user_id=None)
        assert [c.id for c in store.contacts] == ["1"]


class TestReconcile:
    """Reconciliação remota (remote wins)."""

    @pytest.mark.asyncio
    async def test_remote_snapshot_replaces_local(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("local").to_cache_dict()])
        remote = MemorySyncAdapter()
        await remote.insert_contact("u1", _contact("r1"))
        await remote.insert_contact("u1", _contact("r2"))

        store, _ = _store(cache, remote)
        assert store.is_loading is True
        assert [c.id for c in store.contacts] == ["local"]

        await store.wait_settled()

        assert store.is_loading is False
        assert [c.id for c in store.contacts] == ["r2", "r1"]
        assert [item["id"] for item in cache.read("contacts")] == ["r2", "r1"]

    @pytest.mark.asyncio
    async def test_empty_remote_replaces_local(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("local").to_cache_dict()])

        store, _ = _store(cache, MemorySyncAdapter())
        await store.wait_settled()

        assert store.contacts == ()
        assert cache.read("contacts") == []

    @pytest.mark.asyncio
    async def test_remote_failure_keeps_local_state(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("local").to_cache_dict()])

        store, _ = _store(cache, UnavailableSyncAdapter())
        await store.wait_settled()

        assert store.is_loading is False
        assert [c.id for c in store.contacts] == ["local"]
        assert [item["id"] for item in cache.read("contacts")] == ["local"]

    @pytest.mark.asyncio
    async def test_remote_exception_is_absorbed(self) -> None:
        remote = MemorySyncAdapter()

        async def explode(user_id: str):
            raise TimeoutError("no response")

        remote.fetch_contacts = explode  # type: ignore[method-assign]
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("local").to_cache_dict()])

        store, _ = _store(cache, remote)
        await store.wait_settled()

        assert [c.id for c in store.contacts] == ["local"]

    @pytest.mark.asyncio
    async def test_reconcile_twice_is_idempotent(self) -> None:
        cache = MemoryCacheStore()
        remote = MemorySyncAdapter()
        for contact_id in ("a", "b", "c"):
            await remote.insert_contact("u1", _contact(contact_id))

        first, _ = _store(cache, remote)
        await first.wait_settled()
        second, _ = _store(cache, remote)
        await second.wait_settled()

        assert first.contacts == second.contacts
        assert [c.id for c in second.contacts] == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_closed_store_ignores_late_snapshot(self) -> None:
        cache = MemoryCacheStore()
        cache.write("contacts", [_contact("local").to_cache_dict()])
        remote = MemorySyncAdapter()
        await remote.insert_contact("u1", _contact("remote"))

        store, tasks = _store(cache, remote)
        store.close()
        await tasks.drain()

        assert [c.id for c in store.contacts] == ["local"]
        assert [item["id"] for item in cache.read("contacts")] == ["local"]

    @pytest.mark.asyncio
    async def test_without_user_no_remote_call(self) -> None:
        remote = MemorySyncAdapter()
        store, tasks = _store(MemoryCacheStore(), remote, user_id=None)

        await store.add(_contact("1"))
        await tasks.drain()

        assert remote.calls == []
        assert [c.id for c in store.contacts] == ["1"]


class TestMutations:
    """add / update / delete."""

    @pytest.mark.asyncio
    async def test_add_prepends_and_writes_through(self) -> None:
        cache = MemoryCacheStore()
        store, tasks = _store(cache, user_id=None)

        await store.add(_contact("1"))
        await store.add(_contact("2"))

        assert [c.id for c in store.contacts] == ["2", "1"]
        assert [item["id"] for item in cache.read("contacts")] == ["2", "1"]

    @pytest.mark.asyncio
    async def test_add_mirrors_to_remote_in_background(self) -> None:
        remote = MemorySyncAdapter()
        store, tasks = _store(MemoryCacheStore(), remote)
        await store.wait_settled()

        await store.add(_contact("1", met_at="QR Code Scan"))
        await tasks.drain()

        assert remote.contacts["1"]["user_id"] == "u1"
        assert remote.contacts["1"]["met_at"] == "QR Code Scan"

    @pytest.mark.asyncio
    async def test_remote_write_failure_never_loses_local_record(self) -> None:
        cache = MemoryCacheStore()
        remote = MemorySyncAdapter()
        store, tasks = _store(cache, remote)
        await store.wait_settled()
        remote.fail_with(REMOTE_UNAVAILABLE, operations=("insert_contact",))

        added = await store.add(_contact("1", company="Acme"))
        await tasks.drain()

        assert store.get("1") == added
        assert cache.read("contacts") == [added.to_cache_dict()]
        assert remote.contacts == {}

    @pytest.mark.asyncio
    async def test_add_duplicate_id_raises(self) -> None:
        store, _ = _store(MemoryCacheStore(), user_id=None)
        await store.add(_contact("1"))
        with pytest.raises(ValueError, match="duplicado"):
            await store.add(_contact("1"))
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_update_keeps_position(self) -> None:
        remote = MemorySyncAdapter()
        store, tasks = _store(MemoryCacheStore(), remote)
        await store.wait_settled()
        for contact_id in ("1", "2", "3"):
            await store.add(_contact(contact_id))

        assert await store.update(_contact("2", "Renamed")) is True
        await tasks.drain()

        assert [c.name for c in store.contacts] == ["Contact 3", "Renamed", "Contact 1"]
        assert remote.contacts["2"]["name"] == "Renamed"

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_noop(self) -> None:
        remote = MemorySyncAdapter()
        store, tasks = _store(MemoryCacheStore(), remote)
        await store.wait_settled()

        assert await store.update(_contact("ghost")) is False
        await tasks.drain()

        assert store.contacts == ()
        assert ("update_contact", "u1") not in remote.calls

    @pytest.mark.asyncio
    async def test_delete_many_removes_exactly_selected_preserving_order(self) -> None:
        cache = MemoryCacheStore()
        remote = MemorySyncAdapter()
        store, tasks = _store(cache, remote)
        await store.wait_settled()
        for contact_id in "abcdef":
            await store.add(_contact(contact_id))

        removed = await store.delete_many(["b", "e", "missing", "b"])
        await tasks.drain()

        assert removed == 2
        assert [c.id for c in store.contacts] == ["f", "d", "c", "a"]
        assert [item["id"] for item in cache.read("contacts")] == ["f", "d", "c", "a"]
        assert sorted(remote.contacts) == ["a", "c", "d", "f"]

    @pytest.mark.asyncio
    async def test_delete_single(self) -> None:
        store, _ = _store(MemoryCacheStore(), user_id=None)
        await store.add(_contact("1"))
        assert await store.delete("1") is True
        assert await store.delete("1") is False

    @pytest.mark.asyncio
    async def test_cache_write_failure_is_absorbed(self) -> None:
        cache = MemoryCacheStore()
        store, _ = _store(cache, user_id=None)

        def broken_write(key: str, value: object) -> None:
            raise CacheWriteError(key, OSError("disk full"))

        cache.write = broken_write  # type: ignore[method-assign]

        await store.add(_contact("1"))

        assert [c.id for c in store.contacts] == ["1"]
