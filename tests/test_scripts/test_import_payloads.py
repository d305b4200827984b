"""Testes do script de importação de payloads."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

from app.bootstrap import get_cache_store, get_remote_adapter

SCRIPT = Path(__file__).parents[2] / "scripts" / "import_payloads.py"


@pytest.fixture
def script(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> ModuleType:
    monkeypatch.setenv("CACHE_BACKEND", "file")
    monkeypatch.setenv("CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("REMOTE_BACKEND", "memory")
    get_cache_store.cache_clear()
    get_remote_adapter.cache_clear()
    spec = importlib.util.spec_from_file_location("import_payloads", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    yield module
    get_cache_store.cache_clear()
    get_remote_adapter.cache_clear()


def test_read_payloads_one_per_line(script: ModuleType, tmp_path: Path) -> None:
    source = tmp_path / "payloads.txt"
    source.write_text("hello\n\nhttps://x.com/bob\n", encoding="utf-8")
    assert script.read_payloads(source, single=False) == ["hello", "https://x.com/bob"]
    assert script.read_payloads(source, single=True) == ["hello\n\nhttps://x.com/bob\n"]


@pytest.mark.asyncio
async def test_import_counts_created_and_rejected(script: ModuleType) -> None:
    payloads = ["hello", "BEGIN:VCARD\nEMAIL:a@b.c\nEND:VCARD", '{"name":"Bob"}']

    stats = await script.import_payloads(payloads, "u1", drain_timeout=5.0)

    assert stats.read == 3
    assert stats.created == 2
    assert stats.rejected == {"missing_name": 1}
    assert stats.synced is True
    assert len(get_remote_adapter().contacts) == 2
    assert len(get_cache_store().read("contacts")) == 2
