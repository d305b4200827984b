"""Configuração do pytest para o projeto qr_contacts."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings são lru_cache; cada teste lê o ambiente do zero."""
    from config.settings import get_base_settings, get_cache_settings, get_remote_settings

    for getter in (get_base_settings, get_cache_settings, get_remote_settings):
        getter.cache_clear()
    yield
    for getter in (get_base_settings, get_cache_settings, get_remote_settings):
        getter.cache_clear()
