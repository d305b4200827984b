"""correlation_id para rastrear uma sessão ou execução nos logs.

Usa ContextVar: tasks em background herdam o valor do contexto em que
foram criadas, então a escrita remota disparada por uma mutação loga
com o mesmo correlation_id da mutação.

Uso:
    with correlation_scope():
        await workspace.contacts.add(contact)
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id (gera UUID v4 se None).

    Returns:
        Token para `reset_correlation_id`.
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define um correlation_id durante o bloco e restaura o anterior."""
    token = set_correlation_id(correlation_id)
    try:
        yield get_correlation_id()
    finally:
        reset_correlation_id(token)
