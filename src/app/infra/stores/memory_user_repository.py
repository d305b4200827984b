"""Repositório de usuários em memória.

Ciclo de vida explícito: criado pelo bootstrap e injetado no
`AuthService`, nunca como estado global do módulo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.user import UserAlreadyExistsError

if TYPE_CHECKING:
    from app.domain.user import UserAccount


class MemoryUserRepository:
    """Contas de usuário em memória — sem persistência entre reinícios."""

    def __init__(self) -> None:
        self._by_id: dict[str, UserAccount] = {}
        self._by_email: dict[str, str] = {}

    def find_by_email(self, email: str) -> UserAccount | None:
        user_id = self._by_email.get(email)
        return self._by_id.get(user_id) if user_id else None

    def find_by_id(self, user_id: str) -> UserAccount | None:
        return self._by_id.get(user_id)

    def insert(self, account: UserAccount) -> None:
        if account.email in self._by_email:
            raise UserAlreadyExistsError(account.email)
        self._by_id[account.user.id] = account
        self._by_email[account.email] = account.user.id

    def __len__(self) -> int:
        return len(self._by_id)
