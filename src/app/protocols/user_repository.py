"""Protocolo do repositório de usuários (autenticação de demonstração)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.user import UserAccount


class UserRepositoryProtocol(Protocol):
    """Contrato mínimo para contas de usuário."""

    def find_by_email(self, email: str) -> UserAccount | None:
        """Busca conta por email (normalizado pelo chamador)."""
        ...

    def find_by_id(self, user_id: str) -> UserAccount | None:
        """Busca conta por id."""
        ...

    def insert(self, account: UserAccount) -> None:
        """Insere nova conta.

        Raises:
            UserAlreadyExistsError: Se o email já estiver cadastrado.
        """
        ...
