"""User - identidade opaca do usuário ativo.

A senha nunca faz parte do modelo público; apenas `UserAccount`
(uso interno do repositório) guarda o hash.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Usuário autenticado (sem credenciais)."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str


@dataclass(frozen=True)
class UserAccount:
    """Registro interno do repositório de usuários."""

    user: User
    password_hash: str
    salt: str

    @property
    def email(self) -> str:
        return self.user.email


class UserAlreadyExistsError(Exception):
    """Email já cadastrado no repositório."""

    def __init__(self, email: str) -> None:
        super().__init__("User already exists")
        self.email = email
