"""Protocolo do adapter de sincronização com o banco remoto.

Toda operação retorna `RemoteResult` e nunca levanta para falhas
esperadas (rede, credenciais ausentes, registro inexistente). Apenas
violações de contrato (ex: `user_id` vazio) levantam `ValueError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from app.domain.contact import ContactRecord
    from app.domain.display_settings import DisplaySettings
    from app.domain.profile import ProfileRecord

T = TypeVar("T")

REMOTE_UNAVAILABLE = "REMOTE_UNAVAILABLE"
REMOTE_NOT_FOUND = "not_found"
REMOTE_ERROR = "remote_error"


@dataclass(frozen=True)
class RemoteError:
    """Erro esperado de uma operação remota."""

    code: str
    message: str


@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    """Par {data, error} retornado por toda operação remota."""

    data: T | None = None
    error: RemoteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T | None = None) -> RemoteResult[T]:
        return cls(data=data)

    @classmethod
    def failure(cls, code: str, message: str) -> RemoteResult[T]:
        return cls(error=RemoteError(code=code, message=message))


def require_user_id(user_id: str | None) -> str:
    """Garante escopo por usuário (erro de programação se ausente)."""
    if not user_id or not str(user_id).strip():
        raise ValueError("user_id é obrigatório para operações remotas")
    return user_id


class RemoteSyncAdapter(ABC):
    """Espelho remoto por usuário dos três tipos de registro."""

    @property
    @abstractmethod
    def available(self) -> bool:
        """False para a variante sem backend configurado."""

    # Contatos: escopo (user_id, contact_id)

    @abstractmethod
    async def fetch_contacts(self, user_id: str) -> RemoteResult[list[ContactRecord]]: ...

    @abstractmethod
    async def insert_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]: ...

    @abstractmethod
    async def update_contact(self, user_id: str, contact: ContactRecord) -> RemoteResult[None]: ...

    @abstractmethod
    async def delete_contact(self, user_id: str, contact_id: str) -> RemoteResult[None]: ...

    # Singletons: escopo (user_id)

    @abstractmethod
    async def fetch_profile(self, user_id: str) -> RemoteResult[ProfileRecord]: ...

    @abstractmethod
    async def upsert_profile(self, user_id: str, profile: ProfileRecord) -> RemoteResult[None]: ...

    @abstractmethod
    async def fetch_display_settings(self, user_id: str) -> RemoteResult[DisplaySettings]: ...

    @abstractmethod
    async def upsert_display_settings(
        self, user_id: str, settings: DisplaySettings
    ) -> RemoteResult[None]: ...
