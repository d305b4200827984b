"""Protocolo do cache local (chave-valor durável, autoritativo para leitura)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CacheWriteError(Exception):
    """Falha ao persistir um blob no cache local."""

    def __init__(self, key: str, cause: BaseException) -> None:
        super().__init__(f"Falha ao gravar '{key}' no cache local: {cause}")
        self.key = key
        self.cause = cause


class CacheStoreProtocol(ABC):
    """Contrato do cache local.

    Cada chave guarda o valor completo (coleção ou objeto) serializado
    como JSON; toda escrita substitui o valor inteiro, nunca um patch.
    """

    @abstractmethod
    def read(self, key: str) -> Any | None:
        """Lê e desserializa o valor da chave.

        Texto ausente ou malformado retorna None (nunca levanta).
        """

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """Serializa e grava o valor completo.

        Raises:
            CacheWriteError: Se a gravação falhar.
        """

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove a chave (no-op se ausente)."""
