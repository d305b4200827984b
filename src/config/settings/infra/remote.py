"""Settings do store remoto (Firestore).

Sem backend configurado o sistema opera apenas com o cache local.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

RemoteBackend = Literal["firestore", "memory", "disabled"]

_VALID_BACKENDS = ("firestore", "memory", "disabled")


@dataclass(frozen=True)
class RemoteSettings:
    """Configurações do store remoto.

    Attributes:
        backend: firestore, memory (dev/test) ou disabled
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_contacts: Collection de contatos
        collection_profiles: Collection de perfis
        collection_qr_settings: Collection de configurações do cartão QR
        timeout_seconds: Timeout por chamada remota
    """

    backend: RemoteBackend = "disabled"
    project_id: str = ""
    collection_contacts: str = "contacts"
    collection_profiles: str = "profiles"
    collection_qr_settings: str = "qr_settings"
    timeout_seconds: float = 10.0

    def effective_project(self, gcp_project: str = "") -> str:
        return self.project_id or gcp_project

    def is_configured(self, gcp_project: str = "") -> bool:
        """True se há backend remoto utilizável."""
        if self.backend == "memory":
            return True
        return self.backend == "firestore" and bool(self.effective_project(gcp_project))

    def validate(self, gcp_project: str = "") -> list[str]:
        """Valida configurações do store remoto.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        if self.backend not in _VALID_BACKENDS:
            errors.append(f"REMOTE_BACKEND inválido: {self.backend}")
        if self.backend == "firestore" and not self.effective_project(gcp_project):
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")
        if self.timeout_seconds <= 0:
            errors.append("REMOTE_TIMEOUT_SECONDS deve ser positivo")
        return errors


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        return 10.0


def _load_remote_from_env() -> RemoteSettings:
    return RemoteSettings(
        backend=os.getenv("REMOTE_BACKEND", "disabled").lower(),  # type: ignore[arg-type]
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_contacts=os.getenv("REMOTE_COLLECTION_CONTACTS", "contacts"),
        collection_profiles=os.getenv("REMOTE_COLLECTION_PROFILES", "profiles"),
        collection_qr_settings=os.getenv("REMOTE_COLLECTION_QR_SETTINGS", "qr_settings"),
        timeout_seconds=_parse_timeout(os.getenv("REMOTE_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_remote_settings() -> RemoteSettings:
    """Retorna instância cacheada de RemoteSettings."""
    return _load_remote_from_env()
