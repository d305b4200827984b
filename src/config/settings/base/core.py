"""Settings base do qr_contacts.

Ambiente, nome do serviço nos logs e as credenciais compartilhadas
pelos backends (projeto GCP do store remoto, URL do cache Redis).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

DEFAULT_SERVICE_NAME = "qr_contacts"
_ENV_ALIASES: dict[str, Environment] = {
    "prod": "production",
    "production": "production",
    "stage": "staging",
    "staging": "staging",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações comuns ao processo.

    Attributes:
        environment: development|staging|production
        service_name: Valor do campo `service` em cada log
        gcp_project: Projeto GCP (fallback de FIRESTORE_PROJECT_ID)
        redis_url: URL do Redis quando CACHE_BACKEND=redis
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    gcp_project: str = ""
    redis_url: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def strict_validation(self) -> bool:
        """Settings inválidas abortam o startup fora de development."""
        return not self.is_development

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.environment not in ("development", "staging", "production"):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        return errors


def _load_base_from_env() -> BaseSettings:
    environment = _ENV_ALIASES.get(os.getenv("ENVIRONMENT", "").lower(), "development")
    return BaseSettings(
        environment=environment,
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        gcp_project=os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", "")),
        redis_url=os.getenv("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
