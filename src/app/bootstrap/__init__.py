"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e cria as
implementações concretas (cache, remoto, repositório de usuários).

Uso:
    from app.bootstrap import initialize_app, get_cache_store, get_remote_adapter

    initialize_app()
    workspace = create_workspace(get_cache_store(), get_remote_adapter(), user_id)
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.bootstrap.dependencies import (
    create_auth_service,
    create_cache_store,
    create_remote_adapter,
    create_user_repository,
    create_workspace,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_cache_settings, get_remote_settings

DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)

__all__ = [
    "create_auth_service",
    "create_workspace",
    "get_cache_store",
    "get_remote_adapter",
    "get_user_repository",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do processo.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    configure_logging(
        level=log_level,
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Logging em DEBUG para testes."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings no startup.

    Em `staging`/`production` falha rápido; em `development` só alerta.

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito.
    """
    base = get_base_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"cache: {error}" for error in get_cache_settings().validate(base.redis_url))
    errors.extend(f"remote: {error}" for error in get_remote_settings().validate(base.gcp_project))

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.strict_validation:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Singletons do processo (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_cache_store():
    """Cache local do processo (singleton)."""
    return create_cache_store()


@lru_cache(maxsize=1)
def get_remote_adapter():
    """Adapter remoto do processo (singleton)."""
    return create_remote_adapter()


@lru_cache(maxsize=1)
def get_user_repository():
    """Repositório de usuários do processo (singleton)."""
    return create_user_repository()
