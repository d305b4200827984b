"""Logging estruturado (JSON) do qr_contacts.

Uso:
    from config.logging import configure_logging, get_logger

    # Uma vez, no bootstrap
    configure_logging(level="INFO", service_name="qr_contacts")

    # Nos módulos
    logger = get_logger(__name__)
    logger.info("contact_added", extra={"contact_id": "1717171717171"})

Todo log carrega: asctime, level, logger, message, correlation_id, service.
Nunca logar nome, email ou telefone de contatos — apenas ids e contagens.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
