"""Testes para config.logging.

Cobre: configure_logging, get_logger, log_fallback,
CorrelationIdFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "msg", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("ERROR", logging.ERROR)],
    )
    def test_configure_logging_levels(self, level: str, expected: int) -> None:
        """Nível é case insensitive."""
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "qr_contacts"


class TestGetLogger:
    """Testes para get_logger."""

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        logger = get_logger("app.records.contacts")
        assert isinstance(logger, logging.Logger)
        assert logger is get_logger("app.records.contacts")


class TestLogFallback:
    """Testes para log_fallback."""

    def test_log_fallback_basic(self) -> None:
        """Formato lazy: template + componente; extra com fallback_used."""
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "contacts_store")
        args, kwargs = logger.info.call_args
        assert args == ("Fallback applied for %s", "contacts_store")
        assert kwargs["extra"] == {"fallback_used": True, "component": "contacts_store"}

    def test_log_fallback_with_all_params(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "remote_adapter", reason="REMOTE_UNAVAILABLE", elapsed_ms=12.5)
        extra = logger.info.call_args[1]["extra"]
        assert extra["reason"] == "REMOTE_UNAVAILABLE"
        assert extra["elapsed_ms"] == 12.5


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("qr_contacts", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "qr_contacts"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        """correlation_id passado via extra tem precedência."""
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("svc")
        record = _record(level=logging.ERROR)
        assert filter_.filter(record) is True
        assert record.correlation_id == ""


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_fields_and_rename_map(self) -> None:
        expected = {"asctime", "levelname", "name", "message", "correlation_id", "service"}
        assert expected == REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record(self) -> None:
        """Saída é JSON com campos renomeados e extras."""
        formatter = create_json_formatter()
        record = _record("contact_added")
        record.correlation_id = "abc-123"
        record.service = "qr_contacts"
        record.contact_id = "1717171717171"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "contact_added"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "test"
        assert payload["correlation_id"] == "abc-123"
        assert payload["contact_id"] == "1717171717171"
