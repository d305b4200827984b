"""Registro de métricas via structured logging.

As métricas são logs estruturados, agregáveis depois (BigQuery,
Cloud Logging, etc).

Métricas suportadas:
- Latência: tempo de operações remotas por componente/operação
- Sync: contador de resultados de sincronização remota por tipo de registro
- Parse: contador de formatos reconhecidos nos payloads escaneados

Uso:
    from app.observability.metrics import record_latency, record_sync_outcome

    record_latency("firestore_sync", "insert_contact", 42.0)
    record_sync_outcome("contacts", "insert", ok=False, error_code="REMOTE_UNAVAILABLE")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "firestore_sync")
        operation: Nome da operação (ex: "fetch_contacts")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_sync_outcome(
    record_kind: str,
    operation: str,
    *,
    ok: bool,
    error_code: str | None = None,
) -> None:
    """Registra resultado de uma operação de sincronização remota.

    Args:
        record_kind: Tipo de registro (contacts, profile, qrSettings)
        operation: Operação (reconcile, insert, update, delete, upsert)
        ok: True se o remoto confirmou
        error_code: Código do RemoteError quando falhou
    """
    extra: dict[str, object] = {
        "metric_type": "sync_outcome",
        "record_kind": record_kind,
        "operation": operation,
        "ok": ok,
    }
    if error_code:
        extra["error_code"] = error_code
    logger.info("metric_sync_outcome", extra=extra)


def record_parse_result(payload_format: str | None, *, ok: bool) -> None:
    """Registra formato reconhecido de um payload (sem o conteúdo).

    Args:
        payload_format: vcard, json, linkedin, url, text ou None
        ok: True se um contato foi criado
    """
    logger.info(
        "metric_parse_result",
        extra={
            "metric_type": "parse_result",
            "payload_format": payload_format or "none",
            "ok": ok,
        },
    )
