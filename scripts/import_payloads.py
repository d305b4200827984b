#!/usr/bin/env python3
"""Importa payloads de QR (um por linha) para a coleção de contatos.

Uso:
    python scripts/import_payloads.py payloads.txt --user-id u-123
    python scripts/import_payloads.py cartao.vcf --single

Sem --user-id os contatos ficam apenas no cache local.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from app.bootstrap import (
    create_workspace,
    get_cache_store,
    get_remote_adapter,
    initialize_app,
    validate_runtime_settings,
)
from app.observability import correlation_scope
from app.services.contact_intake import ContactIntake
from app.services.payload_parser import ParseFailure


@dataclass
class ImportStats:
    read: int = 0
    created: int = 0
    rejected: dict[str, int] = field(default_factory=dict)
    synced: bool = True


def read_payloads(path: Path, *, single: bool) -> list[str]:
    text = path.read_text(encoding="utf-8")
    if single:
        return [text]
    return [line for line in text.splitlines() if line.strip()]


async def import_payloads(
    payloads: list[str],
    user_id: str | None,
    *,
    drain_timeout: float,
) -> ImportStats:
    workspace = create_workspace(get_cache_store(), get_remote_adapter(), user_id)
    await workspace.wait_settled()
    intake = ContactIntake(workspace.contacts)
    stats = ImportStats(read=len(payloads))

    for raw in payloads:
        result = await intake.ingest_scan(raw)
        if isinstance(result, ParseFailure):
            stats.rejected[result.reason] = stats.rejected.get(result.reason, 0) + 1
        else:
            stats.created += 1

    stats.synced = await workspace.tasks.drain(timeout_seconds=drain_timeout)
    workspace.close()
    return stats


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", type=Path, help="Arquivo com os payloads.")
    parser.add_argument(
        "--single",
        action="store_true",
        help="Trata o arquivo inteiro como um único payload (ex: vCard multi-linha).",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="Usuário dono dos contatos. Se omitido, não sincroniza com o remoto.",
    )
    parser.add_argument(
        "--drain-timeout",
        type=float,
        default=30.0,
        help="Segundos de espera pelas escritas remotas antes de sair.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_app()
    validate_runtime_settings()
    payloads = read_payloads(args.path, single=args.single)
    with correlation_scope():
        stats = asyncio.run(
            import_payloads(payloads, args.user_id, drain_timeout=args.drain_timeout)
        )
    rejected = " ".join(f"{reason}={count}" for reason, count in sorted(stats.rejected.items()))
    mode = "synced" if args.user_id else "local-only"
    print(
        f"[{mode}] read={stats.read} created={stats.created} "
        f"rejected=({rejected or 'none'}) remote_drained={stats.synced}"
    )


if __name__ == "__main__":
    main()
