"""RecordStore - facade local-first de um tipo de registro.

Máquina de estados por tipo (independente entre tipos):

    Init        hidrata a memória a partir do cache (síncrono); ausente ou
                inválido usa o default do tipo.
    Reconcile   só com user_id: busca o snapshot remoto em background.
                Sucesso substitui memória e cache por completo (remote
                wins, sem merge por campo). Falha mantém o estado local.
    Settled     `is_loading` vira False quando a reconciliação termina
                (sucesso ou falha).
    Mutate      memória -> cache (write-through) -> escrita remota
                fire-and-forget; o resultado remoto só afeta logs.

Falhas de cache e do remoto nunca chegam ao chamador como exceção.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import ValidationError

from app.observability.metrics import record_sync_outcome
from app.protocols.cache_store import CacheWriteError
from config.logging import log_fallback

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.domain.record_kind import RecordKind
    from app.protocols.cache_store import CacheStoreProtocol
    from app.protocols.remote_sync import RemoteResult, RemoteSyncAdapter
    from app.records.background import BackgroundTasks

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")


class RecordStore(ABC, Generic[StateT]):
    """Base das facades de contatos, perfil e configurações do cartão.

    Args:
        cache: Cache local (autoritativo para leitura)
        remote: Adapter remoto (pode ser a variante indisponível)
        tasks: Registro das escritas remotas em background
        user_id: Usuário ativo; None mantém o tipo em modo só-cache
    """

    kind: RecordKind

    def __init__(
        self,
        cache: CacheStoreProtocol,
        remote: RemoteSyncAdapter,
        tasks: BackgroundTasks,
        user_id: str | None = None,
    ) -> None:
        self._cache = cache
        self._remote = remote
        self._tasks = tasks
        self._user_id = user_id or None
        self._state: StateT = self._default()
        self._settled = asyncio.Event()
        self._started = False
        self._closed = False

    # ──────────────────────────────────────────────────────────────
    # Hooks por tipo
    # ──────────────────────────────────────────────────────────────

    @abstractmethod
    def _default(self) -> StateT: ...

    @abstractmethod
    def _decode(self, raw: Any) -> StateT:
        """Converte o blob do cache; levanta ValidationError/TypeError se inválido."""

    @abstractmethod
    def _encode(self, state: StateT) -> Any: ...

    @abstractmethod
    async def _fetch_remote(self, user_id: str) -> RemoteResult[StateT]: ...

    # ──────────────────────────────────────────────────────────────
    # Ciclo de vida
    # ──────────────────────────────────────────────────────────────

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def is_loading(self) -> bool:
        return not self._settled.is_set()

    def start(self) -> None:
        """Hidrata do cache e dispara a reconciliação remota (se houver usuário)."""
        if self._started:
            return
        self._started = True
        self._state = self._hydrate()
        if self._user_id is None:
            self._settled.set()
            return
        self._tasks.spawn(self._reconcile(self._user_id), label=f"{self.kind}:reconcile")

    async def wait_settled(self) -> None:
        await self._settled.wait()

    def close(self) -> None:
        """Descarta interesse em resultados remotos ainda pendentes."""
        self._closed = True
        self._settled.set()

    def _hydrate(self) -> StateT:
        raw = self._cache.read(self.kind)
        if raw is None:
            return self._default()
        try:
            return self._decode(raw)
        except (ValidationError, TypeError, ValueError) as exc:
            logger.warning(
                "cache_record_invalid",
                extra={"record_kind": str(self.kind), "error_type": type(exc).__name__},
            )
            log_fallback(logger, f"{self.kind}_store", reason="cache_corrupt")
            return self._default()

    async def _reconcile(self, user_id: str) -> None:
        try:
            result = await self._fetch_remote(user_id)
        except Exception as exc:
            # Sem resposta é tratado como resposta de erro
            logger.warning(
                "remote_fetch_raised",
                extra={"record_kind": str(self.kind), "error_type": type(exc).__name__},
            )
            log_fallback(logger, f"{self.kind}_store", reason="remote_exception")
            record_sync_outcome(str(self.kind), "reconcile", ok=False, error_code="exception")
            self._settled.set()
            return

        if self._closed:
            return

        if result.ok and result.data is not None:
            self._commit(result.data)
            logger.info("remote_snapshot_applied", extra={"record_kind": str(self.kind)})
            record_sync_outcome(str(self.kind), "reconcile", ok=True)
        else:
            code = result.error.code if result.error else "empty"
            logger.info(
                "remote_snapshot_unavailable",
                extra={"record_kind": str(self.kind), "error_code": code},
            )
            log_fallback(logger, f"{self.kind}_store", reason=code)
            record_sync_outcome(str(self.kind), "reconcile", ok=False, error_code=code)
        self._settled.set()

    # ──────────────────────────────────────────────────────────────
    # Mutação
    # ──────────────────────────────────────────────────────────────

    def _commit(self, state: StateT) -> None:
        """Aplica estado em memória e grava o blob completo no cache."""
        self._state = state
        try:
            self._cache.write(self.kind, self._encode(state))
        except CacheWriteError as exc:
            logger.error(
                "cache_write_failed",
                extra={"record_kind": str(self.kind), "error_type": type(exc.cause).__name__},
            )

    def _push(
        self,
        operation: str,
        call: Callable[[str], Awaitable[RemoteResult[Any]]],
    ) -> asyncio.Task[Any] | None:
        """Agenda a escrita remota sem aguardá-la (no-op sem usuário)."""
        if self._user_id is None or self._closed:
            return None
        return self._tasks.spawn(
            self._run_push(operation, call, self._user_id),
            label=f"{self.kind}:{operation}",
        )

    async def _run_push(
        self,
        operation: str,
        call: Callable[[str], Awaitable[RemoteResult[Any]]],
        user_id: str,
    ) -> None:
        try:
            result = await call(user_id)
        except Exception as exc:
            logger.warning(
                f"remote_{operation}_raised",
                extra={"record_kind": str(self.kind), "error_type": type(exc).__name__},
            )
            record_sync_outcome(str(self.kind), operation, ok=False, error_code="exception")
            return

        if result.ok:
            logger.debug(f"remote_{operation}_ok", extra={"record_kind": str(self.kind)})
            record_sync_outcome(str(self.kind), operation, ok=True)
            return

        code = result.error.code if result.error else "unknown"
        logger.info(
            f"remote_{operation}_failed",
            extra={"record_kind": str(self.kind), "error_code": code, "kept_locally": True},
        )
        record_sync_outcome(str(self.kind), operation, ok=False, error_code=code)
