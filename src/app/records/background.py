"""Tasks em background (fire-and-forget) com observação de conclusão.

As escritas remotas não são aguardadas pelo fluxo principal, mas ficam
registradas aqui: referências fortes (o GC não as coleta), falhas
logadas na conclusão, hooks de conclusão e `drain()` para testes e
shutdown.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine, Iterable

logger = logging.getLogger(__name__)

SettledHook = Callable[[str, asyncio.Task[Any]], None]


class BackgroundTasks:
    """Registro de tasks destacadas de um escopo (ex: uma sessão de usuário)."""

    def __init__(self, hooks: Iterable[SettledHook] = ()) -> None:
        self._active: set[asyncio.Task[Any]] = set()
        self._detached: set[asyncio.Task[Any]] = set()
        self._hooks: list[SettledHook] = list(hooks)

    @property
    def pending(self) -> int:
        return len(self._active)

    @property
    def hooks(self) -> tuple[SettledHook, ...]:
        return tuple(self._hooks)

    def on_settled(self, hook: SettledHook) -> None:
        """Registra hook chamado com (label, task) quando uma task termina."""
        self._hooks.append(hook)

    def spawn(self, coroutine: Coroutine[Any, Any, Any], *, label: str) -> asyncio.Task[Any]:
        """Agenda a coroutine sem aguardá-la.

        Requer event loop em execução.
        """
        task = asyncio.create_task(coroutine, name=label)
        self._active.add(task)
        task.add_done_callback(lambda done: self._on_done(label, done))
        logger.debug(
            "background_task_scheduled",
            extra={"label": label, "active_tasks": len(self._active)},
        )
        return task

    def _on_done(self, label: str, task: asyncio.Task[Any]) -> None:
        self._active.discard(task)
        self._detached.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "background_task_failed",
                    extra={
                        "label": label,
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active),
                    },
                )
        for hook in list(self._hooks):
            try:
                hook(label, task)
            except Exception as hook_exc:
                logger.warning(
                    "background_hook_failed",
                    extra={"label": label, "error_type": type(hook_exc).__name__},
                )

    async def drain(self, timeout_seconds: float | None = None) -> bool:
        """Aguarda até não haver tasks pendentes.

        Tasks agendadas durante a espera também são aguardadas.

        Returns:
            False se o timeout expirou com tasks ainda pendentes.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout_seconds is None else loop.time() + timeout_seconds
        while self._active:
            remaining = None if deadline is None else max(deadline - loop.time(), 0.0)
            if remaining == 0.0:
                return False
            _, pending = await asyncio.wait(list(self._active), timeout=remaining)
            if pending and deadline is not None and loop.time() >= deadline:
                logger.warning("background_drain_timeout", extra={"pending_tasks": len(pending)})
                return False
        return True

    def discard(self) -> None:
        """Deixa de acompanhar as tasks ativas.

        Elas seguem até o fim sem join; as referências são mantidas só
        para que o event loop não as perca antes de concluírem.
        """
        self._detached.update(self._active)
        self._active.clear()
        self._hooks.clear()
