"""UserWorkspace - as três facades do usuário ativo.

Trocar de usuário descarta as facades anteriores (e o interesse nas
reconciliações pendentes) e re-hidrata tudo a partir do cache para a
nova identidade; nada do usuário anterior fica em memória.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from app.records.background import BackgroundTasks
from app.records.contacts import ContactsStore
from app.records.display_settings import DisplaySettingsStore
from app.records.profile import ProfileStore

if TYPE_CHECKING:
    from app.protocols.cache_store import CacheStoreProtocol
    from app.protocols.remote_sync import RemoteSyncAdapter

logger = logging.getLogger(__name__)

StoreT = TypeVar("StoreT")


class WorkspaceNotActiveError(RuntimeError):
    """Acesso às facades antes de `activate()`."""


class UserWorkspace:
    """Composição por sessão: contatos, perfil e configurações do cartão.

    Args:
        cache: Cache local compartilhado pelo processo
        remote: Adapter remoto (ou a variante indisponível)
    """

    def __init__(self, cache: CacheStoreProtocol, remote: RemoteSyncAdapter) -> None:
        self._cache = cache
        self._remote = remote
        self._tasks = BackgroundTasks()
        self._user_id: str | None = None
        self._contacts: ContactsStore | None = None
        self._profile: ProfileStore | None = None
        self._display_settings: DisplaySettingsStore | None = None

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def tasks(self) -> BackgroundTasks:
        return self._tasks

    @property
    def contacts(self) -> ContactsStore:
        return self._require(self._contacts)

    @property
    def profile(self) -> ProfileStore:
        return self._require(self._profile)

    @property
    def display_settings(self) -> DisplaySettingsStore:
        return self._require(self._display_settings)

    @property
    def is_loading(self) -> bool:
        return any(store.is_loading for store in self._stores())

    def activate(self, user_id: str | None) -> None:
        """Ativa o contexto de um usuário (None = modo só-cache)."""
        self.close()
        self._user_id = user_id or None
        self._contacts = ContactsStore(self._cache, self._remote, self._tasks, self._user_id)
        self._profile = ProfileStore(self._cache, self._remote, self._tasks, self._user_id)
        self._display_settings = DisplaySettingsStore(
            self._cache, self._remote, self._tasks, self._user_id
        )
        for store in self._stores():
            store.start()
        logger.info(
            "workspace_activated",
            extra={
                "authenticated": self._user_id is not None,
                "remote_available": self._remote.available,
            },
        )

    async def wait_settled(self) -> None:
        """Aguarda a reconciliação dos três tipos (sucesso ou falha)."""
        await asyncio.gather(*(store.wait_settled() for store in self._stores()))

    def close(self) -> None:
        """Descarta as facades atuais; escritas pendentes seguem sem join.

        Hooks de `tasks.on_settled` passam para o novo registro e continuam
        valendo para os próximos usuários.
        """
        for store in self._stores():
            store.close()
        hooks = self._tasks.hooks
        self._tasks.discard()
        self._tasks = BackgroundTasks(hooks)
        self._contacts = None
        self._profile = None
        self._display_settings = None

    def _stores(self) -> list[ContactsStore | ProfileStore | DisplaySettingsStore]:
        return [
            store
            for store in (self._contacts, self._profile, self._display_settings)
            if store is not None
        ]

    @staticmethod
    def _require(store: StoreT | None) -> StoreT:
        if store is None:
            raise WorkspaceNotActiveError("Workspace não ativado; chame activate() primeiro")
        return store
