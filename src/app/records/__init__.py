"""Records — facades local-first por tipo de registro.

Cache local é a fonte autoritativa de leitura; o remoto é um espelho
best-effort reconciliado no carregamento (remote wins).
"""

from __future__ import annotations

from app.records.background import BackgroundTasks
from app.records.base import RecordStore
from app.records.contacts import ContactsStore
from app.records.display_settings import DisplaySettingsStore
from app.records.profile import ProfileStore
from app.records.workspace import UserWorkspace, WorkspaceNotActiveError

__all__ = [
    "BackgroundTasks",
    "ContactsStore",
    "DisplaySettingsStore",
    "ProfileStore",
    "RecordStore",
    "UserWorkspace",
    "WorkspaceNotActiveError",
]
