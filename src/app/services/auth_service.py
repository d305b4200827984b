"""Autenticação de demonstração e sessão persistida no cache local.

O repositório de usuários é injetado (ciclo de vida do bootstrap).
A sessão guarda apenas o `User` público, nunca credenciais.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import uuid
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.domain.user import User, UserAccount

if TYPE_CHECKING:
    from app.protocols.cache_store import CacheStoreProtocol
    from app.protocols.user_repository import UserRepositoryProtocol

logger = logging.getLogger(__name__)

SESSION_KEY = "user"
_PBKDF2_ITERATIONS = 200_000


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), _PBKDF2_ITERATIONS
    )
    return digest.hex()


class SessionPersistence:
    """Sessão do usuário ativo no cache local (chave `user`)."""

    def __init__(self, cache: CacheStoreProtocol) -> None:
        self._cache = cache

    def save(self, user: User) -> None:
        self._cache.write(SESSION_KEY, user.model_dump())

    def load(self) -> User | None:
        raw = self._cache.read(SESSION_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            logger.warning("session_invalid")
            return None

    def clear(self) -> None:
        self._cache.clear(SESSION_KEY)


class AuthService:
    """Cadastro, login e sessão.

    Args:
        repository: Repositório de contas (injetado)
        session: Persistência da sessão ativa
    """

    def __init__(self, repository: UserRepositoryProtocol, session: SessionPersistence) -> None:
        self._repository = repository
        self._session = session

    def register(self, email: str, password: str, name: str) -> User:
        """Cria conta.

        Raises:
            UserAlreadyExistsError: Email já cadastrado.
            ValueError: Email, senha ou nome vazios.
        """
        normalized = _normalize_email(email)
        if not normalized or not password or not name.strip():
            raise ValueError("email, senha e nome são obrigatórios")

        salt = secrets.token_hex(16)
        user = User(id=str(uuid.uuid4()), email=normalized, name=name.strip())
        self._repository.insert(
            UserAccount(user=user, password_hash=hash_password(password, salt), salt=salt)
        )
        logger.info("user_registered", extra={"user_id": user.id})
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        """Retorna o usuário se as credenciais conferem."""
        account = self._repository.find_by_email(_normalize_email(email))
        if account is None:
            return None
        candidate = hash_password(password, account.salt)
        if not hmac.compare_digest(candidate, account.password_hash):
            logger.info("login_rejected", extra={"user_id": account.user.id})
            return None
        return account.user

    def get_user(self, user_id: str) -> User | None:
        account = self._repository.find_by_id(user_id)
        return account.user if account else None

    def login(self, email: str, password: str) -> User | None:
        """Autentica e persiste a sessão."""
        user = self.authenticate(email, password)
        if user is not None:
            self._session.save(user)
            logger.info("user_logged_in", extra={"user_id": user.id})
        return user

    def logout(self) -> None:
        self._session.clear()
        logger.info("user_logged_out")

    def current_user(self) -> User | None:
        return self._session.load()
