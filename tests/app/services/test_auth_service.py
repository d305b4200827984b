"""Testes do AuthService (repositório injetado + sessão no cache)."""

from __future__ import annotations

import pytest

from app.domain.user import User, UserAlreadyExistsError
from app.infra.stores import MemoryCacheStore, MemoryUserRepository
from app.services.auth_service import SESSION_KEY, AuthService, SessionPersistence


@pytest.fixture
def cache() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def repository() -> MemoryUserRepository:
    return MemoryUserRepository()


@pytest.fixture
def service(repository: MemoryUserRepository, cache: MemoryCacheStore) -> AuthService:
    return AuthService(repository, SessionPersistence(cache))


class TestRegister:
    """Testes de cadastro."""

    def test_register_normalizes_email(
        self, service: AuthService, repository: MemoryUserRepository
    ) -> None:
        user = service.register("  Jane@Example.com ", "s3cret", "Jane")
        assert user.email == "jane@example.com"
        assert len(repository) == 1
        account = repository.find_by_email("jane@example.com")
        assert account is not None
        assert account.password_hash != "s3cret"

    def test_duplicate_email_raises(self, service: AuthService) -> None:
        service.register("jane@example.com", "a", "Jane")
        with pytest.raises(UserAlreadyExistsError, match="User already exists"):
            service.register("JANE@example.com", "b", "Other")

    @pytest.mark.parametrize(
        ("email", "password", "name"),
        [("", "p", "n"), ("a@b.c", "", "n"), ("a@b.c", "p", "  ")],
    )
    def test_missing_fields_raise(
        self, service: AuthService, email: str, password: str, name: str
    ) -> None:
        with pytest.raises(ValueError):
            service.register(email, password, name)


class TestLogin:
    """Testes de login/logout e sessão."""

    def test_login_persists_session(self, service: AuthService, cache: MemoryCacheStore) -> None:
        registered = service.register("jane@example.com", "s3cret", "Jane")

        user = service.login("jane@example.com", "s3cret")

        assert user == registered
        assert service.current_user() == registered
        assert "password" not in (cache.raw(SESSION_KEY) or "")

    def test_wrong_password_returns_none(self, service: AuthService) -> None:
        service.register("jane@example.com", "s3cret", "Jane")
        assert service.login("jane@example.com", "wrong") is None
        assert service.current_user() is None

    def test_unknown_email_returns_none(self, service: AuthService) -> None:
        assert service.authenticate("nobody@example.com", "x") is None

    def test_logout_clears_session(self, service: AuthService) -> None:
        service.register("jane@example.com", "s3cret", "Jane")
        service.login("jane@example.com", "s3cret")
        service.logout()
        assert service.current_user() is None

    def test_get_user(self, service: AuthService) -> None:
        user = service.register("jane@example.com", "s3cret", "Jane")
        assert service.get_user(user.id) == user
        assert service.get_user("missing") is None


def test_corrupt_session_is_ignored(cache: MemoryCacheStore) -> None:
    cache.write(SESSION_KEY, {"id": "1"})
    assert SessionPersistence(cache).load() is None


def test_session_round_trip(cache: MemoryCacheStore) -> None:
    session = SessionPersistence(cache)
    user = User(id="u1", email="a@b.c", name="A")
    session.save(user)
    assert session.load() == user
