from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from contatos.core.security import hash_password, verify_password
from contatos.repositories.sql_repository import SQLRepository
from contatos.services.account_service import AccountService
from contatos.services.auth_service import AuthService, InvalidCredentialsError
from contatos.services.errors import ConflictError, InvalidInputError, NotFoundError
from contatos.services.session_service import resolve_session


def test_hash_roundtrip_and_unknown_format():
    stored = hash_password("segredo123")
    assert stored.startswith("argon2$")
    assert verify_password("segredo123", stored)
    assert not verify_password("errado123", stored)
    assert not verify_password("segredo123", "scrypt$abc$def")
    assert not verify_password("segredo123", None)


def test_register_normalizes_email(temp_db):
    svc = AuthService()
    user = svc.register("  Alice ", "Alice@Example.COM ", "segredo123")
    assert user.name == "Alice"
    assert user.email == "alice@example.com"
    assert svc.email_exists("ALICE@example.com")
    assert not svc.email_exists("bob@example.com")
    assert not svc.email_exists("")


def test_register_rejects_duplicates_and_short_passwords(temp_db):
    svc = AuthService()
    svc.register("Alice", "alice@example.com", "segredo123")
    with pytest.raises(ConflictError):
        svc.register("Outra", "ALICE@example.com", "segredo123")
    with pytest.raises(InvalidInputError):
        svc.register("Bob", "bob@example.com", "curta")
    with pytest.raises(InvalidInputError):
        svc.register(" ", "bob@example.com", "segredo123")


def test_login_issues_session(temp_db):
    svc = AuthService()
    user = svc.register("Alice", "alice@example.com", "segredo123")

    result = svc.login("ALICE@example.com", "segredo123")
    assert result.token_type == "Bearer"
    assert result.user.id == user.id
    assert resolve_session(result.token) == user.id

    svc.logout(result.token)
    assert resolve_session(result.token) is None


@pytest.mark.parametrize("email,password", [("alice@example.com", "errada123"), ("nobody@example.com", "segredo123"), ("", "x")])
def test_login_rejects_bad_credentials(temp_db, email, password):
    svc = AuthService()
    svc.register("Alice", "alice@example.com", "segredo123")
    with pytest.raises(InvalidCredentialsError):
        svc.login(email, password)


def test_expired_session_is_dropped(temp_db):
    repo = SQLRepository()
    user = repo.create_user("Alice", "alice@example.com", "hash")
    repo.create_user_session("old-token", user.id, datetime.now(timezone.utc) - timedelta(minutes=1))

    assert resolve_session("old-token") is None
    assert repo.get_user_session("old-token") is None
    assert resolve_session(None) is None
    assert resolve_session("unknown") is None


def test_delete_account_requires_password(temp_db):
    auth = AuthService()
    user = auth.register("Alice", "alice@example.com", "segredo123")
    token = auth.login("alice@example.com", "segredo123").token
    accounts = AccountService()

    with pytest.raises(InvalidInputError):
        accounts.delete_account(user.id, "errada123")

    accounts.delete_account(user.id, "segredo123")
    assert not auth.email_exists("alice@example.com")
    assert resolve_session(token) is None
    with pytest.raises(NotFoundError):
        accounts.delete_account(user.id, "segredo123")
