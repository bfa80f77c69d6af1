"""Tests for account orchestration independent of HTTP."""
import pytest

from account_service.errors import DuplicateEmail, InvalidCredentials, NotFound
from account_service.models import User
from account_service.service import AccountService


@pytest.fixture
def service(store, hasher, tokens):
    return AccountService(store, hasher, tokens)


def test_register_returns_token_for_new_user(service, tokens):
    result = service.register("Alice", "alice@example.com", "password123")
    assert tokens.verify(result.token) == result.user.id
    assert result.user.email == "alice@example.com"
    assert result.user.role == "user"
    assert "password" not in result.user.model_dump()


def test_register_stores_hash_not_plaintext(service, db_session, hasher):
    service.register("Alice", "alice@example.com", "password123")
    stored = db_session.query(User).filter(User.email == "alice@example.com").one()
    assert stored.password != "password123"
    assert hasher.verify("password123", stored.password)


def test_register_duplicate_email(service):
    service.register("Alice", "alice@example.com", "password123")
    with pytest.raises(DuplicateEmail):
        service.register("Another", "alice@example.com", "password456")


def test_register_duplicate_email_when_precheck_loses_race(service, monkeypatch):
    service.register("Alice", "alice@example.com", "password123")
    # Simulate a concurrent request whose lookup ran before the first insert
    monkeypatch.setattr(service.store, "find_by_email", lambda email: None)
    with pytest.raises(DuplicateEmail):
        service.register("Another", "alice@example.com", "password456")


def test_login_success_issues_token_for_same_user(service, tokens):
    registered = service.register("Alice", "alice@example.com", "password123")
    result = service.login("alice@example.com", "password123")
    assert tokens.verify(result.token) == registered.user.id
    assert result.user == registered.user


def test_login_wrong_password_and_unknown_email_are_identical(service):
    service.register("Alice", "alice@example.com", "password123")
    with pytest.raises(InvalidCredentials) as wrong_password:
        service.login("alice@example.com", "wrong-password")
    with pytest.raises(InvalidCredentials) as unknown_email:
        service.login("nobody@example.com", "password123")
    assert wrong_password.value.to_dict() == unknown_email.value.to_dict()


def test_get_profile(service):
    registered = service.register("Alice", "alice@example.com", "password123")
    assert service.get_profile(registered.user.id) == registered.user


def test_get_profile_missing_user(service):
    with pytest.raises(NotFound):
        service.get_profile("no-such-id")
