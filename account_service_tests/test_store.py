"""Tests for the credential store."""
import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from account_service.errors import DuplicateEmail, InternalFailure
from account_service.models import User


def test_create_assigns_id_and_default_role(store):
    user = store.create(name="Alice", email="alice@example.com", password_hash="$hash$")
    assert user.id
    assert user.role == "user"
    assert store.find_by_id(user.id).email == "alice@example.com"


def test_find_by_email_is_exact_match(store):
    store.create(name="Alice", email="alice@example.com", password_hash="$hash$")
    assert store.find_by_email("alice@example.com") is not None
    assert store.find_by_email("bob@example.com") is None


def test_find_by_id_miss_returns_none(store):
    assert store.find_by_id("does-not-exist") is None


def test_unique_index_rejects_duplicate_insert(store, db_session):
    """A second insert with the same email fails even without any pre-check."""
    store.create(name="Alice", email="same@example.com", password_hash="$hash$")
    with pytest.raises(DuplicateEmail) as exc_info:
        store.create(name="Mallory", email="same@example.com", password_hash="$hash$")
    assert exc_info.value.message == "Email already in use"

    # Session is still usable after the rollback
    assert db_session.query(User).filter(User.email == "same@example.com").count() == 1


def test_users_table_has_unique_email_index(database):
    inspector = inspect(database.engine)
    assert "users" in inspector.get_table_names()
    unique_columns = [
        idx["column_names"] for idx in inspector.get_indexes("users") if idx.get("unique")
    ]
    unique_columns += [c["column_names"] for c in inspector.get_unique_constraints("users")]
    assert ["email"] in unique_columns


def test_store_failure_is_internal(store, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(store.db, "query", broken)
    with pytest.raises(InternalFailure):
        store.find_by_email("alice@example.com")
