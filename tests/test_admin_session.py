"""Tests for the admin session value and its persistence."""

from datetime import datetime, timedelta

import pytest

from errors import ConfigurationError
from services.admin_session import (
    ADMIN_SESSION_KEY,
    SESSION_DURATION,
    AdminSession,
    clear_session,
    is_valid,
    load_session,
    save_session,
    session_key,
    verify_admin_password,
)

NOW = datetime(2026, 10, 19, 12, 0, 0)


class TestIsValid:
    """Validity predicate."""

    def test_fresh_session_is_valid(self) -> None:
        assert is_valid(AdminSession(True, NOW), NOW)

    def test_expires_at_max_age(self) -> None:
        session = AdminSession(True, NOW - SESSION_DURATION)
        assert not is_valid(session, NOW)

    def test_just_before_expiry(self) -> None:
        session = AdminSession(True, NOW - SESSION_DURATION + timedelta(seconds=1))
        assert is_valid(session, NOW)

    def test_unauthenticated_is_invalid(self) -> None:
        assert not is_valid(AdminSession(False, NOW), NOW)

    def test_none_is_invalid(self) -> None:
        assert not is_valid(None, NOW)

    def test_issued_in_future_is_invalid(self) -> None:
        assert not is_valid(AdminSession(True, NOW + timedelta(minutes=5)), NOW)

    def test_custom_max_age(self) -> None:
        session = AdminSession(True, NOW - timedelta(hours=2))
        assert not is_valid(session, NOW, max_age=timedelta(hours=1))


class TestSessionStore:
    """load / save / clear against a key-value store."""

    def test_save_then_load(self) -> None:
        store: dict[str, str] = {}
        session = AdminSession(True, NOW)

        save_session(store, ADMIN_SESSION_KEY, session)

        assert load_session(store, ADMIN_SESSION_KEY, NOW + timedelta(hours=1)) == session

    def test_load_missing(self) -> None:
        assert load_session({}, ADMIN_SESSION_KEY, NOW) is None

    def test_load_expired_clears_entry(self) -> None:
        store: dict[str, str] = {}
        save_session(store, ADMIN_SESSION_KEY, AdminSession(True, NOW - timedelta(hours=25)))

        assert load_session(store, ADMIN_SESSION_KEY, NOW) is None
        assert ADMIN_SESSION_KEY not in store

    def test_load_malformed_clears_entry(self) -> None:
        store = {ADMIN_SESSION_KEY: "{not json"}

        assert load_session(store, ADMIN_SESSION_KEY, NOW) is None
        assert store == {}

    def test_load_missing_field_clears_entry(self) -> None:
        store = {ADMIN_SESSION_KEY: '{"authenticated": true}'}
        assert load_session(store, ADMIN_SESSION_KEY, NOW) is None
        assert store == {}

    def test_clear(self) -> None:
        store: dict[str, str] = {}
        save_session(store, ADMIN_SESSION_KEY, AdminSession(True, NOW))
        clear_session(store, ADMIN_SESSION_KEY)
        assert store == {}

    def test_clear_missing_is_noop(self) -> None:
        clear_session({}, ADMIN_SESSION_KEY)

    def test_session_key_is_namespaced(self) -> None:
        assert session_key("abc") == "admin_authenticated:abc"


class TestVerifyAdminPassword:
    """Password comparison."""

    def test_correct_password(self) -> None:
        assert verify_admin_password("s3cret", expected="s3cret")

    def test_wrong_password(self) -> None:
        assert not verify_admin_password("guess", expected="s3cret")

    def test_unconfigured(self) -> None:
        with pytest.raises(ConfigurationError):
            verify_admin_password("anything", expected="")
