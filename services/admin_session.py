# services/admin_session.py
"""
Admin session handling.

A session is an explicit value persisted as JSON in a key-value store that
the caller supplies; there is no module-level session state.
"""
import json
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import MutableMapping, Optional

from config import settings
from errors import ConfigurationError

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "admin_authenticated"
SESSION_DURATION = timedelta(hours=24)


@dataclass(frozen=True)
class AdminSession:
     authenticated: bool
     issued_at: datetime

     def to_json(self) -> str:
          return json.dumps({
               "authenticated": self.authenticated,
               "issued_at": self.issued_at.isoformat(),
          })

     @classmethod
     def from_json(cls, raw: str) -> "AdminSession":
          data = json.loads(raw)
          return cls(
               authenticated=bool(data["authenticated"]),
               issued_at=datetime.fromisoformat(data["issued_at"]),
          )


def is_valid(session: Optional[AdminSession], now: datetime, max_age: timedelta = SESSION_DURATION) -> bool:
     """True while the session is authenticated and younger than max_age."""
     if session is None or not session.authenticated:
          return False
     age = now - session.issued_at
     return timedelta(0) <= age < max_age


def session_key(session_id: str) -> str:
     return f"{ADMIN_SESSION_KEY}:{session_id}"


def save_session(store: MutableMapping[str, str], key: str, session: AdminSession) -> None:
     store[key] = session.to_json()


def clear_session(store: MutableMapping[str, str], key: str) -> None:
     store.pop(key, None)


def load_session(
     store: MutableMapping[str, str],
     key: str,
     now: datetime,
     max_age: timedelta = SESSION_DURATION,
) -> Optional[AdminSession]:
     """
     Read a session back from the store.

     Malformed and expired entries are cleared and reported as no session.
     """
     raw = store.get(key)
     if raw is None:
          return None

     try:
          session = AdminSession.from_json(raw)
     except (ValueError, KeyError, TypeError) as exc:
          logger.warning("Discarding unreadable admin session %s: %s", key, exc)
          clear_session(store, key)
          return None

     if not is_valid(session, now, max_age):
          clear_session(store, key)
          return None
     return session


def verify_admin_password(candidate: str, expected: Optional[str] = None) -> bool:
     """
     Compare candidate against the configured admin password.

     Raises:
          ConfigurationError: If no admin password is configured
     """
     expected = settings.admin.password if expected is None else expected
     if not expected:
          raise ConfigurationError("Admin password is not configured")
     return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
