"""Session store abstraction used to identify the caller.

The default store reads the signed session cookie written by the login
flow. The cookie uses the same layout as Starlette's ``SessionMiddleware``
(base64-encoded JSON signed with an itsdangerous ``TimestampSigner``), so
either side can issue sessions the other understands.
"""

import json
import logging
from abc import ABC, abstractmethod
from base64 import b64decode, b64encode
from typing import Any, Mapping, Optional

from fastapi import Request
from itsdangerous import BadSignature, SignatureExpired, TimestampSigner

from app.config import settings
from app.errors import SessionUnavailable

logger = logging.getLogger(__name__)


class SessionData:
    """Read-only view over the values stored in a session."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get_username(self) -> Optional[str]:
        """Return the session username, or None if it is absent or not a string."""
        value = self._values.get("username")
        if isinstance(value, str):
            return value
        return None

    def __repr__(self):
        return f"<SessionData(keys={sorted(self._values)!r})>"


class SessionStore(ABC):
    """Contract for looking up the session attached to a request."""

    @abstractmethod
    def get(self, request: Request) -> SessionData:
        """Return the request's session (empty when there is none).

        Raises:
            SessionUnavailable: If the store cannot be reached or the
                session cannot be decoded.
        """
        raise NotImplementedError


class SignedCookieSessionStore(SessionStore):
    """Session store backed by a signed cookie.

    Args:
        secret_key: Key used to sign and verify the cookie.
        cookie_name: Name of the session cookie.
        max_age: Signature lifetime in seconds. Expired sessions are
            treated as empty.
    """

    def __init__(self, secret_key: str, cookie_name: str, max_age: Optional[int] = None):
        self.cookie_name = cookie_name
        self.max_age = max_age
        self._signer = TimestampSigner(str(secret_key))

    def get(self, request: Request) -> SessionData:
        raw = request.cookies.get(self.cookie_name)
        if raw is None:
            return SessionData()

        try:
            payload = self._signer.unsign(raw.encode("utf-8"), max_age=self.max_age)
        except SignatureExpired:
            logger.info("Session cookie %s expired", self.cookie_name)
            return SessionData()
        except BadSignature as exc:
            logger.error("Error getting session %s: %s", self.cookie_name, exc)
            raise SessionUnavailable() from exc

        try:
            values = json.loads(b64decode(payload))
        except ValueError as exc:
            logger.error("Error decoding session %s: %s", self.cookie_name, exc)
            raise SessionUnavailable() from exc

        if not isinstance(values, dict):
            logger.error(
                "Error decoding session %s: expected an object, got %s",
                self.cookie_name,
                type(values).__name__,
            )
            raise SessionUnavailable()
        return SessionData(values)

    def encode(self, values: Mapping[str, Any]) -> str:
        """Serialize and sign session values into a cookie value.

        This is the issuing side used by the login flow to set the session
        cookie after a successful sign-in.
        """
        payload = b64encode(json.dumps(dict(values)).encode("utf-8"))
        return self._signer.sign(payload).decode("utf-8")


_default_store = SignedCookieSessionStore(
    secret_key=settings.SESSION_SECRET_KEY,
    cookie_name=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
)


def get_session_store() -> SessionStore:
    """Dependency that provides the configured session store."""
    return _default_store
