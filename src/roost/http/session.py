"""The authenticated session: token, user, and expiry.

``is_authenticated()`` is evaluated fresh on every call; guards and the
HTTP client never cache its result.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class AuthUser:
    """The logged-in user, as returned by the login endpoint."""

    id: str
    username: str
    avatar_url: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> AuthUser:
        return cls(
            id=str(data.get("id", "")),
            username=data["username"],
            avatar_url=data.get("avatarURL"),
        )


class Session:
    """Process-wide session state, written by login/logout flows."""

    __slots__ = ("_now", "expires_at", "token", "user")

    def __init__(
        self,
        token: str | None = None,
        user: AuthUser | None = None,
        expires_at: datetime | None = None,
        *,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.token = token
        self.user = user
        self.expires_at = expires_at
        self._now = now

    def is_authenticated(self) -> bool:
        """True while a token is held and has not expired."""
        if not self.token:
            return False
        return self.expires_at is None or self.expires_at > self._now()

    def login(self, payload: dict[str, Any]) -> AuthUser:
        """Store a login response (``{token, expiresAt, authUser}``)."""
        user = AuthUser.from_json(payload["authUser"])
        expires_at = payload.get("expiresAt")
        self.token = payload["token"]
        self.user = user
        self.expires_at = datetime.fromisoformat(expires_at) if expires_at else None
        return user

    def logout(self) -> None:
        self.token = None
        self.user = None
        self.expires_at = None
