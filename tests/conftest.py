"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt
import logfire
import pytest

from toplist.config import AuthSettings
from toplist.domain.model import Server
from toplist.domain.service import Clock
from toplist.domain.value import ServerId, Slug

# Keep spans local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> datetime:
        self.current = self.current + delta
        return self.current

    def set(self, now: datetime) -> datetime:
        self.current = now
        return self.current


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


def make_server(
    name: str = "Runewild", server_id: UUID | None = None, slug: str | None = None
) -> Server:
    """Helper to build a server listing for tests."""
    return Server(
        id=ServerId(server_id or uuid4()),
        slug=Slug(slug or name.lower().replace(" ", "-")),
        name=name,
        owner_id="owner-1",
        created_at=utc(2024, 6, 1),
    )


def issue_token(
    user_id: str,
    settings: AuthSettings,
    email: str | None = None,
    role: str = "USER",
) -> str:
    """Sign a token shaped like the account service's."""
    payload = {
        "sub": user_id,
        "email": email or f"{user_id}@example.com",
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at 2025-01-01T12:00:00Z."""
    return FrozenClock(utc(2025, 1, 1, 12, 0))
