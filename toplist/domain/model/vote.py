"""Vote entity.

Votes form an append-only ledger. A vote is never edited or deleted once
recorded; counts and cooldowns are always derived from the ledger.
"""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from toplist.domain.model.common import DomainModel
from toplist.domain.value import ServerId, VoteId, VoterIdentity


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC.

    Naive datetimes are assumed to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per identity per server per cooldown window
    - Identity is the voter's IP address plus their account id when logged in
    - The timestamp is fixed at creation
    """

    id: VoteId
    server_id: ServerId
    ip_address: str = Field(min_length=1, max_length=64)
    user_id: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        """Store timestamps as aware UTC."""
        return as_utc(v)

    @property
    def identity(self) -> VoterIdentity:
        """The identity that cast this vote."""
        return VoterIdentity(ip_address=self.ip_address, user_id=self.user_id)
