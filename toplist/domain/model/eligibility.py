"""Results returned by the vote ledger."""

import math
from datetime import datetime, timedelta

from pydantic import Field, computed_field, model_validator

from toplist.domain.model.common import DomainModel
from toplist.domain.model.vote import Vote

HOUR = timedelta(hours=1)


def ceil_hours(remaining: timedelta) -> int:
    """Round a duration up to whole hours for display."""
    return math.ceil(remaining / HOUR)


def ceil_seconds(remaining: timedelta) -> int:
    """Round a duration up to whole seconds."""
    return math.ceil(remaining.total_seconds())


class EligibilityResult(DomainModel):
    """Whether an identity may vote for a server right now.

    When not eligible, ``retry_after`` is the instant the cooldown ends and
    ``remaining`` is the strictly positive time left until then.
    """

    eligible: bool
    retry_after: datetime | None = None
    remaining: timedelta = timedelta(0)

    @model_validator(mode="after")
    def check_consistency(self) -> "EligibilityResult":
        """An ineligible result must say when voting opens again."""
        if self.remaining < timedelta(0):
            raise ValueError("remaining must not be negative")
        if not self.eligible and (self.retry_after is None or not self.remaining):
            raise ValueError("Ineligible results require retry_after and remaining")
        return self

    @classmethod
    def allowed(cls) -> "EligibilityResult":
        """Result for an identity with no blocking vote."""
        return cls(eligible=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_hours_ceil(self) -> int:
        """Remaining cooldown rounded up to whole hours."""
        return ceil_hours(self.remaining)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_seconds_ceil(self) -> int:
        """Remaining cooldown rounded up to whole seconds."""
        return ceil_seconds(self.remaining)


class VoteResult(DomainModel):
    """Outcome of a successful vote submission."""

    success: bool = True
    vote: Vote
    vote_count: int = Field(ge=1)
    message: str = "Vote recorded successfully!"


class VoteHistogram(DomainModel):
    """Votes for one server per UTC day over a trailing window.

    Days without votes are omitted.
    """

    total: int = Field(ge=0)
    votes_by_day: dict[str, int]
    since: datetime
    until: datetime
