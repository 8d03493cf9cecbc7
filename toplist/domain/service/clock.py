"""Time source for domain services."""

from abc import ABC, abstractmethod
from datetime import datetime

from toplist.domain.model.vote import utcnow


class Clock(ABC):
    """Provides the current instant to services that reason about time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        pass


class SystemClock(Clock):
    """Wall clock."""

    def now(self) -> datetime:
        return utcnow()
