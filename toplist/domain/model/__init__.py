"""Domain model entities for the toplist."""

from toplist.domain.model.eligibility import (
    EligibilityResult,
    VoteHistogram,
    VoteResult,
)
from toplist.domain.model.server import Server
from toplist.domain.model.vote import Vote

__all__ = [
    "Server",
    "Vote",
    "EligibilityResult",
    "VoteResult",
    "VoteHistogram",
]
