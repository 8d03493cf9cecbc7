"""Domain value objects for the toplist."""

from toplist.domain.value.identifiers import ServerId, VoteId
from toplist.domain.value.types import Slug, VoterIdentity

__all__ = [
    # Identifiers
    "ServerId",
    "VoteId",
    # Types
    "Slug",
    "VoterIdentity",
]
