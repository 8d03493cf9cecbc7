"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .check_eligibility import (
    CanVoteRequest,
    CanVoteResponse,
    CheckVoteEligibilityUseCase,
)
from .get_vote_count import GetVoteCountUseCase, VoteCountRequest, VoteCountResponse
from .get_vote_stats import GetVoteStatsUseCase, VoteStatsRequest, VoteStatsResponse

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "CanVoteRequest",
    "CanVoteResponse",
    "CheckVoteEligibilityUseCase",
    "VoteCountRequest",
    "VoteCountResponse",
    "GetVoteCountUseCase",
    "VoteStatsRequest",
    "VoteStatsResponse",
    "GetVoteStatsUseCase",
]
