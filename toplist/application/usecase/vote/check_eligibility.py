"""Check vote eligibility use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from toplist.application.usecase.base import BaseUseCase
from toplist.domain.service import VoteService
from toplist.domain.value import ServerId, VoterIdentity


class CanVoteRequest(BaseModel):
    """Can vote request."""

    server_id: str  # UUID string
    ip_address: str
    user_id: str | None = None


class CanVoteResponse(BaseModel):
    """Can vote response.

    ``seconds_remaining`` and ``hours_remaining`` are both rounded up and
    are zero when voting is allowed.
    """

    can_vote: bool
    seconds_remaining: int
    hours_remaining: int
    next_vote_at: datetime | None = None


class CheckVoteEligibilityUseCase(BaseUseCase[CanVoteRequest, CanVoteResponse]):
    """Use case for asking whether the current visitor may vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize check eligibility use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CanVoteRequest) -> CanVoteResponse:
        """Execute eligibility check.

        Args:
            request: Can vote request

        Returns:
            Eligibility with time remaining until the next allowed vote
        """
        result = await self.vote_service.check_eligibility(
            ServerId(UUID(request.server_id)),
            VoterIdentity(ip_address=request.ip_address, user_id=request.user_id),
        )

        return CanVoteResponse(
            can_vote=result.eligible,
            seconds_remaining=result.remaining_seconds_ceil,
            hours_remaining=result.remaining_hours_ceil,
            next_vote_at=result.retry_after,
        )
