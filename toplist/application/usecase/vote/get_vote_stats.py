"""Get vote statistics use case."""

from datetime import datetime, timedelta
from uuid import UUID

from pydantic import BaseModel, Field

from toplist.application.usecase.base import BaseUseCase
from toplist.config import VotingSettings
from toplist.domain.service import VoteService
from toplist.domain.value import ServerId


class VoteStatsRequest(BaseModel):
    """Vote statistics request."""

    server_id: str  # UUID string
    days: int | None = Field(default=None, ge=1, le=90)  # Defaults from settings


class VoteStatsResponse(BaseModel):
    """Vote statistics response.

    ``votes_by_day`` only contains days that received votes.
    """

    server_id: str
    total: int
    votes_by_day: dict[str, int]
    since: datetime
    until: datetime


class GetVoteStatsUseCase(BaseUseCase[VoteStatsRequest, VoteStatsResponse]):
    """Use case for a server's daily vote history."""

    def __init__(self, vote_service: VoteService, voting_settings: VotingSettings) -> None:
        """Initialize get vote stats use case.

        Args:
            vote_service: Vote domain service
            voting_settings: Voting settings (default window)
        """
        self.vote_service = vote_service
        self.voting_settings = voting_settings

    async def execute(self, request: VoteStatsRequest) -> VoteStatsResponse:
        """Execute vote statistics query.

        Args:
            request: Vote statistics request

        Returns:
            Daily vote counts over the requested window
        """
        server_id = ServerId(UUID(request.server_id))
        window = (
            timedelta(days=request.days)
            if request.days is not None
            else self.voting_settings.stats_window
        )

        histogram = await self.vote_service.get_histogram(server_id, window)

        return VoteStatsResponse(
            server_id=str(server_id),
            total=histogram.total,
            votes_by_day=histogram.votes_by_day,
            since=histogram.since,
            until=histogram.until,
        )
