"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from toplist.application.usecase.base import BaseUseCase
from toplist.domain.service import ServerService, VoteService
from toplist.domain.value import ServerId, VoterIdentity


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    server_id: str  # UUID string
    ip_address: str
    user_id: str | None = None  # Set when the voter is logged in


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    success: bool
    server_id: str
    vote_id: str
    vote_count: int
    message: str


class CastVoteUseCase(BaseUseCase[CastVoteRequest, CastVoteResponse]):
    """Use case for voting for a server listing."""

    def __init__(self, vote_service: VoteService, server_service: ServerService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            server_service: Server domain service
        """
        self.vote_service = vote_service
        self.server_service = server_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Cast vote response with the new vote total

        Raises:
            ServerNotFoundError: If the server does not exist
            VoteCooldownActiveError: If the voter is still in cooldown
        """
        server_id = ServerId(UUID(request.server_id))
        await self.server_service.require_server(server_id)

        identity = VoterIdentity(ip_address=request.ip_address, user_id=request.user_id)
        result = await self.vote_service.submit_vote(server_id, identity)

        return CastVoteResponse(
            success=result.success,
            server_id=str(server_id),
            vote_id=str(result.vote.id),
            vote_count=result.vote_count,
            message=result.message,
        )
