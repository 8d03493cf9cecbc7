"""Get vote count use case."""

from uuid import UUID

from pydantic import BaseModel

from toplist.application.usecase.base import BaseUseCase
from toplist.domain.service import VoteService
from toplist.domain.value import ServerId


class VoteCountRequest(BaseModel):
    """Vote count request."""

    server_id: str  # UUID string


class VoteCountResponse(BaseModel):
    """Vote count response."""

    server_id: str
    vote_count: int


class GetVoteCountUseCase(BaseUseCase[VoteCountRequest, VoteCountResponse]):
    """Use case for reading a server's total votes."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: VoteCountRequest) -> VoteCountResponse:
        server_id = ServerId(UUID(request.server_id))
        count = await self.vote_service.get_vote_count(server_id)
        return VoteCountResponse(server_id=str(server_id), vote_count=count)
