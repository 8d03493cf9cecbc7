"""Application layer DI providers."""

from dishka import Scope, provide

from toplist.application.usecase.vote import (
    CastVoteUseCase,
    CheckVoteEligibilityUseCase,
    GetVoteCountUseCase,
    GetVoteStatsUseCase,
)
from toplist.config import VotingSettings
from toplist.domain.service import ServerService, VoteService
from toplist.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, server_service: ServerService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service, server_service=server_service)

    @provide(scope=Scope.REQUEST)
    def get_check_vote_eligibility_use_case(
        self, vote_service: VoteService
    ) -> CheckVoteEligibilityUseCase:
        """Provide check vote eligibility use case."""
        return CheckVoteEligibilityUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_count_use_case(self, vote_service: VoteService) -> GetVoteCountUseCase:
        """Provide get vote count use case."""
        return GetVoteCountUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_stats_use_case(
        self, vote_service: VoteService, voting_settings: VotingSettings
    ) -> GetVoteStatsUseCase:
        """Provide get vote stats use case."""
        return GetVoteStatsUseCase(
            vote_service=vote_service, voting_settings=voting_settings
        )
