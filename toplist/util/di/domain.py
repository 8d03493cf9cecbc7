"""Domain layer DI providers."""

from dishka import Scope, provide

from toplist.config import AuthSettings, VotingSettings
from toplist.domain.repository import ServerRepository, VoteRepository
from toplist.domain.service import (
    Clock,
    JWTService,
    ServerService,
    SystemClock,
    VoteService,
)
from toplist.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide the wall clock."""
        return SystemClock()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_server_service(self, server_repository: ServerRepository) -> ServerService:
        """Provide server domain service."""
        return ServerService(server_repository=server_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        clock: Clock,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            clock=clock,
            cooldown=voting_settings.cooldown,
        )
