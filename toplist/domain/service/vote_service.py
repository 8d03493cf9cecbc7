"""Vote domain service.

Gates and records votes, answers eligibility queries and aggregates
counts and daily history. The vote ledger is the only source of truth:
counts are always recomputed from it.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from toplist.domain.error import ValidationError, VoteCooldownActiveError
from toplist.domain.model import EligibilityResult, Vote, VoteHistogram, VoteResult
from toplist.domain.model.vote import as_utc
from toplist.domain.repository import VoteRepository
from toplist.domain.value import ServerId, VoteId, VoterIdentity

from .base import Service
from .clock import Clock

DEFAULT_COOLDOWN = timedelta(hours=12)


class VoteService(Service):
    """Domain service for vote operations."""

    span_prefix = "vote_service"
    collaborator = "vote ledger"

    def __init__(
        self,
        vote_repository: VoteRepository,
        clock: Clock,
        cooldown: timedelta = DEFAULT_COOLDOWN,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            clock: Source of the current time
            cooldown: Minimum time between two votes from the same identity
                for the same server
        """
        if cooldown <= timedelta(0):
            raise ValueError("Vote cooldown must be positive")
        self.vote_repository = vote_repository
        self.clock = clock
        self.cooldown = cooldown

    async def check_eligibility(
        self, server_id: ServerId, identity: VoterIdentity
    ) -> EligibilityResult:
        """Check whether an identity may vote for a server now.

        A previous vote blocks if it came from the same IP address or, when
        the voter is logged in, from the same account.

        Args:
            server_id: Server ID
            identity: Voter identity

        Returns:
            Eligibility result with the retry instant when blocked

        Raises:
            CollaboratorUnavailableError: If the ledger cannot be read
        """
        with self.span(
            "check_eligibility",
            server_id=str(server_id),
            ip_address=identity.ip_address,
            user_id=identity.user_id,
        ):
            with self._storage("check_eligibility"):
                now = self.clock.now()
                result = await self._evaluate(server_id, identity, now)

            logfire.info(
                "Vote eligibility checked",
                server_id=str(server_id),
                eligible=result.eligible,
                remaining_seconds=result.remaining_seconds_ceil,
            )
            return result

    async def submit_vote(
        self, server_id: ServerId, identity: VoterIdentity
    ) -> VoteResult:
        """Record a vote if the identity is outside its cooldown.

        Eligibility is re-evaluated under the voter lock, so two concurrent
        submissions from the same voter cannot both succeed.

        Args:
            server_id: Server ID
            identity: Voter identity

        Returns:
            Vote result with the recounted total for the server

        Raises:
            VoteCooldownActiveError: If the identity voted too recently
            CollaboratorUnavailableError: If the ledger cannot be read or written
        """
        with self.span(
            "submit_vote",
            server_id=str(server_id),
            ip_address=identity.ip_address,
            user_id=identity.user_id,
        ):
            with self._storage("submit_vote"):
                async with self.vote_repository.voter_lock(server_id, identity):
                    now = self.clock.now()
                    eligibility = await self._evaluate(server_id, identity, now)
                    if not eligibility.eligible:
                        logfire.warn(
                            "Vote rejected during cooldown",
                            server_id=str(server_id),
                            ip_address=identity.ip_address,
                            user_id=identity.user_id,
                            retry_after=str(eligibility.retry_after),
                        )
                        raise VoteCooldownActiveError(
                            retry_after=eligibility.retry_after,  # type: ignore[arg-type]
                            remaining=eligibility.remaining,
                        )

                    vote = await self.vote_repository.save(
                        Vote(
                            id=VoteId(uuid4()),
                            server_id=server_id,
                            ip_address=identity.ip_address,
                            user_id=identity.user_id,
                            created_at=now,
                        )
                    )

                vote_count = await self.vote_repository.count_by_server(server_id)

            logfire.info(
                "Vote recorded",
                server_id=str(server_id),
                vote_id=str(vote.id),
                vote_count=vote_count,
            )
            return VoteResult(vote=vote, vote_count=vote_count)

    async def get_vote_count(self, server_id: ServerId) -> int:
        """Count all votes recorded for a server.

        Args:
            server_id: Server ID

        Returns:
            Number of votes in the ledger for this server
        """
        with self.span("get_vote_count", server_id=str(server_id)):
            with self._storage("get_vote_count"):
                return await self.vote_repository.count_by_server(server_id)

    async def get_histogram(
        self, server_id: ServerId, window: timedelta
    ) -> VoteHistogram:
        """Count a server's votes per UTC day over a trailing window.

        Args:
            server_id: Server ID
            window: How far back from now to look

        Returns:
            Sparse day -> count mapping (``YYYY-MM-DD`` keys) and the total

        Raises:
            ValidationError: If the window is not positive
        """
        if window <= timedelta(0):
            raise ValidationError("Histogram window must be positive")

        with self.span(
            "get_histogram",
            server_id=str(server_id),
            window_days=window / timedelta(days=1),
        ):
            now = self.clock.now()
            since = now - window
            with self._storage("get_histogram"):
                votes = await self.vote_repository.find_by_server_since(
                    server_id, since
                )

            votes_by_day: dict[str, int] = {}
            for vote in votes:
                day = as_utc(vote.created_at).date().isoformat()
                votes_by_day[day] = votes_by_day.get(day, 0) + 1

            return VoteHistogram(
                total=len(votes),
                votes_by_day=votes_by_day,
                since=since,
                until=now,
            )

    async def _evaluate(
        self, server_id: ServerId, identity: VoterIdentity, now: datetime
    ) -> EligibilityResult:
        blocking = await self._find_blocking_vote(server_id, identity, now)
        if blocking is None:
            return EligibilityResult.allowed()

        retry_after = blocking.created_at + self.cooldown
        remaining = retry_after - now
        # Expiring exactly now counts as expired
        if remaining <= timedelta(0):
            return EligibilityResult.allowed()

        return EligibilityResult(
            eligible=False, retry_after=retry_after, remaining=remaining
        )

    async def _find_blocking_vote(
        self, server_id: ServerId, identity: VoterIdentity, now: datetime
    ) -> Vote | None:
        since = now - self.cooldown
        candidates = [
            await self.vote_repository.find_latest_by_ip(
                server_id, identity.ip_address, since
            )
        ]
        if identity.user_id is not None:
            candidates.append(
                await self.vote_repository.find_latest_by_user(
                    server_id, identity.user_id, since
                )
            )

        found = [vote for vote in candidates if vote is not None]
        return max(found, key=lambda vote: vote.created_at, default=None)
