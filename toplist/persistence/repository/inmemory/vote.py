"""In-memory vote repository for testing."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional

from toplist.domain.model.vote import Vote, as_utc
from toplist.domain.repository.vote import VoteRepository
from toplist.domain.value import ServerId, VoteId, VoterIdentity
from toplist.util.locks import KeyedLock


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []
        self._locks = KeyedLock()

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        for vote in self._votes:
            if vote.id == vote_id:
                return vote
        return None

    async def find_latest_by_ip(
        self, server_id: ServerId, ip_address: str, since: datetime
    ) -> Optional[Vote]:
        """Find the most recent vote from an IP address newer than ``since``."""
        return self._latest(
            v
            for v in self._votes
            if v.server_id == server_id
            and v.ip_address == ip_address
            and v.created_at > as_utc(since)
        )

    async def find_latest_by_user(
        self, server_id: ServerId, user_id: str, since: datetime
    ) -> Optional[Vote]:
        """Find the most recent vote from an account newer than ``since``."""
        return self._latest(
            v
            for v in self._votes
            if v.server_id == server_id
            and v.user_id == user_id
            and v.created_at > as_utc(since)
        )

    async def find_by_server_since(
        self, server_id: ServerId, since: datetime
    ) -> list[Vote]:
        """Find all votes for a server at or after ``since``, oldest first."""
        return sorted(
            (
                v
                for v in self._votes
                if v.server_id == server_id and v.created_at >= as_utc(since)
            ),
            key=lambda v: v.created_at,
        )

    async def count_by_server(self, server_id: ServerId) -> int:
        """Count all votes ever recorded for a server."""
        return sum(1 for v in self._votes if v.server_id == server_id)

    async def save(self, vote: Vote) -> Vote:
        """Append a vote to the ledger."""
        self._votes.append(vote)
        return vote

    @asynccontextmanager
    async def voter_lock(
        self, server_id: ServerId, identity: VoterIdentity
    ) -> AsyncIterator[None]:
        """Hold the in-process locks for the voter's keys."""
        async with self._locks.acquire_many(identity.lock_keys(server_id)):
            yield

    @staticmethod
    def _latest(votes) -> Optional[Vote]:
        return max(votes, key=lambda v: v.created_at, default=None)
