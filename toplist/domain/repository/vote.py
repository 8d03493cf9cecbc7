"""Vote repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import List, Optional

from toplist.domain.model.vote import Vote
from toplist.domain.value import ServerId, VoteId, VoterIdentity


class VoteRepository(ABC):
    """Repository for the append-only vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID.

        Args:
            vote_id: The vote's unique identifier

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_latest_by_ip(
        self, server_id: ServerId, ip_address: str, since: datetime
    ) -> Optional[Vote]:
        """Find the most recent vote from an IP address newer than ``since``.

        Args:
            server_id: The server voted for
            ip_address: Voter's network address
            since: Exclusive lower bound on ``created_at``

        Returns:
            The newest matching vote, None if there is none
        """
        pass

    @abstractmethod
    async def find_latest_by_user(
        self, server_id: ServerId, user_id: str, since: datetime
    ) -> Optional[Vote]:
        """Find the most recent vote from an account newer than ``since``.

        Args:
            server_id: The server voted for
            user_id: Voter's account id
            since: Exclusive lower bound on ``created_at``

        Returns:
            The newest matching vote, None if there is none
        """
        pass

    @abstractmethod
    async def find_by_server_since(
        self, server_id: ServerId, since: datetime
    ) -> List[Vote]:
        """Find all votes for a server at or after ``since``, oldest first.

        Args:
            server_id: The server voted for
            since: Inclusive lower bound on ``created_at``

        Returns:
            List of votes
        """
        pass

    @abstractmethod
    async def count_by_server(self, server_id: ServerId) -> int:
        """Count all votes ever recorded for a server.

        Args:
            server_id: The server voted for

        Returns:
            Number of votes
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Append a vote to the ledger.

        Args:
            vote: The vote to save

        Returns:
            The saved vote
        """
        pass

    @abstractmethod
    def voter_lock(
        self, server_id: ServerId, identity: VoterIdentity
    ) -> AbstractAsyncContextManager[None]:
        """Serialize check-then-append for one voter on one server.

        Submissions sharing the IP address or the account id with another
        in-flight submission for the same server wait for it; everything
        else proceeds in parallel.

        Args:
            server_id: The server being voted for
            identity: The voter

        Returns:
            Async context manager holding the lock while entered
        """
        pass
