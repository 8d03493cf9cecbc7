"""PostgreSQL implementation of Vote repository."""

import hashlib
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, List, Optional

from sqlalchemy import and_, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from toplist.domain.model import Vote
from toplist.domain.repository import VoteRepository
from toplist.domain.value import ServerId, VoteId, VoterIdentity
from toplist.persistence.mappers import row_to_vote, vote_to_dict
from toplist.persistence.tables import votes_table


def advisory_lock_key(key: str) -> int:
    """Map a lock key onto PostgreSQL's signed 64-bit advisory lock space."""
    digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_latest_by_ip(
        self, server_id: ServerId, ip_address: str, since: datetime
    ) -> Optional[Vote]:
        """Find the most recent vote from an IP address newer than ``since``."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.server_id == server_id,
                    votes_table.c.ip_address == ip_address,
                    votes_table.c.created_at > since,
                )
            )
            .order_by(votes_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_latest_by_user(
        self, server_id: ServerId, user_id: str, since: datetime
    ) -> Optional[Vote]:
        """Find the most recent vote from an account newer than ``since``."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.server_id == server_id,
                    votes_table.c.user_id == user_id,
                    votes_table.c.created_at > since,
                )
            )
            .order_by(votes_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_server_since(
        self, server_id: ServerId, since: datetime
    ) -> List[Vote]:
        """Find all votes for a server at or after ``since``, oldest first."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.server_id == server_id,
                    votes_table.c.created_at >= since,
                )
            )
            .order_by(votes_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def count_by_server(self, server_id: ServerId) -> int:
        """Count all votes ever recorded for a server."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(votes_table.c.server_id == server_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, vote: Vote) -> Vote:
        """Append a vote to the ledger."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    @asynccontextmanager
    async def voter_lock(
        self, server_id: ServerId, identity: VoterIdentity
    ) -> AsyncIterator[None]:
        """Take transaction-scoped advisory locks for the voter.

        The locks are released when the surrounding transaction commits or
        rolls back, not when the context exits, so the next waiter only
        re-checks eligibility once the new vote is committed. Works across
        any number of application instances.
        """
        for key in identity.lock_keys(server_id):
            await self.session.execute(
                select(func.pg_advisory_xact_lock(advisory_lock_key(key)))
            )
        yield
