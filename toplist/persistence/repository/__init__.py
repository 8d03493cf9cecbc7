"""PostgreSQL repository implementations."""

from toplist.persistence.repository.server import PostgresServerRepository
from toplist.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresServerRepository",
    "PostgresVoteRepository",
]
