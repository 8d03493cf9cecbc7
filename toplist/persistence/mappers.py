"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from toplist.domain.model import Server, Vote
from toplist.domain.value import ServerId, Slug, VoteId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        server_id=ServerId(_uuid(row["server_id"])),
        ip_address=row["ip_address"],
        user_id=row.get("user_id"),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    return vote.model_dump()


def row_to_server(row: Dict[str, Any]) -> Server:
    """Convert database row to Server domain model.

    Args:
        row: Database row as dict

    Returns:
        Server domain model
    """
    return Server(
        id=ServerId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        name=row["name"],
        owner_id=row["owner_id"],
        created_at=row["created_at"],
    )


def server_to_dict(server: Server) -> Dict[str, Any]:
    """Convert Server domain model to database dict.

    Args:
        server: Server domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return server.model_dump()
