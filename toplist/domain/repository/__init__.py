"""Repository interfaces for the toplist domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from toplist.domain.repository.server import ServerRepository
from toplist.domain.repository.vote import VoteRepository

__all__ = [
    "ServerRepository",
    "VoteRepository",
]
