"""In-memory repository implementations for testing."""

from .server import InMemoryServerRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryServerRepository",
    "InMemoryVoteRepository",
]
