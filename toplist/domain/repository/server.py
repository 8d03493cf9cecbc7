"""Server repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from toplist.domain.model.server import Server
from toplist.domain.value import ServerId, Slug


class ServerRepository(ABC):
    """Read access to server listings for vote target validation."""

    @abstractmethod
    async def find_by_id(self, server_id: ServerId) -> Optional[Server]:
        """Find a server by ID.

        Args:
            server_id: The server's unique identifier

        Returns:
            The server if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Server]:
        """Find a server by slug.

        Args:
            slug: The server's URL slug

        Returns:
            The server if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, server: Server) -> Server:
        """Save a server (create or update).

        Args:
            server: The server to save

        Returns:
            The saved server
        """
        pass
