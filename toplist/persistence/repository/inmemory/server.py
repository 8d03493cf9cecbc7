"""In-memory server repository for testing."""

from typing import Optional

from toplist.domain.model.server import Server
from toplist.domain.repository.server import ServerRepository
from toplist.domain.value import ServerId, Slug


class InMemoryServerRepository(ServerRepository):
    """In-memory implementation of ServerRepository for testing."""

    def __init__(self) -> None:
        self._servers: dict[ServerId, Server] = {}

    async def find_by_id(self, server_id: ServerId) -> Optional[Server]:
        """Find a server by ID."""
        return self._servers.get(server_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Server]:
        """Find a server by slug."""
        for server in self._servers.values():
            if server.slug == slug:
                return server
        return None

    async def save(self, server: Server) -> Server:
        """Save a server (create or update)."""
        self._servers[server.id] = server
        return server
