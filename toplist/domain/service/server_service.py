"""Server domain service."""

import logfire

from toplist.domain.error import ServerNotFoundError
from toplist.domain.model.server import Server
from toplist.domain.repository import ServerRepository
from toplist.domain.value import ServerId

from .base import Service


class ServerService(Service):
    """Domain service for server listing lookups."""

    span_prefix = "server_service"
    collaborator = "server directory"

    def __init__(self, server_repository: ServerRepository) -> None:
        """Initialize server service.

        Args:
            server_repository: Server repository
        """
        self.server_repository = server_repository

    async def get_server_by_id(self, server_id: ServerId) -> Server | None:
        """Get a server by ID.

        Args:
            server_id: Server ID

        Returns:
            Server if found, None otherwise

        Raises:
            CollaboratorUnavailableError: If the server directory cannot be read
        """
        with self.span("get_server_by_id", server_id=str(server_id)):
            with self._storage("get_server_by_id"):
                server = await self.server_repository.find_by_id(server_id)

            if server:
                logfire.info("Server found", server_id=str(server_id), slug=str(server.slug))
            else:
                logfire.warn("Server not found", server_id=str(server_id))

            return server

    async def require_server(self, server_id: ServerId) -> Server:
        """Get a server by ID or fail.

        Raises:
            ServerNotFoundError: If no server has this ID
        """
        server = await self.get_server_by_id(server_id)
        if server is None:
            raise ServerNotFoundError(str(server_id))
        return server
