"""PostgreSQL implementation of Server repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from toplist.domain.model import Server
from toplist.domain.repository import ServerRepository
from toplist.domain.value import ServerId, Slug
from toplist.persistence.mappers import row_to_server, server_to_dict
from toplist.persistence.tables import servers_table


class PostgresServerRepository(ServerRepository):
    """PostgreSQL implementation of ServerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, server_id: ServerId) -> Optional[Server]:
        """Find a server by ID."""
        stmt = select(servers_table).where(servers_table.c.id == server_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_server(row._asdict()) if row else None

    async def find_by_slug(self, slug: Slug) -> Optional[Server]:
        """Find a server by slug."""
        stmt = select(servers_table).where(servers_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_server(row._asdict()) if row else None

    async def save(self, server: Server) -> Server:
        """Save or update a server."""
        server_dict = server_to_dict(server)

        existing = await self.find_by_id(server.id)

        if existing:
            stmt = (
                update(servers_table)
                .where(servers_table.c.id == server.id)
                .values(**server_dict)
            )
        else:
            stmt = insert(servers_table).values(**server_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return server
