"""SQLAlchemy table definitions for the toplist.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, ForeignKey, Index, MetaData, String, Table, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# SERVERS TABLE (read-only here; listings are managed by the CRUD service)
# ============================================================================
servers_table = Table(
    "servers",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("slug", String(120), nullable=False, unique=True),
    Column("name", String(100), nullable=False),
    Column("owner_id", String(64), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# VOTES TABLE (append-only ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "server_id", UUID, ForeignKey("servers.id", ondelete="CASCADE"), nullable=False
    ),
    Column("ip_address", String(64), nullable=False),
    Column("user_id", String(64), nullable=True),  # Set when the voter was logged in
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# The cooldown check is two independent lookups (by IP, by account),
# each needs its own index
Index(
    "idx_votes_server_ip_created_at",
    votes_table.c.server_id,
    votes_table.c.ip_address,
    votes_table.c.created_at.desc(),
)
Index(
    "idx_votes_server_user_created_at",
    votes_table.c.server_id,
    votes_table.c.user_id,
    votes_table.c.created_at.desc(),
    postgresql_where=votes_table.c.user_id.isnot(None),
)
# Counting and daily statistics
Index("idx_votes_server_created_at", votes_table.c.server_id, votes_table.c.created_at)
