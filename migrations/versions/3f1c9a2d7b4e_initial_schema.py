"""initial_schema

Create the schema the voting API reads and writes:
- Servers (listing identity only; other listing columns belong to the CRUD service)
- Votes (append-only ledger with cooldown lookup indexes)

Revision ID: 3f1c9a2d7b4e
Revises:
Create Date: 2026-10-19 10:12:44.018311

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2d7b4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # SERVERS table
    # ========================================================================
    op.create_table(
        "servers",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("slug", sa.String(120), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("owner_id", sa.String(64), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_servers_slug"),
    )

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("server_id", sa.UUID(), nullable=False),
        sa.Column("ip_address", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["server_id"], ["servers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    # Cooldown lookups: one index per matching signal
    op.create_index(
        "idx_votes_server_ip_created_at",
        "votes",
        ["server_id", "ip_address", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_votes_server_user_created_at",
        "votes",
        ["server_id", "user_id", sa.text("created_at DESC")],
        postgresql_where=sa.text("user_id IS NOT NULL"),
    )
    # Counts and daily statistics
    op.create_index(
        "idx_votes_server_created_at", "votes", ["server_id", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_server_created_at", table_name="votes")
    op.drop_index("idx_votes_server_user_created_at", table_name="votes")
    op.drop_index("idx_votes_server_ip_created_at", table_name="votes")
    op.drop_table("votes")
    op.drop_table("servers")
