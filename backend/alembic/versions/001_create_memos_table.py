"""Create memos table

Revision ID: 001
Revises: None
Create Date: 2025-06-02 00:00:00.000000+00:00

What:  Creates the `memos` table, its created_at index and, on PostgreSQL,
       a trigger that refreshes updated_at on every UPDATE.
How:   PostgreSQL gets native UUID ids with gen_random_uuid() and TEXT[] tags;
       other dialects get VARCHAR(36) and JSON (see app/models/memo.py).

Rollback: downgrade() drops the table entirely (all memos lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


UPDATED_AT_FUNCTION = """
CREATE OR REPLACE FUNCTION set_memos_updated_at() RETURNS trigger AS $$
BEGIN
    NEW.updated_at = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;
"""

UPDATED_AT_TRIGGER = """
CREATE TRIGGER trg_memos_updated_at
    BEFORE UPDATE ON memos
    FOR EACH ROW EXECUTE FUNCTION set_memos_updated_at();
"""


def _is_postgresql() -> bool:
    return op.get_bind().dialect.name == "postgresql"


def upgrade() -> None:
    """Create the memos table with all columns, constraints, and indexes."""
    postgres = _is_postgresql()

    if postgres:
        id_column = sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Opaque memo identifier, immutable after insert",
        )
        tags_type = postgresql.ARRAY(sa.Text())
        tags_default = sa.text("'{}'::text[]")
    else:
        id_column = sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Opaque memo identifier, immutable after insert",
        )
        tags_type = sa.JSON()
        tags_default = sa.text("'[]'")

    op.create_table(
        "memos",
        id_column,
        sa.Column("title", sa.Text(), nullable=False, comment="Short memo title"),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Memo body text",
        ),
        sa.Column("category", sa.Text(), nullable=False, comment="Free-text category label"),
        sa.Column(
            "tags",
            tags_type,
            nullable=False,
            server_default=tags_default,
            comment="Ordered tag list as supplied by the caller",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this memo was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this memo was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_memos_created_at",
        "memos",
        [sa.text("created_at DESC")],
    )

    if postgres:
        op.execute(UPDATED_AT_FUNCTION)
        op.execute(UPDATED_AT_TRIGGER)


def downgrade() -> None:
    """Drop the memos table. Destructive: all memo data is lost."""
    if _is_postgresql():
        op.execute("DROP TRIGGER IF EXISTS trg_memos_updated_at ON memos")
        op.execute("DROP FUNCTION IF EXISTS set_memos_updated_at()")
    op.drop_index("idx_memos_created_at", table_name="memos")
    op.drop_table("memos")
