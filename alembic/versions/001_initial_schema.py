"""Initial schema - permission, role, subject, record.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_permission_name", "permission", ["name"], unique=True)

    # Grants are embedded lists: [{"role_id"|"permission_id", "settings", "settings_factory"}]
    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("roles", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("permissions", postgresql.JSONB(), nullable=False, server_default="[]"),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    op.create_table(
        "subject",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("kind", sa.String(50), nullable=False, server_default="user"),
        sa.Column("roles", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("permissions", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("attributes", postgresql.JSONB(), nullable=False, server_default="{}"),
    )

    op.create_table(
        "record",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("record_type", sa.String(255), nullable=False),
        sa.Column("data", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_record_type_created_at", "record", ["record_type", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_record_type_created_at", table_name="record")
    op.drop_table("record")
    op.drop_table("subject")
    op.drop_index("ix_role_name", table_name="role")
    op.drop_table("role")
    op.drop_index("ix_permission_name", table_name="permission")
    op.drop_table("permission")
