"""create students table

Revision ID: 5b1e0c7d2a91
Revises:
Create Date: 2026-10-18 10:12:04.218733

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1e0c7d2a91"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "students",
        # ids are chosen by users or assigned as max(id) + 1, never by a sequence
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=120), nullable=False),
        sa.Column("mobile", sa.String(length=10), nullable=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("students")
