"""Create phrases table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `phrases` table backing SqlPhraseService.
Rollback: downgrade() drops the table (all phrases are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the phrases table. Column docs live in linguacorp/models/phrase.py."""
    op.create_table(
        "phrases",

        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Server-assigned phrase identifier",
        ),

        sa.Column(
            "original_text",
            sa.Text(),
            nullable=False,
            comment="Text in the source language",
        ),

        sa.Column(
            "language",
            sa.String(2),
            nullable=False,
            comment="2-letter ISO language code of original_text",
        ),

        sa.Column(
            "translated_text",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Translation of original_text; may be empty",
        ),

        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("phrases")
