"""Initial schema - key-value store

Revision ID: 001_initial_schema
Revises:
Create Date: 2024-05-01 00:00:00.000000

Creates the ZenStudent persistence table:
- kv_store: one JSON blob per logical key (zen_messages, zen_moods, zen_profile)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'kv_store',
        sa.Column('key', sa.String(128), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )


def downgrade() -> None:
    op.drop_table('kv_store')
