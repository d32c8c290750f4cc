"""Create urls table

Revision ID: 001_urls
Revises: 
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_urls'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the urls table: one row per short code mapping.

    The primary key on code is the uniqueness constraint the application
    relies on for collision detection.
    """
    bind = op.get_bind()
    existing_tables = inspect(bind).get_table_names()

    # Tables may already exist when the service ran with CREATE_TABLES=true
    if 'urls' not in existing_tables:
        op.create_table(
            'urls',
            sa.Column('code', sa.String(length=16), nullable=False),
            sa.Column('target_url', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint('code')
        )


def downgrade() -> None:
    op.drop_table('urls')
