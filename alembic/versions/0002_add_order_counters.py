"""add_order_counters

Per-day sequence rows backing order numbers, replacing the count of
same-day orders.

Revision ID: 0002
Revises: 0001_init
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002'
down_revision = '0001_init'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'order_counters',
        sa.Column('day', sa.String(6), primary_key=True),
        sa.Column('value', sa.Integer, nullable=False, server_default='0'),
    )


def downgrade() -> None:
    op.drop_table('order_counters')
