"""create game_records

Revision ID: 5c2a9e71b0d3
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e71b0d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'game_records' in set(insp.get_table_names()):
        return
    op.create_table(
        'game_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False),
        sa.Column('time_seconds', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_game_records_rank', 'game_records', ['attempts', 'time_seconds'])


def downgrade():
    op.drop_index('ix_game_records_rank', table_name='game_records')
    op.drop_table('game_records')
