"""create bp_records table

Revision ID: b4e1c9a2d7f3
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b4e1c9a2d7f3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'bp_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('systolic', sa.Integer(), nullable=False),
        sa.Column('diastolic', sa.Integer(), nullable=False),
        # 0 = heart rate not recorded
        sa.Column('heart_rate', sa.Integer(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_bp_records_recorded_at', 'bp_records', ['recorded_at'], unique=False)


def downgrade():
    op.drop_index('ix_bp_records_recorded_at', table_name='bp_records')
    op.drop_table('bp_records')
