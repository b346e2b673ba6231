"""create activities and activity records

Revision ID: 3c1d7a52e4b9
Revises:
Create Date: 2026-09-28 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1d7a52e4b9'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RUNNING_PREDICATE = "source = 'LIVE' AND duration IS NULL"


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'activities',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('target_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('color', sa.String(length=16), nullable=True),
        sa.Column('icon', sa.String(length=16), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'name', name='uix_activity_user_name'),
    )
    op.create_index('ix_activities_user_id', 'activities', ['user_id'])

    op.create_table(
        'activity_records',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column(
            'activity_id',
            sa.String(length=36),
            sa.ForeignKey('activities.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('source', sa.String(length=16), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('executed_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_activity_records_user_id', 'activity_records', ['user_id'])
    op.create_index('ix_activity_records_activity_id', 'activity_records', ['activity_id'])
    op.create_index(
        'ix_activity_record_user_executed', 'activity_records', ['user_id', 'executed_at']
    )
    # At most one running LIVE record per (user, activity)
    op.create_index(
        'uix_activity_record_running',
        'activity_records',
        ['user_id', 'activity_id'],
        unique=True,
        sqlite_where=sa.text(RUNNING_PREDICATE),
        postgresql_where=sa.text(RUNNING_PREDICATE),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uix_activity_record_running', table_name='activity_records')
    op.drop_index('ix_activity_record_user_executed', table_name='activity_records')
    op.drop_index('ix_activity_records_activity_id', table_name='activity_records')
    op.drop_index('ix_activity_records_user_id', table_name='activity_records')
    op.drop_table('activity_records')
    op.drop_index('ix_activities_user_id', table_name='activities')
    op.drop_table('activities')
