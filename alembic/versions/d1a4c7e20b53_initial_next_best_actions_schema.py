"""Initial next best actions schema: leads, activities, bookings, tasks, app_settings

Revision ID: d1a4c7e20b53
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'd1a4c7e20b53'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('leads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('lead_source', sa.Text(), nullable=False),
        sa.Column('instagram_link', sa.Text(), nullable=True),
        sa.Column('facebook_link', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.Text(), nullable=True),
        sa.Column('reassigned_owner_id', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leads_owner_id', 'leads', ['owner_id'])
    op.create_index('ix_leads_reassigned_owner_id', 'leads', ['reassigned_owner_id'])

    op.create_table('activities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lead_id', sa.Integer(), nullable=False),
        sa.Column('lead_name', sa.Text(), nullable=True),
        sa.Column('activity_type', sa.Text(), nullable=False),
        sa.Column('outcome', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('performed_by_id', sa.Text(), nullable=True),
        sa.Column('performed_by_name', sa.Text(), nullable=True),
        sa.Column('department', sa.Text(), nullable=True),
        sa.Column('shoot_date', sa.Date(), nullable=True),
        sa.Column('activity_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('engagement_day', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('lead_id', 'engagement_day', name='uq_activity_lead_engagement_day'),
    )
    op.create_index('ix_activities_lead_id', 'activities', ['lead_id'])

    op.create_table('bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lead_id', sa.Integer(), nullable=False),
        sa.Column('lead_name', sa.Text(), nullable=True),
        sa.Column('booked_by_id', sa.Text(), nullable=True),
        sa.Column('booked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookings_lead_id', 'bookings', ['lead_id'])

    op.create_table('tasks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('priority', sa.Text(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('due_time', sa.Text(), nullable=True),
        sa.Column('related_to_type', sa.Text(), nullable=False),
        sa.Column('related_to_id', sa.Integer(), nullable=True),
        sa.Column('related_to_name', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tasks_related_to_id', 'tasks', ['related_to_id'])
    op.create_index('ix_tasks_owner_id', 'tasks', ['owner_id'])

    op.create_table('app_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('setting_type', sa.Text(), nullable=False),
        sa.Column('label', sa.Text(), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('config', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_app_settings_setting_type', 'app_settings', ['setting_type'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_app_settings_setting_type', table_name='app_settings')
    op.drop_table('app_settings')
    op.drop_index('ix_tasks_owner_id', table_name='tasks')
    op.drop_index('ix_tasks_related_to_id', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('ix_bookings_lead_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_activities_lead_id', table_name='activities')
    op.drop_table('activities')
    op.drop_index('ix_leads_reassigned_owner_id', table_name='leads')
    op.drop_index('ix_leads_owner_id', table_name='leads')
    op.drop_table('leads')
