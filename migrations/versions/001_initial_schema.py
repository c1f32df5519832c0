"""Initial FlowOps schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Accounts
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='employee'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=True),
        sa.Column('is_system_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('idx_users_establishment_status', 'users', ['establishment', 'status'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('recipient_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('related_user_id', sa.Uuid(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_recipient_id', 'notifications', ['recipient_id'])

    op.create_table(
        'token_blacklist',
        sa.Column('token_hash', sa.String(64), primary_key=True),
        sa.Column('blacklisted_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_token_blacklist_expires', 'token_blacklist', ['expires_at'])

    # Stock
    op.create_table(
        'inventory',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('icon', sa.String(1024), nullable=False),
        sa.Column('category', sa.String(255), nullable=True),
        sa.Column('quantity', sa.Numeric(14, 4), nullable=False, server_default='0'),
        sa.Column('unit', sa.String(50), nullable=True),
        sa.Column('cost_per_unit', sa.Numeric(10, 4), nullable=True),
        sa.Column('status', sa.String(10), nullable=False, server_default='OK'),
        sa.Column('low_comment', sa.Text(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_by', sa.String(255), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
    )
    op.create_index('idx_inventory_establishment_name', 'inventory', ['establishment', 'name'])
    op.create_index('idx_inventory_establishment_category', 'inventory', ['establishment', 'category'])

    # Menu & sales
    op.create_table(
        'menu_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_menu_items_establishment', 'menu_items', ['establishment'])

    op.create_table(
        'ingredients',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('menu_item_id', sa.Uuid(), sa.ForeignKey('menu_items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('quantity', sa.Numeric(10, 4), nullable=False),
        sa.Column('unit', sa.String(50), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('inventory_item_id', sa.Uuid(), sa.ForeignKey('inventory.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_ingredients_menu_item_id', 'ingredients', ['menu_item_id'])

    op.create_table(
        'sales',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('menu_item_id', sa.Uuid(), sa.ForeignKey('menu_items.id', ondelete='SET NULL'), nullable=True),
        sa.Column('quantity_sold', sa.Integer(), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_sales_establishment_date', 'sales', ['establishment', 'date'])

    op.create_table(
        'inventory_logs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('inventory_item_id', sa.Uuid(), sa.ForeignKey('inventory.id', ondelete='SET NULL'), nullable=True),
        sa.Column('item_name', sa.String(255), nullable=False),
        sa.Column('change', sa.Numeric(14, 4), nullable=False),
        sa.Column('reason', sa.String(20), nullable=False),
        sa.Column('sale_id', sa.Uuid(), sa.ForeignKey('sales.id', ondelete='SET NULL'), nullable=True),
        sa.Column('author', sa.String(255), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_inventory_logs_establishment_date', 'inventory_logs', ['establishment', 'date'])

    # Operations
    op.create_table(
        'equipment',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(255), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='Working'),
        sa.Column('last_issue', sa.Text(), nullable=True),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_equipment_establishment', 'equipment', ['establishment'])

    op.create_table(
        'checklist_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('list_type', sa.String(20), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_by', sa.String(255), nullable=True),
        sa.Column('assigned_to', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_checklist_items_establishment_type', 'checklist_items', ['establishment', 'list_type'])

    op.create_table(
        'weekly_tasks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('assigned_to', sa.String(255), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_weekly_tasks_establishment', 'weekly_tasks', ['establishment'])

    op.create_table(
        'task_completions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('task_id', sa.Uuid(), sa.ForeignKey('weekly_tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('completed_by', sa.String(255), nullable=False),
        sa.Column('photo', sa.Text(), nullable=False),
    )
    op.create_index('ix_task_completions_task_id', 'task_completions', ['task_id'])

    # Communication & audit
    op.create_table(
        'chat_messages',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('sender', sa.String(255), nullable=False),
        sa.Column('sender_role', sa.String(20), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('type', sa.String(20), nullable=False, server_default='text'),
    )
    op.create_index('idx_chat_messages_establishment_timestamp', 'chat_messages', ['establishment', 'timestamp'])

    op.create_table(
        'timeline_events',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('establishment', sa.String(255), nullable=False),
        sa.Column('author', sa.String(255), nullable=False),
        sa.Column('author_role', sa.String(20), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('photo', sa.Text(), nullable=True),
    )
    op.create_index('idx_timeline_events_establishment_timestamp', 'timeline_events', ['establishment', 'timestamp'])


def downgrade() -> None:
    op.drop_table('timeline_events')
    op.drop_table('chat_messages')
    op.drop_table('task_completions')
    op.drop_table('weekly_tasks')
    op.drop_table('checklist_items')
    op.drop_table('equipment')
    op.drop_table('inventory_logs')
    op.drop_table('sales')
    op.drop_table('ingredients')
    op.drop_table('menu_items')
    op.drop_table('inventory')
    op.drop_table('token_blacklist')
    op.drop_table('notifications')
    op.drop_table('users')
