"""Add task boards, onboarding checklist, tickets and insured computers

Revision ID: 003_add_operations_tables
Revises: 002_add_users_table
Create Date: 2025-01-01 00:00:02.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '003_add_operations_tables'
down_revision: Union[str, None] = '002_add_users_table'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CHECK_COLUMNS = (
    'antivirus', 'backup', 'onepassword', 'slack', 'monday',
    'adobe', 'office', 'acrobat', 'billboard', 'rost', 'canva_pro', 'jumpcloud',
)


def upgrade() -> None:
    # Create pending_tasks table
    op.create_table(
        'pending_tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('board', sa.String(20), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('importance', sa.String(10), nullable=False, server_default='media'),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_pending_tasks_id', 'pending_tasks', ['id'], unique=False)
    op.create_index('ix_pending_tasks_board', 'pending_tasks', ['board'], unique=False)

    # Create it_checklist table
    op.create_table(
        'it_checklist',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('person_name', sa.String(255), nullable=False),
        sa.Column('onboarding_date', sa.Date(), nullable=False),
        *[
            sa.Column(name, sa.Boolean(), nullable=False, server_default='false')
            for name in CHECK_COLUMNS
        ],
        sa.Column('mandatory_ok', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_it_checklist_id', 'it_checklist', ['id'], unique=False)
    op.create_index('ix_it_checklist_person_name', 'it_checklist', ['person_name'], unique=True)

    # Create tickets table
    op.create_table(
        'tickets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ticket_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('area', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='open'),
        sa.Column('priority', sa.String(20), nullable=False, server_default='medium'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tickets_id', 'tickets', ['id'], unique=False)
    op.create_index('ix_tickets_ticket_number', 'tickets', ['ticket_number'], unique=True)

    # Create insured_computers table
    op.create_table(
        'insured_computers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('serial_number', sa.String(100), nullable=False),
        sa.Column('policy_number', sa.String(100), nullable=False),
        sa.Column('person_name', sa.String(255), nullable=False),
        sa.Column('warranty_expiry', sa.Date(), nullable=True),
        sa.Column('policy_expiry', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_insured_computers_id', 'insured_computers', ['id'], unique=False)
    op.create_index('ix_insured_computers_serial_number', 'insured_computers', ['serial_number'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_insured_computers_serial_number', table_name='insured_computers')
    op.drop_index('ix_insured_computers_id', table_name='insured_computers')
    op.drop_table('insured_computers')
    op.drop_index('ix_tickets_ticket_number', table_name='tickets')
    op.drop_index('ix_tickets_id', table_name='tickets')
    op.drop_table('tickets')
    op.drop_index('ix_it_checklist_person_name', table_name='it_checklist')
    op.drop_index('ix_it_checklist_id', table_name='it_checklist')
    op.drop_table('it_checklist')
    op.drop_index('ix_pending_tasks_board', table_name='pending_tasks')
    op.drop_index('ix_pending_tasks_id', table_name='pending_tasks')
    op.drop_table('pending_tasks')
