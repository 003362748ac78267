"""Initial schema with equipment inventory and depreciation

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

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
    # Create equipment table
    op.create_table(
        'equipment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('serial_number', sa.String(100), nullable=False),
        sa.Column('model', sa.String(20), nullable=False),
        sa.Column('company', sa.String(10), nullable=False, server_default='AJA'),
        sa.Column('assigned_to', sa.String(255), nullable=True),
        sa.Column('insured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('purchase_cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('file_url', sa.String(1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_equipment_id', 'equipment', ['id'], unique=False)
    op.create_index('ix_equipment_serial_number', 'equipment', ['serial_number'], unique=True)

    # Create depreciation_rates table
    rates = op.create_table(
        'depreciation_rates',
        sa.Column('model', sa.String(20), nullable=False),
        sa.Column('rate', sa.Float(), nullable=False),
        sa.Column('residual_pct', sa.Float(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('model')
    )
    op.bulk_insert(
        rates,
        [
            {'model': 'mac_pro', 'rate': 0.20, 'residual_pct': 0.10},
            {'model': 'mac_air', 'rate': 0.20, 'residual_pct': 0.10},
            {'model': 'lenovo', 'rate': 0.25, 'residual_pct': 0.10},
        ]
    )

    # Create equipment_depreciation_years table
    op.create_table(
        'equipment_depreciation_years',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('serial_number', sa.String(100), nullable=False),
        sa.Column('year_number', sa.Integer(), nullable=False),
        sa.Column('depreciation_year', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('book_value_end_year', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['serial_number'], ['equipment.serial_number'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('serial_number', 'year_number', name='uq_equipment_year')
    )
    op.create_index('ix_equipment_depreciation_years_id', 'equipment_depreciation_years', ['id'], unique=False)
    op.create_index(
        'ix_equipment_depreciation_years_serial_number',
        'equipment_depreciation_years',
        ['serial_number'],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index('ix_equipment_depreciation_years_serial_number', table_name='equipment_depreciation_years')
    op.drop_index('ix_equipment_depreciation_years_id', table_name='equipment_depreciation_years')
    op.drop_table('equipment_depreciation_years')
    op.drop_table('depreciation_rates')
    op.drop_index('ix_equipment_serial_number', table_name='equipment')
    op.drop_index('ix_equipment_id', table_name='equipment')
    op.drop_table('equipment')
