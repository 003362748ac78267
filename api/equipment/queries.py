# api/equipment/queries.py
"""
SQLAlchemy query builders for equipment inventory.
"""
from sqlalchemy import select, delete, func

from db_models.equipment import Equipment, DepreciationRate, EquipmentDepreciationYear


def select_depreciation_rows(serial_number: str | None = None):
    """
    One row per (asset, year) with the asset's schedule inputs, ordered by
    serial ascending. Assets without a rate for their model still appear,
    with rate/residual_pct null.
    """
    stmt = (
        select(
            Equipment.serial_number,
            Equipment.model,
            Equipment.purchase_date,
            Equipment.purchase_cost,
            DepreciationRate.rate,
            DepreciationRate.residual_pct,
            EquipmentDepreciationYear.year_number,
            EquipmentDepreciationYear.depreciation_year,
            EquipmentDepreciationYear.book_value_end_year,
        )
        .select_from(EquipmentDepreciationYear)
        .join(Equipment, Equipment.serial_number == EquipmentDepreciationYear.serial_number)
        .outerjoin(DepreciationRate, DepreciationRate.model == Equipment.model)
    )
    if serial_number is not None:
        stmt = stmt.where(Equipment.serial_number == serial_number)
    return stmt.order_by(
        Equipment.serial_number.asc(),
        EquipmentDepreciationYear.year_number.asc(),
    )


def select_asset_metadata(serial_number: str | None = None):
    """Mutable per-asset fields that are not part of the depreciation projection."""
    stmt = select(
        Equipment.serial_number,
        Equipment.company,
        Equipment.assigned_to,
        Equipment.insured,
        Equipment.file_url,
        Equipment.created_at,
        Equipment.updated_at,
    )
    if serial_number is not None:
        stmt = stmt.where(Equipment.serial_number == serial_number)
    return stmt.order_by(Equipment.serial_number.asc())


def select_equipment_by_serial(serial_number: str):
    return select(Equipment).where(Equipment.serial_number == serial_number)


def select_rate_for_model(model: str):
    return select(DepreciationRate).where(DepreciationRate.model == model)


def select_all_rates():
    return select(DepreciationRate).order_by(DepreciationRate.model.asc())


def count_schedule_rows(serial_number: str):
    return select(func.count(EquipmentDepreciationYear.id)).where(
        EquipmentDepreciationYear.serial_number == serial_number
    )


def delete_schedule_for_serial(serial_number: str):
    return delete(EquipmentDepreciationYear).where(
        EquipmentDepreciationYear.serial_number == serial_number
    )
