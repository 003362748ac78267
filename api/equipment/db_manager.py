# api/equipment/db_manager.py
"""
Business logic for the equipment inventory.

Reads go through two independent fetches (per-year depreciation rows and
asset metadata) that are joined in core.depreciation. Writes are single
attempts; failures are reported, never retried.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core import events
from core.depreciation import EquipmentRecord, build_equipment_view, project_schedule
from db_models.equipment import Equipment, DepreciationRate, EquipmentDepreciationYear
from .models import EditableField, EquipmentCreate
from . import queries

logger = logging.getLogger(__name__)

# Changing any of these invalidates the stored per-year amounts
SCHEDULE_FIELDS = frozenset({EditableField.MODEL, EditableField.PURCHASE_COST})


class DataFetchError(Exception):
    """Raised when either equipment query fails; no partial list is returned."""
    pass


class EquipmentNotFoundError(Exception):
    """Raised when serial number doesn't exist."""
    pass


class SerialAlreadyExistsError(Exception):
    """Raised when creating an asset whose serial number is taken."""
    pass


# --- Reads ---

async def fetch_depreciation_rows(db: AsyncSession, serial_number: str | None = None) -> list[RowMapping]:
    result = await db.execute(queries.select_depreciation_rows(serial_number))
    return list(result.mappings().all())


async def fetch_asset_metadata(db: AsyncSession, serial_number: str | None = None) -> list[RowMapping]:
    result = await db.execute(queries.select_asset_metadata(serial_number))
    return list(result.mappings().all())


async def get_equipment_with_depreciation(
    db: AsyncSession,
    as_of: datetime | None = None,
    serial_number: str | None = None,
) -> list[EquipmentRecord]:
    """
    Build the live equipment view.

    Both fetches must succeed before anything is assembled.

    Raises:
        DataFetchError: If either query fails
    """
    try:
        depreciation_rows = await fetch_depreciation_rows(db, serial_number)
        asset_metadata = await fetch_asset_metadata(db, serial_number)
    except SQLAlchemyError as exc:
        logger.error("Equipment fetch failed: %s", exc)
        raise DataFetchError("Could not load equipment data") from exc

    return build_equipment_view(
        depreciation_rows,
        asset_metadata,
        as_of or datetime.now(timezone.utc),
    )


async def get_equipment_record(
    db: AsyncSession,
    serial_number: str,
    as_of: datetime | None = None,
) -> EquipmentRecord:
    """
    Raises:
        EquipmentNotFoundError: If the serial has no scheduled asset
        DataFetchError: If either query fails
    """
    records = await get_equipment_with_depreciation(db, as_of=as_of, serial_number=serial_number)
    if not records:
        raise EquipmentNotFoundError(f"Equipment {serial_number} not found")
    return records[0]


async def list_rates(db: AsyncSession) -> list[DepreciationRate]:
    result = await db.execute(queries.select_all_rates())
    return list(result.scalars().all())


# --- Writes ---

async def get_equipment_or_raise(db: AsyncSession, serial_number: str) -> Equipment:
    result = await db.execute(queries.select_equipment_by_serial(serial_number))
    equipment = result.scalar_one_or_none()
    if equipment is None:
        raise EquipmentNotFoundError(f"Equipment {serial_number} not found")
    return equipment


async def regenerate_schedule(db: AsyncSession, equipment: Equipment) -> None:
    """Replace the stored year 1..5 amounts for one asset (no commit)."""
    result = await db.execute(queries.select_rate_for_model(equipment.model))
    rate = result.scalar_one_or_none()

    await db.execute(queries.delete_schedule_for_serial(equipment.serial_number))
    for year in project_schedule(
        equipment.purchase_cost,
        rate.rate if rate is not None else None,
        rate.residual_pct if rate is not None else None,
    ):
        db.add(
            EquipmentDepreciationYear(
                serial_number=equipment.serial_number,
                year_number=year.year_number,
                depreciation_year=year.depreciation_year,
                book_value_end_year=year.book_value_end_year,
            )
        )


async def create_equipment(db: AsyncSession, data: EquipmentCreate) -> Equipment:
    """
    Create an asset together with its depreciation schedule.

    Raises:
        SerialAlreadyExistsError: If serial_number already exists
    """
    # Best-effort check; the unique constraint is the final authority
    result = await db.execute(queries.select_equipment_by_serial(data.serial_number))
    if result.scalar_one_or_none() is not None:
        raise SerialAlreadyExistsError(f"Serial number {data.serial_number} already exists")

    equipment = Equipment(
        serial_number=data.serial_number,
        model=data.model.value,
        company=data.company.value,
        assigned_to=data.assigned_to,
        insured=data.insured,
        purchase_date=data.purchase_date,
        purchase_cost=data.purchase_cost,
        file_url=data.file_url,
    )
    db.add(equipment)
    try:
        await db.flush()
        await regenerate_schedule(db, equipment)
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Duplicate serial on create: %s", data.serial_number)
        raise SerialAlreadyExistsError(f"Serial number {data.serial_number} already exists") from exc

    await db.refresh(equipment)
    logger.info("Created equipment %s (%s)", equipment.serial_number, equipment.model)
    events.change_feed.publish(events.EQUIPMENT)
    return equipment


async def update_equipment_field(
    db: AsyncSession,
    serial_number: str,
    field: EditableField,
    value: Any,
) -> Equipment:
    """
    Set one editable column. `value` must already be coerced for `field`.

    Raises:
        EquipmentNotFoundError: If serial doesn't exist
    """
    equipment = await get_equipment_or_raise(db, serial_number)
    setattr(equipment, field.value, value)

    # Assets inserted without a schedule get one here so they show up in the view
    result = await db.execute(queries.count_schedule_rows(serial_number))
    has_schedule = (result.scalar() or 0) > 0

    if field in SCHEDULE_FIELDS or not has_schedule:
        await db.flush()
        await regenerate_schedule(db, equipment)

    await db.commit()
    await db.refresh(equipment)
    logger.info("Updated equipment %s: %s=%r", serial_number, field.value, value)
    events.change_feed.publish(events.EQUIPMENT)
    return equipment
