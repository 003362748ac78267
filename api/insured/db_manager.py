# api/insured/db_manager.py
"""
Business logic for insured computers (serial number to policy binding).
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core import events
from db_models.insured_computer import InsuredComputer
from .models import InsuredComputerCreate, InsuredComputerUpdate
from . import queries

logger = logging.getLogger(__name__)


class InsuredComputerNotFoundError(Exception):
    pass


class InsuredComputerExistsError(Exception):
    """Raised when the serial number is already registered."""
    pass


async def list_insured(db: AsyncSession) -> list[InsuredComputer]:
    result = await db.execute(queries.select_all_insured())
    return list(result.scalars().all())


async def get_insured_or_raise(db: AsyncSession, serial_number: str) -> InsuredComputer:
    result = await db.execute(queries.select_insured_by_serial(serial_number))
    computer = result.scalar_one_or_none()
    if computer is None:
        raise InsuredComputerNotFoundError(f"Insured computer {serial_number} not found")
    return computer


async def create_insured(db: AsyncSession, data: InsuredComputerCreate) -> InsuredComputer:
    """
    Raises:
        InsuredComputerExistsError: If serial_number already exists
    """
    result = await db.execute(queries.select_insured_by_serial(data.serial_number))
    if result.scalar_one_or_none() is not None:
        raise InsuredComputerExistsError(f"Serial number {data.serial_number} is already insured")

    computer = InsuredComputer(**data.model_dump())
    db.add(computer)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise InsuredComputerExistsError(f"Serial number {data.serial_number} is already insured") from exc

    await db.refresh(computer)
    logger.info("Registered policy %s for %s", computer.policy_number, computer.serial_number)
    events.change_feed.publish(events.INSURED_COMPUTERS)
    return computer


async def update_insured(
    db: AsyncSession,
    serial_number: str,
    data: InsuredComputerUpdate,
) -> InsuredComputer:
    """
    Raises:
        InsuredComputerNotFoundError: If serial doesn't exist
    """
    computer = await get_insured_or_raise(db, serial_number)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(computer, field, value)
    await db.commit()
    await db.refresh(computer)
    events.change_feed.publish(events.INSURED_COMPUTERS)
    return computer
