# api/checklist/db_manager.py
"""
Business logic for the onboarding checklist.

mandatory_ok is recomputed here on every write; clients cannot set it.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core import events
from db_models.it_checklist import ITChecklist, MANDATORY_CHECKS, OPTIONAL_CHECKS
from .models import ChecklistCreate, CheckName
from . import queries

logger = logging.getLogger(__name__)


class PersonNotFoundError(Exception):
    pass


class PersonAlreadyExistsError(Exception):
    """Raised when an employee already has a checklist row."""
    pass


async def list_entries(db: AsyncSession) -> list[ITChecklist]:
    result = await db.execute(queries.select_all_entries())
    return list(result.scalars().all())


async def get_entry_or_raise(db: AsyncSession, person_name: str) -> ITChecklist:
    result = await db.execute(queries.select_entry_by_person(person_name))
    entry = result.scalar_one_or_none()
    if entry is None:
        raise PersonNotFoundError(f"No checklist for '{person_name}'")
    return entry


async def create_entry(db: AsyncSession, data: ChecklistCreate) -> ITChecklist:
    """
    New employee with every check off.

    Raises:
        PersonAlreadyExistsError: If person_name already exists
    """
    result = await db.execute(queries.select_entry_by_person(data.person_name))
    if result.scalar_one_or_none() is not None:
        raise PersonAlreadyExistsError(f"Employee '{data.person_name}' already exists")

    entry = ITChecklist(
        person_name=data.person_name,
        onboarding_date=data.onboarding_date,
        **{name: False for name in MANDATORY_CHECKS + OPTIONAL_CHECKS},
    )
    entry.refresh_mandatory_ok()
    db.add(entry)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise PersonAlreadyExistsError(f"Employee '{data.person_name}' already exists") from exc

    await db.refresh(entry)
    logger.info("Created onboarding checklist for %s", entry.person_name)
    events.change_feed.publish(events.IT_CHECKLIST)
    return entry


async def set_check(db: AsyncSession, person_name: str, check: CheckName, value: bool) -> ITChecklist:
    """
    Raises:
        PersonNotFoundError: If person doesn't exist
    """
    entry = await get_entry_or_raise(db, person_name)
    setattr(entry, check.value, value)
    entry.refresh_mandatory_ok()
    await db.commit()
    await db.refresh(entry)
    events.change_feed.publish(events.IT_CHECKLIST)
    return entry


async def set_comments(db: AsyncSession, person_name: str, comments: str | None) -> ITChecklist:
    """
    Raises:
        PersonNotFoundError: If person doesn't exist
    """
    entry = await get_entry_or_raise(db, person_name)
    entry.comments = comments.strip() if comments and comments.strip() else None
    await db.commit()
    await db.refresh(entry)
    events.change_feed.publish(events.IT_CHECKLIST)
    return entry
