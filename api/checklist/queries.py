# api/checklist/queries.py
from sqlalchemy import select

from db_models.it_checklist import ITChecklist


def select_all_entries():
    """Most recent onboardings first."""
    return select(ITChecklist).order_by(
        ITChecklist.onboarding_date.desc(),
        ITChecklist.person_name.asc(),
    )


def select_entry_by_person(person_name: str):
    return select(ITChecklist).where(ITChecklist.person_name == person_name)
