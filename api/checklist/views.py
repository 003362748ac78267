# api/checklist/views.py
"""
Onboarding checklist endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import (
    ChecklistCreate,
    ChecklistRead,
    ChecklistListResponse,
    CheckUpdate,
    CommentsUpdate,
)
from . import db_manager

router = APIRouter(prefix="/checklist", tags=["checklist"])


def _not_found(exc: db_manager.PersonNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
    )


@router.get(
    "",
    response_model=ChecklistListResponse,
    summary="List onboarding checklists",
)
async def list_checklist_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ChecklistListResponse:
    entries = await db_manager.list_entries(db)
    return ChecklistListResponse(
        entries=[ChecklistRead.model_validate(e) for e in entries],
        completed_count=sum(1 for e in entries if e.mandatory_ok),
        total_count=len(entries),
    )


@router.post(
    "",
    response_model=ChecklistRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add an employee to onboarding",
)
async def create_checklist_endpoint(
    payload: ChecklistCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ChecklistRead:
    try:
        entry = await db_manager.create_entry(db, payload)
    except db_manager.PersonAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return ChecklistRead.model_validate(entry)


@router.patch(
    "/{person_name}/checks",
    response_model=ChecklistRead,
    summary="Toggle a single check",
)
async def set_check_endpoint(
    person_name: str,
    payload: CheckUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ChecklistRead:
    try:
        entry = await db_manager.set_check(db, person_name, payload.check, payload.value)
    except db_manager.PersonNotFoundError as exc:
        raise _not_found(exc) from exc

    return ChecklistRead.model_validate(entry)


@router.patch(
    "/{person_name}/comments",
    response_model=ChecklistRead,
    summary="Update free-text comments",
)
async def set_comments_endpoint(
    person_name: str,
    payload: CommentsUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ChecklistRead:
    try:
        entry = await db_manager.set_comments(db, person_name, payload.comments)
    except db_manager.PersonNotFoundError as exc:
        raise _not_found(exc) from exc

    return ChecklistRead.model_validate(entry)
