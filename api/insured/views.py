# api/insured/views.py
"""
Insured-computer endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import (
    InsuredComputerCreate,
    InsuredComputerUpdate,
    InsuredComputerRead,
    InsuredComputerListResponse,
)
from . import db_manager

router = APIRouter(prefix="/insured-computers", tags=["insured-computers"])


@router.get(
    "",
    response_model=InsuredComputerListResponse,
    summary="List insured computers",
)
async def list_insured_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> InsuredComputerListResponse:
    computers = await db_manager.list_insured(db)
    return InsuredComputerListResponse(
        computers=[InsuredComputerRead.model_validate(c) for c in computers],
        total_count=len(computers),
        with_warranty_count=sum(1 for c in computers if c.warranty_expiry is not None),
    )


@router.post(
    "",
    response_model=InsuredComputerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an insured computer",
)
async def create_insured_endpoint(
    payload: InsuredComputerCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> InsuredComputerRead:
    try:
        computer = await db_manager.create_insured(db, payload)
    except db_manager.InsuredComputerExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return InsuredComputerRead.model_validate(computer)


@router.patch(
    "/{serial_number}",
    response_model=InsuredComputerRead,
    summary="Update policy details",
)
async def update_insured_endpoint(
    serial_number: str,
    payload: InsuredComputerUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> InsuredComputerRead:
    try:
        computer = await db_manager.update_insured(db, serial_number, payload)
    except db_manager.InsuredComputerNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return InsuredComputerRead.model_validate(computer)
