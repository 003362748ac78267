# api/equipment/views.py
"""
Equipment inventory endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import (
    EquipmentCreate,
    EquipmentFieldUpdate,
    EquipmentRead,
    DepreciationRateRead,
)
from .export import render_equipment_csv, export_filename
from . import db_manager

router = APIRouter(prefix="/equipment", tags=["equipment"])


def _fetch_failed(exc: db_manager.DataFetchError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


@router.get(
    "",
    response_model=list[EquipmentRead],
    summary="List equipment with live depreciation",
)
async def list_equipment_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[EquipmentRead]:
    """
    Every scheduled asset, sorted by serial number. Book value is computed
    as of the request time.
    """
    try:
        records = await db_manager.get_equipment_with_depreciation(db)
    except db_manager.DataFetchError as exc:
        raise _fetch_failed(exc) from exc

    return [EquipmentRead.model_validate(r) for r in records]


@router.get(
    "/export.csv",
    summary="Download equipment with depreciation as CSV",
    response_class=Response,
)
async def export_equipment_csv_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    now = datetime.now(timezone.utc)
    try:
        records = await db_manager.get_equipment_with_depreciation(db, as_of=now)
    except db_manager.DataFetchError as exc:
        raise _fetch_failed(exc) from exc

    return Response(
        content=render_equipment_csv(records),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={export_filename(now.date())}"},
    )


@router.get(
    "/rates",
    response_model=list[DepreciationRateRead],
    summary="List depreciation rates per model",
)
async def list_rates_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[DepreciationRateRead]:
    rates = await db_manager.list_rates(db)
    return [DepreciationRateRead.model_validate(r) for r in rates]


@router.post(
    "",
    response_model=EquipmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new asset",
)
async def create_equipment_endpoint(
    payload: EquipmentCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> EquipmentRead:
    try:
        await db_manager.create_equipment(db, payload)
    except db_manager.SerialAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    try:
        record = await db_manager.get_equipment_record(db, payload.serial_number)
    except db_manager.DataFetchError as exc:
        raise _fetch_failed(exc) from exc

    return EquipmentRead.model_validate(record)


@router.get(
    "/{serial_number}",
    response_model=EquipmentRead,
    summary="Get one asset with live depreciation",
)
async def get_equipment_endpoint(
    serial_number: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> EquipmentRead:
    try:
        record = await db_manager.get_equipment_record(db, serial_number)
    except db_manager.EquipmentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except db_manager.DataFetchError as exc:
        raise _fetch_failed(exc) from exc

    return EquipmentRead.model_validate(record)


@router.patch(
    "/{serial_number}",
    response_model=EquipmentRead,
    summary="Update a single editable field",
)
async def update_equipment_endpoint(
    serial_number: str,
    payload: EquipmentFieldUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> EquipmentRead:
    """
    Inline edit. Only metadata and schedule inputs are editable; book value
    and yearly depreciation are derived.
    """
    try:
        await db_manager.update_equipment_field(db, serial_number, payload.field, payload.value)
        record = await db_manager.get_equipment_record(db, serial_number)
    except db_manager.EquipmentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except db_manager.DataFetchError as exc:
        raise _fetch_failed(exc) from exc

    return EquipmentRead.model_validate(record)
