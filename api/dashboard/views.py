# api/dashboard/views.py
"""
Analytics endpoints backing the equipment charts.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from api.equipment.db_manager import DataFetchError
from .models import CompanyFilter, DateRange, MonthlyStat, ModelStat, DashboardSummary
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/monthly",
    response_model=list[MonthlyStat],
    summary="Purchases per month",
)
async def get_monthly_stats_endpoint(
    current_user: CurrentUser,
    date_range: DateRange = Query(DateRange.ALL, alias="range", description="12m, 24m or all"),
    company: CompanyFilter = Query(CompanyFilter.ALL, description="HBL, AJA or all"),
    db: AsyncSession = Depends(get_session),
) -> list[MonthlyStat]:
    return await db_manager.get_monthly_stats(
        db,
        date_range=date_range,
        company=company.as_company(),
    )


@router.get(
    "/models",
    response_model=list[ModelStat],
    summary="Equipment count per model",
)
async def get_model_distribution_endpoint(
    current_user: CurrentUser,
    company: CompanyFilter = Query(CompanyFilter.ALL, description="HBL, AJA or all"),
    db: AsyncSession = Depends(get_session),
) -> list[ModelStat]:
    return await db_manager.get_model_distribution(db, company.as_company())


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Headline inventory and book value figures",
)
async def get_summary_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> DashboardSummary:
    try:
        return await db_manager.get_summary(db)
    except DataFetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
