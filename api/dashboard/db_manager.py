# api/dashboard/db_manager.py
"""
Business logic for the equipment analytics charts.

Depreciation figures are read from the equipment view, never re-derived.
"""
import calendar
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from api.equipment import db_manager as equipment_manager
from db_models.equipment import EquipmentModel, MODEL_COLORS, label_for_model
from .models import DateRange, RANGE_MONTHS, MonthlyStat, ModelStat, CompanyTotals, DashboardSummary
from . import queries

DEFAULT_MODEL_COLOR = "#6B7280"


def subtract_months(day: date, months: int) -> date:
    """Same day-of-month `months` earlier, clamped to the month's last day."""
    year, month_zero = divmod(day.year * 12 + (day.month - 1) - months, 12)
    month = month_zero + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def range_start(date_range: DateRange, today: date) -> date | None:
    months = RANGE_MONTHS[date_range]
    if months is None:
        return None
    return subtract_months(today, months)


def aggregate_monthly(purchases: Iterable[tuple[date, float]]) -> list[MonthlyStat]:
    """Group (purchase_date, cost) pairs by calendar month, sorted by month."""
    totals: dict[str, list] = defaultdict(lambda: [0, 0.0])
    for purchase_date, cost in purchases:
        bucket = totals[purchase_date.strftime("%Y-%m")]
        bucket[0] += 1
        bucket[1] += cost or 0.0

    stats = []
    for month in sorted(totals):
        qty, spend = totals[month]
        year, month_number = (int(part) for part in month.split("-"))
        stats.append(
            MonthlyStat(
                month=month,
                qty=qty,
                total_spend=round(spend, 2),
                formatted_month=date(year, month_number, 1).strftime("%b %Y"),
            )
        )
    return stats


def model_color(model: str) -> str:
    try:
        return MODEL_COLORS[EquipmentModel(model)]
    except ValueError:
        return DEFAULT_MODEL_COLOR


async def get_monthly_stats(
    db: AsyncSession,
    date_range: DateRange = DateRange.ALL,
    company: str | None = None,
    today: date | None = None,
) -> list[MonthlyStat]:
    since = range_start(date_range, today or date.today())
    result = await db.execute(queries.select_purchases(company=company, since=since))
    return aggregate_monthly(result.all())


async def get_model_distribution(db: AsyncSession, company: str | None = None) -> list[ModelStat]:
    """Asset count per model, largest first."""
    result = await db.execute(queries.count_equipment_by_model(company))
    stats = [
        ModelStat(model=model, qty=qty, label=label_for_model(model), color=model_color(model))
        for model, qty in result.all()
    ]
    return sorted(stats, key=lambda s: (-s.qty, s.model))


async def get_summary(db: AsyncSession, as_of: datetime | None = None) -> DashboardSummary:
    """
    Raises:
        DataFetchError: If the equipment view cannot be loaded
    """
    as_of = as_of or datetime.now(timezone.utc)
    records = await equipment_manager.get_equipment_with_depreciation(db, as_of=as_of)
    monthly = aggregate_monthly(
        (r.purchase_date, r.purchase_cost)
        for r in records
        if r.purchase_date is not None and r.purchase_cost is not None
    )

    by_company: dict[str, CompanyTotals] = {}
    for record in records:
        totals = by_company.setdefault(
            record.company,
            CompanyTotals(company=record.company, qty=0, total_spend=0.0, book_value_today=0.0),
        )
        totals.qty += 1
        totals.total_spend += record.purchase_cost or 0.0
        totals.book_value_today += record.book_value_today

    total_spend = sum(r.purchase_cost or 0.0 for r in records)
    return DashboardSummary(
        total_equipment=len(records),
        total_spend=round(total_spend, 2),
        avg_monthly_spend=round(sum(m.total_spend for m in monthly) / len(monthly), 2) if monthly else 0.0,
        total_book_value_today=round(sum(r.book_value_today for r in records), 2),
        insured_count=sum(1 for r in records if r.insured),
        by_company=[by_company[c] for c in sorted(by_company)],
    )
