# core/depreciation.py
"""
Straight-line depreciation with a residual floor, plus the equipment view
builder that joins per-year depreciation rows with live asset metadata.

Everything in this module is pure. Book value depends on the clock and is
recomputed from scratch on every call; nothing is cached.

Elapsed time uses a fixed 365-day year (no leap-year adjustment).
"""
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any

from db_models.equipment import DEFAULT_COMPANY

logger = logging.getLogger(__name__)

HORIZON_YEARS = 5
DAYS_PER_YEAR = 365
SECONDS_PER_YEAR = DAYS_PER_YEAR * 24 * 60 * 60


def _as_utc_datetime(value: date | datetime) -> datetime:
    """Dates are taken as UTC midnight; naive datetimes are assumed UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def compute_years_exact(purchase_date: date | None, as_of: date | datetime) -> float:
    """
    Continuous years elapsed since purchase, clamped to [0, HORIZON_YEARS].

    Returns 0 when the purchase date is unknown.
    """
    if purchase_date is None:
        return 0.0
    elapsed = _as_utc_datetime(as_of) - _as_utc_datetime(purchase_date)
    years = elapsed.total_seconds() / SECONDS_PER_YEAR
    return min(float(HORIZON_YEARS), max(0.0, years))


def compute_book_value_today(
    purchase_cost: float | None,
    annual_rate: float | None,
    residual_percentage: float | None,
    years_exact: float,
) -> float:
    """
    Book value after `years_exact` years of straight-line depreciation,
    never below `purchase_cost * residual_percentage`.

    Without a cost the value is 0; without a rate it is the full cost.
    Inputs are not validated.
    """
    if purchase_cost is None:
        return 0.0
    if annual_rate is None:
        return float(purchase_cost)
    straight_line = purchase_cost - purchase_cost * annual_rate * years_exact
    floor = purchase_cost * (residual_percentage or 0.0)
    return max(straight_line, floor)


@dataclass(frozen=True)
class ScheduleYear:
    year_number: int
    depreciation_year: float
    book_value_end_year: float


def project_schedule(
    purchase_cost: float | None,
    annual_rate: float | None,
    residual_percentage: float | None,
    years: int = HORIZON_YEARS,
) -> list[ScheduleYear]:
    """
    Fixed per-year depreciation amounts for years 1..`years`.

    Each year takes `cost * rate` until the residual floor is reached; the
    year that crosses the floor only takes what is left above it. Amounts
    are rounded to cents.
    """
    if purchase_cost is None or annual_rate is None:
        book_value = round(float(purchase_cost or 0.0), 2)
        return [ScheduleYear(n, 0.0, book_value) for n in range(1, years + 1)]

    floor = purchase_cost * (residual_percentage or 0.0)
    annual_amount = purchase_cost * annual_rate
    book_value = float(purchase_cost)

    schedule = []
    for year_number in range(1, years + 1):
        amount = max(0.0, min(annual_amount, book_value - floor))
        book_value -= amount
        schedule.append(ScheduleYear(year_number, round(amount, 2), round(book_value, 2)))
    return schedule


@dataclass
class EquipmentRecord:
    """One asset as exposed to the inventory, CSV export and charts."""
    serial_number: str
    model: str
    company: str
    assigned_to: str | None
    insured: bool
    purchase_date: date | None
    purchase_cost: float | None
    file_url: str | None
    created_at: datetime | None
    updated_at: datetime | None
    rate: float | None
    residual_pct: float | None
    book_value_today: float
    years_exact: float
    years_elapsed: int
    depreciation_y1: float = 0.0
    depreciation_y2: float = 0.0
    depreciation_y3: float = 0.0
    depreciation_y4: float = 0.0
    depreciation_y5: float = 0.0


@dataclass
class _AssetGroup:
    serial_number: str
    model: str
    purchase_date: date | None
    purchase_cost: float | None
    rate: float | None
    residual_pct: float | None
    amounts_by_year: dict[int, float] = field(default_factory=dict)


def group_depreciation_rows(rows: Iterable[Mapping[str, Any]]) -> dict[str, _AssetGroup]:
    """
    Fold per-(asset, year) rows into one group per serial number.

    Asset-level fields come from the first row seen for a serial. A repeated
    (serial, year_number) pair overwrites the earlier amount.
    """
    groups: dict[str, _AssetGroup] = {}
    for row in rows:
        serial = row["serial_number"]
        group = groups.get(serial)
        if group is None:
            group = _AssetGroup(
                serial_number=serial,
                model=row.get("model"),
                purchase_date=row.get("purchase_date"),
                purchase_cost=row.get("purchase_cost"),
                rate=row.get("rate"),
                residual_pct=row.get("residual_pct"),
            )
            groups[serial] = group

        year_number = row.get("year_number")
        if year_number is not None:
            group.amounts_by_year[int(year_number)] = row.get("depreciation_year") or 0.0
    return groups


def build_equipment_view(
    depreciation_rows: Iterable[Mapping[str, Any]],
    asset_metadata: Iterable[Mapping[str, Any]],
    as_of: date | datetime,
) -> list[EquipmentRecord]:
    """
    Join depreciation rows with asset metadata into one record per serial.

    Only serials present in `depreciation_rows` are emitted; metadata rows
    without a schedule are left out. Output is sorted by serial number.
    """
    groups = group_depreciation_rows(depreciation_rows)
    metadata_by_serial = {meta["serial_number"]: meta for meta in asset_metadata}

    unscheduled = sorted(set(metadata_by_serial) - set(groups))
    if unscheduled:
        logger.debug("Omitting %d asset(s) without depreciation rows: %s", len(unscheduled), unscheduled)

    records = []
    for serial in sorted(groups):
        group = groups[serial]
        meta = metadata_by_serial.get(serial, {})

        years_exact = compute_years_exact(group.purchase_date, as_of)
        book_value_today = compute_book_value_today(
            group.purchase_cost,
            group.rate,
            group.residual_pct,
            years_exact,
        )
        amounts = group.amounts_by_year

        records.append(
            EquipmentRecord(
                serial_number=serial,
                model=group.model,
                company=meta.get("company") or DEFAULT_COMPANY.value,
                assigned_to=meta.get("assigned_to") or None,
                insured=bool(meta.get("insured", False)),
                purchase_date=group.purchase_date,
                purchase_cost=group.purchase_cost,
                file_url=meta.get("file_url") or None,
                created_at=meta.get("created_at"),
                updated_at=meta.get("updated_at"),
                rate=group.rate,
                residual_pct=group.residual_pct,
                book_value_today=book_value_today,
                years_exact=years_exact,
                years_elapsed=math.floor(years_exact),
                depreciation_y1=amounts.get(1, 0.0),
                depreciation_y2=amounts.get(2, 0.0),
                depreciation_y3=amounts.get(3, 0.0),
                depreciation_y4=amounts.get(4, 0.0),
                depreciation_y5=amounts.get(5, 0.0),
            )
        )
    return records
