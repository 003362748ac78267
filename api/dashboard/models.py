"""
Pydantic models for dashboard (chart) responses.
"""
from enum import Enum

from pydantic import BaseModel


class DateRange(str, Enum):
    LAST_12_MONTHS = "12m"
    LAST_24_MONTHS = "24m"
    ALL = "all"


RANGE_MONTHS: dict[DateRange, int | None] = {
    DateRange.LAST_12_MONTHS: 12,
    DateRange.LAST_24_MONTHS: 24,
    DateRange.ALL: None,
}


class CompanyFilter(str, Enum):
    """Chart company filter; `all` disables it."""
    HBL = "HBL"
    AJA = "AJA"
    ALL = "all"

    def as_company(self) -> str | None:
        return None if self is CompanyFilter.ALL else self.value


class MonthlyStat(BaseModel):
    """Purchases within one calendar month."""
    month: str  # YYYY-MM
    qty: int
    total_spend: float
    formatted_month: str


class ModelStat(BaseModel):
    model: str
    qty: int
    label: str
    color: str


class CompanyTotals(BaseModel):
    company: str
    qty: int
    total_spend: float
    book_value_today: float


class DashboardSummary(BaseModel):
    """Headline figures for the analytics tab."""
    total_equipment: int
    total_spend: float
    avg_monthly_spend: float
    total_book_value_today: float
    insured_count: int
    by_company: list[CompanyTotals]
