from datetime import date, datetime, timedelta, timezone

import pytest

from core.depreciation import (
    HORIZON_YEARS,
    compute_book_value_today,
    compute_years_exact,
    project_schedule,
)

AS_OF = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def test_years_exact_two_years_of_365_days():
    purchase = (AS_OF - timedelta(days=730)).date()
    as_of_midnight = datetime.combine(AS_OF.date(), datetime.min.time(), tzinfo=timezone.utc)
    assert compute_years_exact(purchase, as_of_midnight) == pytest.approx(2.0)


def test_years_exact_clamped_to_horizon():
    assert compute_years_exact(date(2015, 1, 1), AS_OF) == HORIZON_YEARS


def test_years_exact_future_purchase_is_zero():
    assert compute_years_exact(date(2030, 1, 1), AS_OF) == 0.0


def test_years_exact_without_purchase_date():
    assert compute_years_exact(None, AS_OF) == 0.0


def test_years_exact_accepts_naive_datetime():
    naive = datetime(2025, 6, 30, 12, 0)
    assert compute_years_exact(date(2024, 6, 30), naive) == compute_years_exact(date(2024, 6, 30), AS_OF)


def test_book_value_two_years_in():
    assert compute_book_value_today(25000, 0.20, 0.10, 2.0) == pytest.approx(15000)


def test_book_value_hits_residual_floor():
    years = compute_years_exact(
        (AS_OF - timedelta(days=6 * 365)).date(),
        AS_OF,
    )
    assert years == 5.0
    assert compute_book_value_today(25000, 0.20, 0.10, years) == pytest.approx(2500)


def test_book_value_without_cost_is_zero():
    assert compute_book_value_today(None, 0.20, 0.10, 3.0) == 0
    assert compute_book_value_today(None, None, None, 3.0) == 0


def test_book_value_without_rate_is_full_cost():
    assert compute_book_value_today(1200, None, None, 4.0) == 1200


@pytest.mark.parametrize("years", [0.0, 0.5, 1.0, 2.7, 4.0, 4.99, 5.0])
def test_book_value_stays_between_floor_and_cost(years):
    value = compute_book_value_today(1800, 0.25, 0.10, years)
    assert 180 <= value <= 1800


def test_book_value_is_non_increasing_over_time():
    values = [compute_book_value_today(3000, 0.20, 0.15, y / 10) for y in range(0, 51)]
    assert all(later <= earlier for earlier, later in zip(values, values[1:]))


def test_project_schedule_straight_line_until_floor():
    schedule = project_schedule(2000, 0.20, 0.10)
    assert [y.year_number for y in schedule] == [1, 2, 3, 4, 5]
    assert [y.depreciation_year for y in schedule] == [400, 400, 400, 400, 200]
    assert [y.book_value_end_year for y in schedule] == [1600, 1200, 800, 400, 200]


def test_project_schedule_stops_at_floor():
    schedule = project_schedule(1000, 0.25, 0.10)
    assert [y.depreciation_year for y in schedule] == [250, 250, 250, 150, 0]
    assert schedule[-1].book_value_end_year == 100


def test_project_schedule_without_rate():
    schedule = project_schedule(999.5, None, None)
    assert len(schedule) == HORIZON_YEARS
    assert all(y.depreciation_year == 0 for y in schedule)
    assert all(y.book_value_end_year == 999.5 for y in schedule)


def test_project_schedule_without_cost():
    schedule = project_schedule(None, 0.20, 0.10)
    assert all(y.depreciation_year == 0 and y.book_value_end_year == 0 for y in schedule)


def test_project_schedule_rounds_to_cents():
    schedule = project_schedule(1234.56, 0.2, 0.1)
    assert schedule[0].depreciation_year == 246.91
