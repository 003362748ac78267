import csv
import io
from datetime import date

from api.equipment.export import (
    CSV_COLUMNS,
    export_filename,
    format_rate,
    render_equipment_csv,
)
from core.depreciation import EquipmentRecord


def _record(serial, **overrides):
    values = dict(
        serial_number=serial,
        model="mac_air",
        company="HBL",
        assigned_to="Ana Lopez",
        insured=True,
        purchase_date=date(2023, 3, 1),
        purchase_cost=1299.0,
        file_url=None,
        created_at=None,
        updated_at=None,
        rate=0.2,
        residual_pct=0.1,
        book_value_today=845.123,
        years_exact=1.74,
        years_elapsed=1,
        depreciation_y1=259.8,
        depreciation_y2=259.8,
        depreciation_y3=259.8,
        depreciation_y4=259.8,
        depreciation_y5=129.9,
    )
    values.update(overrides)
    return EquipmentRecord(**values)


def _parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_header_and_one_row_per_record():
    records = [_record("A-1"), _record("B-2"), _record("C-3")]
    rows = _parse(render_equipment_csv(records))
    assert rows[0] == CSV_COLUMNS
    assert len(rows) == len(records) + 1


def test_money_fields_have_two_decimals():
    row = dict(zip(CSV_COLUMNS, _parse(render_equipment_csv([_record("A-1")]))[1]))
    assert row["purchase_cost"] == "1299.00"
    assert row["depreciation_y1"] == "259.80"
    assert row["depreciation_y5"] == "129.90"
    assert row["book_value_today"] == "845.12"


def test_row_uses_labels_and_percent_rate():
    row = dict(zip(CSV_COLUMNS, _parse(render_equipment_csv([_record("A-1")]))[1]))
    assert row["model"] == "Mac Air"
    assert row["dep_anual_pct"] == "20%"
    assert row["insured"] == "true"
    assert row["purchase_date"] == "2023-03-01"


def test_empty_optional_fields():
    record = _record("A-1", assigned_to=None, purchase_cost=None, rate=None)
    row = dict(zip(CSV_COLUMNS, _parse(render_equipment_csv([record]))[1]))
    assert row["assigned_to"] == ""
    assert row["purchase_cost"] == ""
    assert row["dep_anual_pct"] == "0%"
    assert row["file_url"] == ""


def test_values_with_commas_are_quoted():
    record = _record("A-1", assigned_to="Lopez, Ana")
    row = dict(zip(CSV_COLUMNS, _parse(render_equipment_csv([record]))[1]))
    assert row["assigned_to"] == "Lopez, Ana"


def test_format_rate_rounds_to_whole_percent():
    assert format_rate(0.25) == "25%"
    assert format_rate(0.2) == "20%"
    assert format_rate(None) == "0%"


def test_export_filename():
    assert export_filename(date(2025, 2, 3)) == "equipment_depreciation_2025-02-03.csv"
