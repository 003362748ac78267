# api/equipment/export.py
"""
CSV rendering of the equipment view. Pure formatting: every figure is
taken from the already-computed records.
"""
import csv
import io
from collections.abc import Iterable
from datetime import date

from core.depreciation import EquipmentRecord
from db_models.equipment import label_for_model

CSV_COLUMNS = [
    "serial_number",
    "model",
    "company",
    "assigned_to",
    "insured",
    "purchase_date",
    "purchase_cost",
    "dep_anual_pct",
    "depreciation_y1",
    "depreciation_y2",
    "depreciation_y3",
    "depreciation_y4",
    "depreciation_y5",
    "book_value_today",
    "file_url",
]


def format_money(value: float | None) -> str:
    return f"{value:.2f}" if value is not None else ""


def format_rate(rate: float | None) -> str:
    return f"{(rate or 0) * 100:.0f}%"


def equipment_csv_row(record: EquipmentRecord) -> list[str]:
    return [
        record.serial_number,
        label_for_model(record.model),
        record.company or "",
        record.assigned_to or "",
        "true" if record.insured else "false",
        record.purchase_date.isoformat() if record.purchase_date else "",
        format_money(record.purchase_cost),
        format_rate(record.rate),
        format_money(record.depreciation_y1 or 0),
        format_money(record.depreciation_y2 or 0),
        format_money(record.depreciation_y3 or 0),
        format_money(record.depreciation_y4 or 0),
        format_money(record.depreciation_y5 or 0),
        format_money(record.book_value_today or 0),
        record.file_url or "",
    ]


def render_equipment_csv(records: Iterable[EquipmentRecord]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(equipment_csv_row(record))
    return buf.getvalue()


def export_filename(day: date) -> str:
    return f"equipment_depreciation_{day.isoformat()}.csv"
