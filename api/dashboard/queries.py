# api/dashboard/queries.py
"""
SQLAlchemy query builders for dashboard statistics.
"""
from datetime import date

from sqlalchemy import select, func

from db_models.equipment import Equipment


def select_purchases(company: str | None = None, since: date | None = None):
    """Purchase date and cost of every priced, dated asset, oldest first."""
    stmt = select(Equipment.purchase_date, Equipment.purchase_cost).where(
        Equipment.purchase_date.is_not(None),
        Equipment.purchase_cost.is_not(None),
    )
    if company is not None:
        stmt = stmt.where(Equipment.company == company)
    if since is not None:
        stmt = stmt.where(Equipment.purchase_date >= since)
    return stmt.order_by(Equipment.purchase_date.asc())


def count_equipment_by_model(company: str | None = None):
    stmt = select(Equipment.model, func.count(Equipment.id).label("qty"))
    if company is not None:
        stmt = stmt.where(Equipment.company == company)
    return stmt.group_by(Equipment.model)
