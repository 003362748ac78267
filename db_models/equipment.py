# db_models/equipment.py
"""
Equipment inventory tables.

- equipment: one row per physical unit, keyed by serial number
- depreciation_rates: straight-line rate and residual floor per model class
- equipment_depreciation_years: precomputed per-year amounts (years 1..5)
"""
from datetime import date, datetime
from enum import Enum

from sqlalchemy import (
    String,
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    Numeric,
    ForeignKey,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class EquipmentModel(str, Enum):
    """Closed set of laptop model classes."""
    MAC_PRO = "mac_pro"
    MAC_AIR = "mac_air"
    LENOVO = "lenovo"


class Company(str, Enum):
    """Owning company."""
    HBL = "HBL"
    AJA = "AJA"


DEFAULT_COMPANY = Company.AJA

MODEL_LABELS: dict[EquipmentModel, str] = {
    EquipmentModel.MAC_AIR: "Mac Air",
    EquipmentModel.MAC_PRO: "Mac Pro",
    EquipmentModel.LENOVO: "Lenovo",
}

MODEL_COLORS: dict[EquipmentModel, str] = {
    EquipmentModel.MAC_AIR: "#3B82F6",
    EquipmentModel.MAC_PRO: "#10B981",
    EquipmentModel.LENOVO: "#F59E0B",
}


def label_for_model(model: str) -> str:
    """Human label for a model value; unknown values are returned as-is."""
    try:
        return MODEL_LABELS[EquipmentModel(model)]
    except ValueError:
        return model


class Equipment(Base):
    __tablename__ = "equipment"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    serial_number: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )

    model: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    company: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=DEFAULT_COMPANY.value,
    )

    assigned_to: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    insured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    purchase_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    purchase_cost: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=True,
    )

    # Invoice reference (public URL or storage path of the PDF)
    file_url: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=func.now(),
    )

    depreciation_years: Mapped[list["EquipmentDepreciationYear"]] = relationship(
        "EquipmentDepreciationYear",
        back_populates="equipment",
        cascade="all, delete-orphan",
        order_by="EquipmentDepreciationYear.year_number",
    )


class DepreciationRate(Base):
    __tablename__ = "depreciation_rates"

    model: Mapped[str] = mapped_column(String(20), primary_key=True)

    # Annual straight-line rate, e.g. 0.20 for 20%
    rate: Mapped[float] = mapped_column(Float, nullable=False)

    # Floor as a fraction of purchase cost
    residual_pct: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
    )


class EquipmentDepreciationYear(Base):
    __tablename__ = "equipment_depreciation_years"
    __table_args__ = (
        UniqueConstraint("serial_number", "year_number", name="uq_equipment_year"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    serial_number: Mapped[str] = mapped_column(
        ForeignKey("equipment.serial_number", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    year_number: Mapped[int] = mapped_column(Integer, nullable=False)

    depreciation_year: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        default=0,
    )

    book_value_end_year: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        default=0,
    )

    equipment: Mapped["Equipment"] = relationship(
        "Equipment",
        back_populates="depreciation_years",
    )
