# db_models/insured_computer.py
from datetime import date, datetime

from sqlalchemy import String, Date, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class InsuredComputer(Base):
    __tablename__ = "insured_computers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    serial_number: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )

    policy_number: Mapped[str] = mapped_column(String(100), nullable=False)

    person_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Manufacturer warranty program (AppleCare), optional
    warranty_expiry: Mapped[date | None] = mapped_column(Date, nullable=True)

    policy_expiry: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
