# db_models/it_checklist.py
"""
Onboarding checklist, one row per employee.

mandatory_ok is maintained by the backend on every write and is true iff
every check in MANDATORY_CHECKS is true.
"""
from datetime import date, datetime

from sqlalchemy import String, Boolean, Date, DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


MANDATORY_CHECKS: tuple[str, ...] = (
    "antivirus",
    "backup",
    "onepassword",
    "slack",
    "monday",
)

OPTIONAL_CHECKS: tuple[str, ...] = (
    "adobe",
    "office",
    "acrobat",
    "billboard",
    "rost",
    "canva_pro",
    "jumpcloud",
)

# Presence of this tool outranks everything else when classifying a row
SPECIAL_ACCESS_CHECK = "jumpcloud"


def _check_column() -> Mapped[bool]:
    return mapped_column(Boolean, nullable=False, default=False)


class ITChecklist(Base):
    __tablename__ = "it_checklist"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    person_name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )

    onboarding_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Mandatory checks
    antivirus: Mapped[bool] = _check_column()
    backup: Mapped[bool] = _check_column()
    onepassword: Mapped[bool] = _check_column()
    slack: Mapped[bool] = _check_column()
    monday: Mapped[bool] = _check_column()

    # Extras
    adobe: Mapped[bool] = _check_column()
    office: Mapped[bool] = _check_column()
    acrobat: Mapped[bool] = _check_column()
    billboard: Mapped[bool] = _check_column()
    rost: Mapped[bool] = _check_column()
    canva_pro: Mapped[bool] = _check_column()
    jumpcloud: Mapped[bool] = _check_column()

    mandatory_ok: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    def refresh_mandatory_ok(self) -> None:
        self.mandatory_ok = all(bool(getattr(self, name)) for name in MANDATORY_CHECKS)
