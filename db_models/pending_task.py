# db_models/pending_task.py
from datetime import date, datetime
from enum import Enum

from sqlalchemy import String, Boolean, Date, DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class PendingBoard(str, Enum):
    """Fixed set of task boards, one per team member."""
    JOHAN = "johan"
    DANI = "dani"
    PACO = "paco"


class Importance(str, Enum):
    """Ordered importance levels: baja < media < alta < critica."""
    BAJA = "baja"
    MEDIA = "media"
    ALTA = "alta"
    CRITICA = "critica"


class PendingTask(Base):
    __tablename__ = "pending_tasks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    board: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    importance: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=Importance.MEDIA.value,
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
