# api/tasks/models.py
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from db_models.pending_task import Importance


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_date: date | None = None
    due_date: date | None = None
    importance: Importance = Importance.MEDIA

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _blank_date_to_none(cls, value):
        return None if value == "" else value

    @model_validator(mode="after")
    def _check_dates(self) -> "TaskCreate":
        if self.start_date and self.due_date and self.due_date < self.start_date:
            raise ValueError("due_date cannot be before start_date")
        return self


class TaskCompletedUpdate(BaseModel):
    completed: bool


class TaskImportanceUpdate(BaseModel):
    importance: Importance


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    board: str
    title: str
    description: str | None = None
    start_date: date | None = None
    due_date: date | None = None
    importance: Importance
    completed: bool
    created_at: datetime


class TaskBoardResponse(BaseModel):
    board: str
    tasks: list[TaskRead]
    completed_count: int
    total_count: int
