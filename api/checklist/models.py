# api/checklist/models.py
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from db_models.it_checklist import SPECIAL_ACCESS_CHECK


class CheckName(str, Enum):
    """Every toggleable onboarding check."""
    ANTIVIRUS = "antivirus"
    BACKUP = "backup"
    ONEPASSWORD = "onepassword"
    SLACK = "slack"
    MONDAY = "monday"
    ADOBE = "adobe"
    OFFICE = "office"
    ACROBAT = "acrobat"
    BILLBOARD = "billboard"
    ROST = "rost"
    CANVA_PRO = "canva_pro"
    JUMPCLOUD = "jumpcloud"


class RowStatus(str, Enum):
    """Display classification, highest precedence first."""
    SPECIAL_ACCESS = "special_access"
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


def classify_row(has_special_access: bool, mandatory_ok: bool) -> RowStatus:
    if has_special_access:
        return RowStatus.SPECIAL_ACCESS
    if mandatory_ok:
        return RowStatus.COMPLETE
    return RowStatus.INCOMPLETE


class ChecklistCreate(BaseModel):
    person_name: str = Field(..., min_length=1, max_length=255)
    onboarding_date: date

    @field_validator("person_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("person_name is required")
        return value


class CheckUpdate(BaseModel):
    check: CheckName
    value: bool


class CommentsUpdate(BaseModel):
    comments: str | None = None


class ChecklistRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    person_name: str
    onboarding_date: date

    antivirus: bool
    backup: bool
    onepassword: bool
    slack: bool
    monday: bool

    adobe: bool
    office: bool
    acrobat: bool
    billboard: bool
    rost: bool
    canva_pro: bool
    jumpcloud: bool

    mandatory_ok: bool
    comments: str | None = None
    created_at: datetime

    @computed_field
    @property
    def row_status(self) -> RowStatus:
        return classify_row(bool(getattr(self, SPECIAL_ACCESS_CHECK)), self.mandatory_ok)


class ChecklistListResponse(BaseModel):
    entries: list[ChecklistRead]
    completed_count: int
    total_count: int
