# api/insured/models.py
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

EXPIRING_WINDOW_DAYS = 30


class ExpiryStatus(str, Enum):
    EXPIRED = "expired"
    EXPIRING = "expiring"
    VALID = "valid"


def classify_expiry(expiry: date | None, today: date) -> ExpiryStatus | None:
    """Expired before today, expiring within 30 days (today included), else valid."""
    if expiry is None:
        return None
    days_left = (expiry - today).days
    if days_left < 0:
        return ExpiryStatus.EXPIRED
    if days_left <= EXPIRING_WINDOW_DAYS:
        return ExpiryStatus.EXPIRING
    return ExpiryStatus.VALID


class InsuredComputerCreate(BaseModel):
    serial_number: str = Field(..., min_length=1, max_length=100)
    policy_number: str = Field(..., min_length=1, max_length=100)
    person_name: str = Field(..., min_length=1, max_length=255)
    warranty_expiry: date | None = None
    policy_expiry: date

    @field_validator("serial_number", "policy_number", "person_name")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("field is required")
        return value

    @field_validator("warranty_expiry", mode="before")
    @classmethod
    def _blank_date_to_none(cls, value):
        return None if value == "" else value


class InsuredComputerUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""
    policy_number: str | None = Field(None, min_length=1, max_length=100)
    person_name: str | None = Field(None, min_length=1, max_length=255)
    warranty_expiry: date | None = None
    policy_expiry: date | None = None

    @field_validator("policy_number", "person_name", "policy_expiry")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    @field_validator("warranty_expiry", mode="before")
    @classmethod
    def _blank_date_to_none(cls, value):
        return None if value == "" else value


class InsuredComputerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    serial_number: str
    policy_number: str
    person_name: str
    warranty_expiry: date | None = None
    policy_expiry: date
    created_at: datetime

    @computed_field
    @property
    def warranty_status(self) -> ExpiryStatus | None:
        return classify_expiry(self.warranty_expiry, date.today())

    @computed_field
    @property
    def policy_status(self) -> ExpiryStatus:
        return classify_expiry(self.policy_expiry, date.today())


class InsuredComputerListResponse(BaseModel):
    computers: list[InsuredComputerRead]
    total_count: int
    with_warranty_count: int
