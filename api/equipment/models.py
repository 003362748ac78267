# api/equipment/models.py
"""
Pydantic models for equipment inventory endpoints.
"""
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)

from db_models.equipment import EquipmentModel, Company, label_for_model


class EditableField(str, Enum):
    """Columns that may be changed through an inline edit."""
    MODEL = "model"
    COMPANY = "company"
    ASSIGNED_TO = "assigned_to"
    INSURED = "insured"
    PURCHASE_DATE = "purchase_date"
    PURCHASE_COST = "purchase_cost"
    FILE_URL = "file_url"


NonNegativeMoney = Annotated[float, Field(ge=0)]

# One validator per editable field; book value and depreciation are never editable
FIELD_VALUE_ADAPTERS: dict[EditableField, TypeAdapter] = {
    EditableField.MODEL: TypeAdapter(EquipmentModel),
    EditableField.COMPANY: TypeAdapter(Company),
    EditableField.ASSIGNED_TO: TypeAdapter(str | None),
    EditableField.INSURED: TypeAdapter(bool),
    EditableField.PURCHASE_DATE: TypeAdapter(date | None),
    EditableField.PURCHASE_COST: TypeAdapter(NonNegativeMoney | None),
    EditableField.FILE_URL: TypeAdapter(str | None),
}

# Blank input clears these fields instead of failing validation
NULLABLE_FIELDS = frozenset({
    EditableField.ASSIGNED_TO,
    EditableField.PURCHASE_DATE,
    EditableField.PURCHASE_COST,
    EditableField.FILE_URL,
})


def coerce_field_value(field: EditableField, value: Any) -> Any:
    """
    Validate `value` for `field` and return it in storage form.

    Raises:
        ValueError: If the value does not fit the field's type
    """
    if isinstance(value, str):
        value = value.strip()
        if value == "" and field in NULLABLE_FIELDS:
            return None
    try:
        coerced = FIELD_VALUE_ADAPTERS[field].validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"Invalid value for {field.value}: {exc.errors()[0]['msg']}") from None
    if isinstance(coerced, Enum):
        return coerced.value
    return coerced


class EquipmentCreate(BaseModel):
    """New asset; serial/model/company/date/cost are mandatory."""
    serial_number: str = Field(..., min_length=1, max_length=100)
    model: EquipmentModel
    company: Company
    assigned_to: str | None = Field(None, max_length=255)
    insured: bool = False
    purchase_date: date
    purchase_cost: NonNegativeMoney
    file_url: str | None = Field(None, max_length=1024)

    @field_validator("serial_number")
    @classmethod
    def _strip_serial(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("serial_number is required")
        return value

    @field_validator("assigned_to", "file_url")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class EquipmentFieldUpdate(BaseModel):
    """Inline edit of a single column."""
    field: EditableField
    value: Any = None

    @model_validator(mode="after")
    def _coerce_value(self) -> "EquipmentFieldUpdate":
        self.value = coerce_field_value(self.field, self.value)
        return self


class EquipmentRead(BaseModel):
    """Asset with live depreciation figures."""
    model_config = ConfigDict(from_attributes=True)

    serial_number: str
    model: str
    company: str
    assigned_to: str | None = None
    insured: bool
    purchase_date: date | None = None
    purchase_cost: float | None = None
    file_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    rate: float | None = None
    residual_pct: float | None = None
    book_value_today: float
    years_exact: float
    years_elapsed: int

    depreciation_y1: float
    depreciation_y2: float
    depreciation_y3: float
    depreciation_y4: float
    depreciation_y5: float

    @computed_field
    @property
    def label(self) -> str:
        return label_for_model(self.model)


class DepreciationRateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    model: str
    rate: float
    residual_pct: float
