"""Transaction request/response schemas."""

from datetime import date as Date, datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ledger.models.transaction import TransactionType


def normalize_date(value: Any) -> Any:
    """Coerce a date-ish value to an aware UTC timestamp.

    Calendar dates become 00:00:00 UTC of that day; naive datetimes are
    taken to be UTC. Values of any other type are returned unchanged so
    pydantic can report them.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, Date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return value


class TransactionCreate(BaseModel):
    """Request to create a transaction. Every field is required."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., max_digits=14, decimal_places=2)
    type: TransactionType
    category: str = Field(..., min_length=1, max_length=100)
    date: datetime

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v: Any) -> Any:
        return normalize_date(v)


class TransactionUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=255)
    amount: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    type: TransactionType | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    date: datetime | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v: Any) -> Any:
        return normalize_date(v)

    def changes(self) -> dict[str, Any]:
        """Fields the caller supplied with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TransactionResponse(BaseModel):
    """Transaction as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    amount: Decimal
    type: TransactionType
    category: str
    date: datetime
    created_at: datetime
    updated_at: datetime


class ImportRequest(BaseModel):
    """Raw statement text to import."""

    text_content: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("text_content", "textContent"),
        description="One transaction per line: DD/MM/YYYY - Description - R$ 1.234,56",
    )


class ImportResult(BaseModel):
    """Outcome of a bulk import."""

    message: str
    created_count: int = Field(description="Number of transactions actually created")
