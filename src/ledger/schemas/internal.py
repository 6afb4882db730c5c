"""Internal data schemas for parsed statement text.

These models represent the intermediate structure produced by the import
parser, before categorization and persistence.
"""

from datetime import date as Date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class ParsedEntry(BaseModel):
    """A single line recognised in imported statement text."""

    description: str = Field(..., description="Free-text description between the separators")
    amount: Decimal = Field(..., description="Amount in canonical decimal notation")
    date: Date = Field(..., description="Calendar date of the movement")

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        """Ensure description is not empty."""
        if not v or not v.strip():
            raise ValueError("Description cannot be empty")
        return v.strip()
