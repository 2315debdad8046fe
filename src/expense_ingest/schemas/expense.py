"""Internal data schemas for parsed statement data.

These models represent expense records produced by the CSV parser
before categorization and persistence.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class ExpenseData(BaseModel):
    """Expense-like input for the categorizer.

    Every field is optional; a rule that needs a missing field never matches.
    """

    vendor: str | None = Field(None, description="Vendor / merchant text")
    description: str | None = Field(None, description="Free-text description")
    amount: Decimal | None = Field(None, description="Amount in major units (None = unknown)")


class NormalizedExpense(BaseModel):
    """A single expense extracted from a bank statement row.

    All rows are treated as expenses, so the amount is always the absolute
    value of the source amount.
    """

    vendor: str | None = Field(None, description="Vendor (same as description for bank exports)")
    description: str | None = Field(None, description="Trimmed description, None if empty")
    amount: Decimal = Field(..., description="Non-negative amount in major units")
    date: dt.date = Field(..., description="Expense date (UTC calendar day)")
    transaction_started_at: dt.datetime | None = Field(None, description="When the transaction started")
    transaction_completed_at: dt.datetime | None = Field(None, description="When the transaction completed")
    category: str | None = Field(None, description="Category (set by auto-categorization)")
    project_id: str | None = Field(None, description="Project association (set by the caller)")

    @field_validator("amount")
    @classmethod
    def amount_finite_non_negative(cls, v: Decimal) -> Decimal:
        """Ensure amount is a finite, non-negative number."""
        if not v.is_finite():
            raise ValueError("Amount must be finite")
        if v < 0:
            raise ValueError("Amount cannot be negative")
        return v


class SkippedRow(BaseModel):
    """Diagnostic for a data row that was dropped during parsing."""

    line_number: int = Field(..., description="1-based line where the row starts in the file")
    reason: str = Field(..., description="Why the row was dropped")
    raw_amount: str | None = Field(None, description="The Amount text that failed to parse")


class StatementParseResult(BaseModel):
    """Complete result of parsing one statement file.

    ``expenses`` and ``line_numbers`` are parallel lists; surviving rows keep
    their input order.
    """

    expenses: list[NormalizedExpense] = Field(default_factory=list)
    line_numbers: list[int] = Field(
        default_factory=list,
        description="Source line of each expense (parallel to expenses)",
    )
    skipped_rows: list[SkippedRow] = Field(default_factory=list)
    total_rows: int = Field(default=0, description="Non-blank data rows seen")

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_rows)
