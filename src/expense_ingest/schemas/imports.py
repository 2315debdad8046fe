"""Schemas describing the outcome of an expense import."""

from pydantic import BaseModel, Field

from expense_ingest.schemas.expense import SkippedRow


class ImportRowError(BaseModel):
    """A single row that could not be imported."""

    line_number: int = Field(..., description="1-based line of the row in the source file")
    error_code: str = Field(..., description="Code from the error catalog")
    error: str = Field(..., description="Error message")


class ExpenseImportResult(BaseModel):
    """Result of importing one statement file."""

    imported: int = Field(description="Expenses persisted successfully")
    total: int = Field(description="Expenses parsed from the file")
    categorized: int = Field(default=0, description="Expenses that matched a rule")
    errors: list[ImportRowError] = Field(default_factory=list)
    skipped_rows: list[SkippedRow] = Field(
        default_factory=list,
        description="Rows dropped during parsing (e.g. unparseable amount)",
    )

    @property
    def failed(self) -> int:
        return len(self.errors)
