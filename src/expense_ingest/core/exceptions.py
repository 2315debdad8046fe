"""Custom exception classes for statement import.

This module defines a hierarchy of exceptions used throughout the
import pipeline. Each exception maps to a specific error code
defined in errors.py.
"""

from typing import Any

from expense_ingest.core.errors import get_error


class ExpenseIngestError(Exception):
    """Base exception for all statement import errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CSV_001")
        details: Additional context about the error (for logging)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        message: str | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context
            message: Override for the catalog's technical message
        """
        self.error_code = error_code
        self.details = details or {}
        self.message = message or get_error(error_code)["message"]
        super().__init__(self.message)


class ParsingError(ExpenseIngestError):
    """Raised when a statement file cannot be parsed."""

    pass


class MalformedInputError(ParsingError):
    """Raised when the CSV structure is unusable.

    Common causes:
    - Fewer than two rows (CSV_001)
    - Required header columns missing (CSV_002)

    Attributes:
        missing_columns: Required columns absent from the header, in
            the order they are required
    """

    def __init__(
        self,
        error_code: str,
        missing_columns: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.missing_columns = list(missing_columns or [])
        message = None
        if self.missing_columns:
            message = f"Missing required columns: {', '.join(self.missing_columns)}"
        super().__init__(error_code, details=details, message=message)


class ExpenseImportError(ExpenseIngestError):
    """Raised when an import cannot complete."""

    pass


class NoExpensesFoundError(ExpenseImportError):
    """Raised when a well-formed file yields no importable expenses (IMPORT_001)."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("IMPORT_001", details=details)
