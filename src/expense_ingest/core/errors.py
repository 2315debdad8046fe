"""Error codes and user-friendly messages.

This module defines the error catalog for statement import.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

from dataclasses import dataclass


@dataclass
class ErrorDefinition:
    """Definition of a single error type."""

    code: str
    message: str
    user_message: str
    suggestion: str
    retry_allowed: bool


# Error catalog for statement import
ERROR_CATALOG: dict[str, dict] = {
    "CSV_001": {
        "code": "CSV_001",
        "message": "CSV file must have at least a header row and one data row",
        "user_message": "This file doesn't contain any transactions.",
        "suggestion": "Export the statement again and make sure it includes at least one transaction.",
        "retry_allowed": False,
    },
    "CSV_002": {
        "code": "CSV_002",
        "message": "Missing required columns",
        "user_message": "This file is missing columns we need to import expenses.",
        "suggestion": "Upload the unmodified CSV export from your bank (Type, Description, Amount, Completed Date).",
        "retry_allowed": False,
    },
    "IMPORT_001": {
        "code": "IMPORT_001",
        "message": "No expenses found in CSV file",
        "user_message": "We couldn't find any expenses in this file.",
        "suggestion": "Check that the Amount column contains numbers.",
        "retry_allowed": False,
    },
    "IMPORT_002": {
        "code": "IMPORT_002",
        "message": "Expense persistence failed",
        "user_message": "Some expenses could not be saved.",
        "suggestion": "Please try again. Rows that were already saved will not be lost.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_error_definition(error_code: str) -> ErrorDefinition:
    """Get error definition by code as a typed object."""
    return ErrorDefinition(**get_error(error_code))

