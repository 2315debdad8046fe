"""Categorization rule schemas."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class PatternType(str, Enum):
    """Supported rule pattern types."""

    VENDOR = "vendor"
    DESCRIPTION = "description"
    AMOUNT_RANGE = "amount_range"


# Spellings accepted for pattern types that are stored differently elsewhere.
_PATTERN_TYPE_ALIASES: dict[str, str] = {
    "amountRange": PatternType.AMOUNT_RANGE.value,
}


class CategorizationRule(BaseModel):
    """A user-defined rule mapping a pattern to a category.

    ``pattern_type`` is kept as plain text: values outside PatternType are
    accepted and simply never match.
    """

    id: str = Field(..., description="Rule identifier")
    name: str = Field(..., description="Human-readable label")
    pattern_type: str = Field(..., description="vendor, description or amount_range")
    pattern_value: str = Field(..., description="Substring, or range like '10-50', '>1000', '<5'")
    category: str = Field(..., description="Category assigned on match")
    priority: int = Field(default=0, description="Higher values are evaluated first")
    active: bool = Field(default=True, description="Inactive rules never match")

    @field_validator("pattern_type")
    @classmethod
    def normalize_pattern_type(cls, v: str) -> str:
        return _PATTERN_TYPE_ALIASES.get(v, v)

    @field_validator("pattern_value")
    @classmethod
    def pattern_value_not_empty(cls, v: str) -> str:
        """Ensure pattern value is not empty."""
        if not v or not v.strip():
            raise ValueError("Pattern value is required")
        return v


class RuleMatch(BaseModel):
    """Outcome of evaluating one rule against an expense (rule preview)."""

    rule: CategorizationRule
    matches: bool
