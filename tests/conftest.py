import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).parents[1] / "src"))

from expense_ingest.schemas.rules import CategorizationRule

HEADER = "Type,Product,Started Date,Completed Date,Description,Amount,Fee,Currency,State,Balance"


def make_csv(*rows: str, header: str = HEADER, newline: str = "\n") -> str:
    """Build statement CSV text from a header and raw data rows."""
    return newline.join([header, *rows]) + newline


@pytest.fixture
def build_csv():
    """Expose make_csv to tests."""
    return make_csv


@pytest.fixture
def sample_csv() -> str:
    """A small, well-formed statement export."""
    return make_csv(
        "CARD_PAYMENT,Current,2024-03-01 09:15:02,2024-03-02 10:00:00,Starbucks,-4.50,0.00,EUR,COMPLETED,995.50",
        "CARD_PAYMENT,Current,2024-03-03 12:00:00,2024-03-03 12:01:00,Uber *Trip,-23.10,0.00,EUR,COMPLETED,972.40",
        'TRANSFER,Current,2024-03-04 08:00:00,2024-03-04 08:00:05,"Smith, John ""the man""",-100.00,0.00,EUR,COMPLETED,872.40',
    )


@pytest.fixture
def make_rule():
    """Factory for categorization rules with sensible defaults."""

    def _make_rule(
        pattern_type: str,
        pattern_value: str,
        category: str,
        priority: int = 0,
        active: bool = True,
        rule_id: str | None = None,
    ) -> CategorizationRule:
        return CategorizationRule(
            id=rule_id or f"{pattern_type}:{pattern_value}",
            name=f"{category} rule",
            pattern_type=pattern_type,
            pattern_value=pattern_value,
            category=category,
            priority=priority,
            active=active,
        )

    return _make_rule
