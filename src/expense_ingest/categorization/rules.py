"""Rule-based expense categorization.

Users define rules that map a vendor substring, a description substring or
an amount range onto a category. Rules are evaluated in the order given and
the first match wins, so callers pass them sorted by priority (highest
first); ``order_rules`` does that once per batch.

Amount range patterns:
- ``">1000"``: amount strictly greater than 1000
- ``"<5"``: amount strictly less than 5
- ``"10-50"``: 10 <= amount <= 50

Matching never raises. Malformed patterns and unknown pattern types simply
don't match.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation
from typing import Protocol

from expense_ingest.parsers.normalize import parse_number
from expense_ingest.schemas.rules import CategorizationRule, PatternType, RuleMatch

logger = logging.getLogger(__name__)


class ExpenseLike(Protocol):
    vendor: str | None
    description: str | None
    amount: Decimal | float | None


def _contains(haystack: str | None, needle: str) -> bool:
    if not haystack:
        return False
    return needle.lower() in haystack.lower()


def _matches_amount_range(amount: Decimal | float | None, pattern: str) -> bool:
    # Zero is a real amount; only None means "unknown".
    if amount is None:
        return False
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return False
    if not value.is_finite():
        return False
    range_text = pattern.strip()

    if range_text.startswith(">"):
        minimum = parse_number(range_text[1:])
        return minimum is not None and value > minimum

    if range_text.startswith("<"):
        maximum = parse_number(range_text[1:])
        return maximum is not None and value < maximum

    if "-" in range_text:
        parts = range_text.split("-")
        if len(parts) != 2:
            logger.debug(f"Ignoring malformed amount range: {pattern!r}")
            return False
        minimum = parse_number(parts[0])
        maximum = parse_number(parts[1])
        if minimum is None or maximum is None:
            logger.debug(f"Ignoring malformed amount range: {pattern!r}")
            return False
        return minimum <= value <= maximum

    return False


def matches_rule(expense: ExpenseLike, rule: CategorizationRule) -> bool:
    """Check whether a single rule matches an expense.

    Args:
        expense: Object with ``vendor``, ``description`` and ``amount``
        rule: Rule to evaluate

    Returns:
        True if the rule is active and its pattern matches
    """
    if not rule.active:
        return False

    if rule.pattern_type == PatternType.VENDOR.value:
        return _contains(expense.vendor, rule.pattern_value)

    if rule.pattern_type == PatternType.DESCRIPTION.value:
        return _contains(expense.description, rule.pattern_value)

    if rule.pattern_type == PatternType.AMOUNT_RANGE.value:
        return _matches_amount_range(expense.amount, rule.pattern_value)

    return False


def categorize(expense: ExpenseLike, rules: Iterable[CategorizationRule]) -> str | None:
    """Return the category of the first matching rule.

    Rules are not sorted here; pass them highest priority first.

    Args:
        expense: Object with ``vendor``, ``description`` and ``amount``
        rules: Rules in evaluation order

    Returns:
        Category string, or None if no rule matches
    """
    for rule in rules:
        if matches_rule(expense, rule):
            return rule.category
    return None


def preview_rules(
    expense: ExpenseLike, rules: Iterable[CategorizationRule]
) -> list[RuleMatch]:
    """Evaluate every rule against an expense, without short-circuiting.

    Useful for previewing which rules would fire for a given expense.
    """
    return [RuleMatch(rule=rule, matches=matches_rule(expense, rule)) for rule in rules]


def order_rules(rules: Sequence[CategorizationRule]) -> list[CategorizationRule]:
    """Active rules sorted by priority, highest first (ties keep input order)."""
    return sorted(
        (rule for rule in rules if rule.active),
        key=lambda rule: rule.priority,
        reverse=True,
    )
