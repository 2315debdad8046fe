from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from expense_ingest.categorization.rules import (
    categorize,
    matches_rule,
    order_rules,
    preview_rules,
)
from expense_ingest.schemas.expense import ExpenseData, NormalizedExpense


def test_categorize_priority_short_circuit(make_rule) -> None:
    travel = make_rule("vendor", "uber", "Travel", priority=10)
    meals = make_rule("description", "uber", "Meals", priority=5)
    expense = ExpenseData(vendor="UBER EATS", description="Uber Eats order", amount=Decimal("20"))

    assert categorize(expense, [travel, meals]) == "Travel"


def test_categorize_uses_given_order_not_priority(make_rule) -> None:
    low = make_rule("vendor", "uber", "Low", priority=1)
    high = make_rule("vendor", "uber", "High", priority=100)

    assert categorize(ExpenseData(vendor="Uber"), [low, high]) == "Low"


def test_vendor_substring_case_insensitive(make_rule) -> None:
    rule = make_rule("vendor", "starbucks", "Meals")

    assert categorize(ExpenseData(vendor="STARBUCKS #4521"), [rule]) == "Meals"


def test_vendor_rule_pattern_case_insensitive(make_rule) -> None:
    rule = make_rule("vendor", "StarBucks", "Meals")

    assert matches_rule(ExpenseData(vendor="starbucks reserve"), rule)


def test_vendor_rule_requires_vendor(make_rule) -> None:
    rule = make_rule("vendor", "starbucks", "Meals")

    assert not matches_rule(ExpenseData(description="starbucks"), rule)
    assert not matches_rule(ExpenseData(vendor=""), rule)


def test_description_rule(make_rule) -> None:
    rule = make_rule("description", "subscription", "Software")

    assert matches_rule(ExpenseData(description="Annual SUBSCRIPTION fee"), rule)
    assert not matches_rule(ExpenseData(vendor="subscription"), rule)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [("10", True), ("50", True), ("25.5", True), ("9.99", False), ("50.01", False)],
)
def test_amount_range_inclusive_bounds(make_rule, amount, expected) -> None:
    rule = make_rule("amount_range", "10-50", "Mid")

    assert matches_rule(ExpenseData(amount=Decimal(amount)), rule) is expected


def test_amount_range_with_spaces(make_rule) -> None:
    rule = make_rule("amount_range", " 10 - 50 ", "Mid")

    assert matches_rule(ExpenseData(amount=Decimal("30")), rule)


def test_amount_greater_than_exclusive(make_rule) -> None:
    rule = make_rule("amount_range", ">1000", "Big")

    assert not matches_rule(ExpenseData(amount=Decimal("1000")), rule)
    assert matches_rule(ExpenseData(amount=Decimal("1000.01")), rule)


def test_amount_less_than_exclusive(make_rule) -> None:
    rule = make_rule("amount_range", "<5", "Small")

    assert matches_rule(ExpenseData(amount=Decimal("4.99")), rule)
    assert not matches_rule(ExpenseData(amount=Decimal("5")), rule)


def test_amount_range_accepts_float_amount(make_rule) -> None:
    rule = make_rule("amount_range", "10-50", "Mid")

    assert matches_rule(ExpenseData.model_construct(vendor=None, description=None, amount=10.0), rule)


@pytest.mark.parametrize("pattern", ["10-50", ">1", "<100"])
def test_amount_range_nan_amount_never_matches(make_rule, pattern) -> None:
    rule = make_rule("amount_range", pattern, "Odd")
    expense = SimpleNamespace(vendor=None, description=None, amount=float("nan"))

    assert not matches_rule(expense, rule)
    assert categorize(expense, [rule]) is None


def test_amount_range_infinite_amount_never_matches(make_rule) -> None:
    expense = SimpleNamespace(vendor=None, description=None, amount=float("inf"))

    assert not matches_rule(expense, make_rule("amount_range", ">1000", "Big"))


def test_amount_range_missing_amount(make_rule) -> None:
    rule = make_rule("amount_range", "<5", "Small")

    assert not matches_rule(ExpenseData(), rule)


def test_zero_amount_is_present(make_rule) -> None:
    rule = make_rule("amount_range", "0-0", "Free")

    assert matches_rule(ExpenseData(amount=Decimal("0")), rule)
    assert matches_rule(ExpenseData(amount=Decimal("0")), make_rule("amount_range", "<1", "Tiny"))


def test_amount_range_multiple_dashes_never_matches(make_rule) -> None:
    rule = make_rule("amount_range", "10-20-30", "Odd")

    assert not matches_rule(ExpenseData(amount=Decimal("15")), rule)


@pytest.mark.parametrize("pattern", ["abc", "10-", "-", "a-b", ">", "<x", "50"])
def test_amount_range_malformed_never_matches(make_rule, pattern) -> None:
    rule = make_rule("amount_range", pattern, "Odd")

    assert not matches_rule(ExpenseData(amount=Decimal("15")), rule)


def test_amount_range_bound_with_trailing_text(make_rule) -> None:
    rule = make_rule("amount_range", ">100 EUR", "Big")

    assert matches_rule(ExpenseData(amount=Decimal("150")), rule)


def test_amount_range_camel_case_pattern_type(make_rule) -> None:
    rule = make_rule("amountRange", "10-50", "Mid")

    assert rule.pattern_type == "amount_range"
    assert matches_rule(ExpenseData(amount=Decimal("20")), rule)


def test_inactive_rule_never_matches(make_rule) -> None:
    rule = make_rule("vendor", "starbucks", "Meals", active=False)

    assert not matches_rule(ExpenseData(vendor="Starbucks"), rule)
    assert categorize(ExpenseData(vendor="Starbucks"), [rule]) is None


def test_inactive_rule_skipped_in_favour_of_next(make_rule) -> None:
    inactive = make_rule("vendor", "starbucks", "Meals", priority=10, active=False)
    fallback = make_rule("vendor", "star", "Coffee", priority=1)

    assert categorize(ExpenseData(vendor="Starbucks"), [inactive, fallback]) == "Coffee"


def test_unknown_pattern_type_never_matches(make_rule) -> None:
    rule = make_rule("merchant_code", "5812", "Meals")

    assert not matches_rule(ExpenseData(vendor="5812", description="5812", amount=Decimal("5812")), rule)


def test_no_rules_returns_none() -> None:
    assert categorize(ExpenseData(vendor="Anything"), []) is None


def test_no_matching_rule_returns_none(make_rule) -> None:
    rules = [make_rule("vendor", "tesco", "Groceries"), make_rule("amount_range", ">1000", "Big")]

    assert categorize(ExpenseData(vendor="Starbucks", amount=Decimal("4")), rules) is None


def test_categorize_normalized_expense(make_rule) -> None:
    expense = NormalizedExpense(
        vendor="Starbucks",
        description="Starbucks",
        amount=Decimal("4.50"),
        date=date(2024, 3, 1),
    )

    assert categorize(expense, [make_rule("vendor", "starbucks", "Meals")]) == "Meals"


def test_preview_rules_evaluates_every_rule(make_rule) -> None:
    rules = [
        make_rule("vendor", "uber", "Travel", priority=10),
        make_rule("vendor", "tesco", "Groceries", priority=8),
        make_rule("description", "eats", "Meals", priority=5),
        make_rule("vendor", "uber", "Inactive", active=False),
    ]
    expense = ExpenseData(vendor="Uber", description="Uber Eats")

    preview = preview_rules(expense, rules)

    assert [entry.rule.category for entry in preview] == ["Travel", "Groceries", "Meals", "Inactive"]
    assert [entry.matches for entry in preview] == [True, False, True, False]


def test_preview_rules_empty() -> None:
    assert preview_rules(ExpenseData(), []) == []


def test_order_rules_active_by_priority_desc(make_rule) -> None:
    a = make_rule("vendor", "a", "A", priority=1)
    b = make_rule("vendor", "b", "B", priority=10)
    c = make_rule("vendor", "c", "C", priority=5, active=False)
    d = make_rule("vendor", "d", "D", priority=10)

    assert [rule.category for rule in order_rules([a, b, c, d])] == ["B", "D", "A"]
