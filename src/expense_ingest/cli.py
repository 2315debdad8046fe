"""Command-line entry point: parse and categorize a statement CSV.

Usage:
    expense-ingest statement.csv --rules rules.yaml

The rules file is a YAML list of rule mappings::

    - id: coffee
      name: Coffee shops
      pattern_type: vendor
      pattern_value: starbucks
      category: Meals
      priority: 10
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from expense_ingest.categorization.rules import categorize, order_rules
from expense_ingest.config import settings
from expense_ingest.core.errors import get_error_definition
from expense_ingest.core.exceptions import ExpenseIngestError
from expense_ingest.core.logging import setup_logging
from expense_ingest.parsers.bank_statement import BankStatementParser
from expense_ingest.schemas.rules import CategorizationRule

logger = logging.getLogger(__name__)


def load_rules(rules_file: str) -> list[CategorizationRule]:
    """Load categorization rules from YAML."""
    with open(rules_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValueError(f"Rules file must contain a list of rules: {rules_file}")
    return [CategorizationRule.model_validate(item) for item in data]


def run(statement_file: str, rules_file: str | None = None) -> dict:
    """Parse a statement file and categorize its expenses.

    Returns:
        JSON-serializable dict with ``expenses`` and ``skipped_rows``
    """
    text = Path(statement_file).read_text(encoding="utf-8")
    result = BankStatementParser().parse(text)

    rules = order_rules(load_rules(rules_file)) if rules_file else []
    expenses = [
        expense.model_copy(update={"category": categorize(expense, rules)})
        for expense in result.expenses
    ]
    logger.info(
        f"Parsed {len(expenses)} expenses from {statement_file} "
        f"({result.skipped_count} rows skipped)"
    )

    return {
        "expenses": [expense.model_dump(mode="json") for expense in expenses],
        "skipped_rows": [row.model_dump(mode="json") for row in result.skipped_rows],
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Parse and categorize a bank statement CSV")
    parser.add_argument("statement", help="Path to the statement CSV export")
    parser.add_argument("--rules", help="YAML file with categorization rules")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    args = parser.parse_args(argv)
    setup_logging(args.log_level, settings.log_file)

    try:
        output = run(args.statement, args.rules)
    except ExpenseIngestError as e:
        definition = get_error_definition(e.error_code)
        print(f"Error: {e}", file=sys.stderr)
        print(definition.user_message, file=sys.stderr)
        print(f"Suggestion: {definition.suggestion}", file=sys.stderr)
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
