"""Expense import service.

This module orchestrates the complete import workflow:
1. Parse the statement CSV
2. Load categorization rules (once per import)
3. Auto-categorize every expense
4. Persist in batches, falling back to row-by-row inserts on failure
5. Report per-row errors alongside the counts
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from expense_ingest.categorization.rules import categorize, order_rules
from expense_ingest.config import settings
from expense_ingest.core.errors import get_error
from expense_ingest.core.exceptions import NoExpensesFoundError
from expense_ingest.parsers.bank_statement import BankStatementParser
from expense_ingest.schemas.expense import NormalizedExpense
from expense_ingest.schemas.imports import ExpenseImportResult, ImportRowError
from expense_ingest.schemas.rules import CategorizationRule

logger = logging.getLogger(__name__)


class RuleSource(Protocol):
    """Where categorization rules come from (e.g. the user's rule table)."""

    async def load_rules(self) -> Sequence[CategorizationRule]: ...


class ExpenseSink(Protocol):
    """Where imported expenses are written. Raises on failure."""

    async def insert_many(self, expenses: Sequence[NormalizedExpense]) -> None: ...


class ExpenseImportService:
    """Service for importing bank statement CSVs as categorized expenses.

    Rules are loaded and ordered once per import and reused for every row.
    """

    def __init__(
        self,
        rule_source: RuleSource,
        sink: ExpenseSink,
        parser: BankStatementParser | None = None,
        batch_size: int | None = None,
    ):
        """Initialize the service.

        Args:
            rule_source: Provider of the user's categorization rules
            sink: Persistence target for expenses
            parser: Statement parser (default: new BankStatementParser)
            batch_size: Expenses per insert (default: settings.import_batch_size)
        """
        self.rule_source = rule_source
        self.sink = sink
        self.parser = parser or BankStatementParser()
        self.batch_size = settings.import_batch_size if batch_size is None else batch_size
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")

    async def import_csv(self, text: str) -> ExpenseImportResult:
        """Import a statement CSV.

        Args:
            text: Complete CSV file content

        Returns:
            ExpenseImportResult with counts, per-row errors and parse
            diagnostics

        Raises:
            MalformedInputError: If the CSV is unusable
            NoExpensesFoundError: If the file contains no importable rows
        """
        parsed = self.parser.parse(text)

        if not parsed.expenses:
            raise NoExpensesFoundError(
                details={"rows": parsed.total_rows, "skipped": parsed.skipped_count}
            )

        rules = order_rules(await self.rule_source.load_rules())
        logger.info(f"Loaded {len(rules)} active categorization rules")

        expenses = [
            expense.model_copy(update={"category": categorize(expense, rules)})
            for expense in parsed.expenses
        ]
        categorized = sum(1 for expense in expenses if expense.category is not None)

        imported, errors = await self._persist(expenses, parsed.line_numbers)

        logger.info(
            f"Imported {imported}/{len(expenses)} expenses "
            f"({categorized} categorized, {len(errors)} failed, "
            f"{parsed.skipped_count} skipped during parsing)"
        )

        return ExpenseImportResult(
            imported=imported,
            total=len(expenses),
            categorized=categorized,
            errors=errors,
            skipped_rows=parsed.skipped_rows,
        )

    async def _persist(
        self, expenses: list[NormalizedExpense], line_numbers: list[int]
    ) -> tuple[int, list[ImportRowError]]:
        """Insert expenses in batches.

        A failing batch is retried one row at a time so only the rows that
        actually fail are reported.
        """
        imported = 0
        errors: list[ImportRowError] = []

        for start in range(0, len(expenses), self.batch_size):
            batch = expenses[start : start + self.batch_size]
            try:
                await self.sink.insert_many(batch)
                imported += len(batch)
                continue
            except Exception as e:
                logger.warning(
                    f"Batch insert of {len(batch)} expenses failed ({e}); retrying row by row"
                )

            for offset, expense in enumerate(batch):
                line_number = line_numbers[start + offset]
                try:
                    await self.sink.insert_many([expense])
                    imported += 1
                except Exception as e:
                    logger.error(f"Failed to insert expense from line {line_number}: {e}")
                    errors.append(
                        ImportRowError(
                            line_number=line_number,
                            error_code="IMPORT_002",
                            error=str(e) or get_error("IMPORT_002")["message"],
                        )
                    )

        return imported, errors
