"""Bank statement CSV parser.

Converts a bank's CSV export (header row + one row per transaction) into
NormalizedExpense records. Every row is treated as an expense, so amounts
are stored as absolute values. Categorization happens later, during import.

Expected header (only the first four are required)::

    Type, Product, Started Date, Completed Date, Description,
    Amount, Fee, Currency, State, Balance
"""

import logging
from datetime import date

from expense_ingest.core.exceptions import MalformedInputError
from expense_ingest.parsers.normalize import (
    parse_amount,
    parse_timestamp,
    resolve_expense_date,
)
from expense_ingest.parsers.tokenizer import CSVRow, tokenize_csv
from expense_ingest.schemas.expense import (
    NormalizedExpense,
    SkippedRow,
    StatementParseResult,
)

logger = logging.getLogger(__name__)


class BankStatementParser:
    """Parser for bank statement CSV exports.

    The parse is eager and pure: the same text (and ``today``) always
    produces the same result.

    Example:
        >>> parser = BankStatementParser()
        >>> result = parser.parse(csv_text)
        >>> print(f"{len(result.expenses)} expenses, {result.skipped_count} skipped")
    """

    REQUIRED_COLUMNS = ("Type", "Description", "Amount", "Completed Date")

    AMOUNT_COLUMN = "Amount"
    DESCRIPTION_COLUMN = "Description"
    STARTED_COLUMN = "Started Date"
    COMPLETED_COLUMN = "Completed Date"

    def parse(self, text: str, today: date | None = None) -> StatementParseResult:
        """Parse statement text.

        Args:
            text: Complete CSV file content
            today: Date used when a row has no usable timestamp
                (default: current UTC date)

        Returns:
            StatementParseResult with expenses in input order and
            diagnostics for dropped rows

        Raises:
            MalformedInputError: If there is no data row or required
                columns are missing
        """
        rows = tokenize_csv(text)

        if len(rows) < 2:
            raise MalformedInputError("CSV_001", details={"rows": len(rows)})

        headers = [header.strip() for header in rows[0].fields]
        self._validate_headers(headers)

        result = StatementParseResult()
        for row in rows[1:]:
            if row.is_blank():
                continue
            result.total_rows += 1

            record = self._row_to_record(headers, row)
            expense = self._to_expense(record, row, result, today)
            if expense is not None:
                result.expenses.append(expense)
                result.line_numbers.append(row.line_number)

        return result

    def _validate_headers(self, headers: list[str]) -> None:
        missing = [column for column in self.REQUIRED_COLUMNS if column not in headers]
        if missing:
            raise MalformedInputError(
                "CSV_002",
                missing_columns=missing,
                details={"headers": headers},
            )

    def _row_to_record(self, headers: list[str], row: CSVRow) -> dict[str, str]:
        """Map row fields onto header names; short rows are padded with ""."""
        return {
            header: row.fields[index] if index < len(row.fields) else ""
            for index, header in enumerate(headers)
        }

    def _to_expense(
        self,
        record: dict[str, str],
        row: CSVRow,
        result: StatementParseResult,
        today: date | None,
    ) -> NormalizedExpense | None:
        raw_amount = record.get(self.AMOUNT_COLUMN, "").strip()
        amount = parse_amount(raw_amount)
        if amount is None:
            logger.warning(f"Invalid amount on line {row.line_number}: {raw_amount!r}, skipping row")
            result.skipped_rows.append(
                SkippedRow(
                    line_number=row.line_number,
                    reason="Invalid amount",
                    raw_amount=raw_amount,
                )
            )
            return None

        started_at = parse_timestamp(record.get(self.STARTED_COLUMN))
        completed_at = parse_timestamp(record.get(self.COMPLETED_COLUMN))

        # Bank exports don't separate vendor from description.
        description = record.get(self.DESCRIPTION_COLUMN, "").strip() or None

        return NormalizedExpense(
            vendor=description,
            description=description,
            amount=abs(amount),
            date=resolve_expense_date(completed_at, started_at, today),
            transaction_started_at=started_at,
            transaction_completed_at=completed_at,
            category=None,
            project_id=None,
        )


# Singleton parser instance for global use
_parser_instance: BankStatementParser | None = None


def get_statement_parser() -> BankStatementParser:
    """Get or create the global BankStatementParser instance."""
    global _parser_instance
    if _parser_instance is None:
        _parser_instance = BankStatementParser()
    return _parser_instance


def parse_statement(text: str) -> list[NormalizedExpense]:
    """Convenience function returning only the parsed expenses.

    Use ``BankStatementParser().parse`` to also get diagnostics for
    dropped rows.

    Raises:
        MalformedInputError: If the CSV is unusable
    """
    return get_statement_parser().parse(text).expenses
