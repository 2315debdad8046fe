"""CSV parsing module for bank statement exports.

- tokenize_csv splits raw text into trimmed rows
- BankStatementParser maps rows onto NormalizedExpense records
"""

from expense_ingest.parsers.bank_statement import (
    BankStatementParser,
    get_statement_parser,
    parse_statement,
)
from expense_ingest.parsers.tokenizer import CSVRow, tokenize_csv

__all__ = [
    "BankStatementParser",
    "CSVRow",
    "get_statement_parser",
    "parse_statement",
    "tokenize_csv",
]
