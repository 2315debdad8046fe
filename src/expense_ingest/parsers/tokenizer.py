"""Character-level CSV tokenizer for bank statement exports.

Rules:

- ``"`` toggles quoting; ``""`` inside quotes is a literal quote
- ``,`` outside quotes ends a field
- ``\\n``, ``\\r`` or ``\\r\\n`` outside quotes ends a row
- fields are trimmed when they end, never mid-field
- rows whose fields are all blank are dropped
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CSVRow:
    """One tokenized row and the 1-based line number it starts on."""

    line_number: int
    fields: list[str] = field(default_factory=list)

    def is_blank(self) -> bool:
        return not self.fields or all(not value.strip() for value in self.fields)


def tokenize_csv(text: str) -> list[CSVRow]:
    """Split CSV text into rows of trimmed fields.

    Args:
        text: Complete file content

    Returns:
        Non-blank rows in file order
    """
    rows: list[CSVRow] = []
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    line = 1
    row_start = 1
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        next_char = text[i + 1] if i + 1 < length else ""

        if char == '"':
            if in_quotes and next_char == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        elif char in "\r\n" and not in_quotes:
            # For "\r\n" only the "\n" terminates the row.
            if char == "\n" or next_char != "\n":
                fields.append("".join(current).strip())
                _append_row(rows, row_start, fields)
                fields = []
                current = []
                row_start = line + 1
        else:
            current.append(char)

        if char == "\n" or (char == "\r" and next_char != "\n"):
            line += 1
        i += 1

    if current or fields:
        fields.append("".join(current).strip())
        _append_row(rows, row_start, fields)

    return rows


def _append_row(rows: list[CSVRow], line_number: int, fields: list[str]) -> None:
    row = CSVRow(line_number=line_number, fields=fields)
    if not row.is_blank():
        rows.append(row)
