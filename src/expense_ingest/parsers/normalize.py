"""Field normalization helpers shared by statement parsers."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

# Leading number of a field, e.g. "-12.50" in "-12.50 EUR".
NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Non-ISO layouts seen in bank exports. ISO 8601 is tried first.
TIMESTAMP_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y",
    "%d-%b-%Y",  # 15-Jan-2025
    "%d %b %Y",  # 15 Jan 2025
    "%b %d, %Y",  # Jan 15, 2025
)


def parse_number(text: str | None) -> Decimal | None:
    """Parse the leading number of a string, ignoring anything after it.

    Returns None when the text does not start with a finite number
    (e.g. "N/A", "NaN", "EUR 12").
    """
    match = NUMBER_PREFIX.match((text or "").strip())
    if not match:
        return None
    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_amount(text: str | None) -> Decimal | None:
    """Parse a signed amount such as "-42.50" or "-12.50 EUR".

    Empty text is read as zero. Returns None when the text does not start
    with a finite number.
    """
    raw = (text or "").strip()
    if not raw:
        return Decimal("0")
    return parse_number(raw)


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse a timestamp into a UTC-aware datetime.

    Accepts ISO 8601 (with "T" or space separator and an optional trailing
    "Z"), plus the layouts in TIMESTAMP_FORMATS. Naive values are taken as
    UTC. Returns None for empty or unparseable text.
    """
    raw = (text or "").strip()
    if not raw:
        return None

    iso = raw[:-1] + "+00:00" if raw[-1] in "Zz" else raw
    value: datetime | None
    try:
        value = datetime.fromisoformat(iso)
    except ValueError:
        value = None
        for fmt in TIMESTAMP_FORMATS:
            try:
                value = datetime.strptime(raw, fmt)
                break
            except ValueError:
                continue

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_expense_date(
    completed_at: datetime | None,
    started_at: datetime | None,
    today: date | None = None,
) -> date:
    """Pick the expense date: completed, then started, then today (UTC)."""
    for timestamp in (completed_at, started_at):
        if timestamp is not None:
            return timestamp.astimezone(timezone.utc).date()
    return today or datetime.now(timezone.utc).date()
