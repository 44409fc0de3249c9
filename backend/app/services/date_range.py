"""Date range classification for range-bound price queries.

A request may carry a ``from``/``to`` pair of ISO dates. Both missing means
the provider's year-to-date range is used; anything else has to be a
complete, ordered range no longer than ``MAX_RANGE_DAYS``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

MAX_RANGE_DAYS = 30

_ONE_DAY = timedelta(days=1)


class RangeKind(str, Enum):
    """Outcome of classifying a requested date range."""
    BOTH_MISSING = "both_missing"
    ONE_MISSING = "one_missing"
    VALID = "valid"
    TOO_LONG = "too_long"
    INVERTED = "inverted"


RANGE_ERROR_MESSAGES = {
    RangeKind.ONE_MISSING: "Kindly provide both FROM and TO to obtain values in a range",
    RangeKind.INVERTED: "From Date cannot be greater than To Date",
    RangeKind.TOO_LONG: "From and To Dates cannot have difference more than 30 days",
}

RANGE_ERROR_STATUS = 406


@dataclass(frozen=True)
class DateRange:
    """A classified range. ``days`` is only set when both bounds were given."""

    kind: RangeKind
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    days: Optional[int] = None

    @property
    def is_rejected(self) -> bool:
        return self.kind in RANGE_ERROR_MESSAGES

    @property
    def error_message(self) -> Optional[str]:
        return RANGE_ERROR_MESSAGES.get(self.kind)


def parse_date(value: str) -> datetime:
    """Parse an ISO date (or date-time) string as an aware datetime.

    Values without an explicit offset are taken as UTC, so ``"2023-01-01"``
    is UTC midnight regardless of the host timezone.

    Raises:
        ValueError: if the string is not ISO formatted.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def range_days(from_date: str, to_date: str) -> int:
    """Whole days between two dates, floored (negative when inverted)."""
    return (parse_date(to_date) - parse_date(from_date)) // _ONE_DAY


def classify(from_date: Optional[str], to_date: Optional[str]) -> DateRange:
    """Classify a requested range.

    Empty strings count as missing. Raises ValueError when a given bound is
    not a parseable date.
    """
    from_date = from_date or None
    to_date = to_date or None

    if from_date is None and to_date is None:
        return DateRange(kind=RangeKind.BOTH_MISSING)

    if from_date is None or to_date is None:
        return DateRange(kind=RangeKind.ONE_MISSING, from_date=from_date, to_date=to_date)

    days = range_days(from_date, to_date)
    if days > MAX_RANGE_DAYS:
        kind = RangeKind.TOO_LONG
    elif days < 0:
        kind = RangeKind.INVERTED
    else:
        kind = RangeKind.VALID

    return DateRange(kind=kind, from_date=from_date, to_date=to_date, days=days)
