"""Date resolution for free-text event descriptions.

Finds the single best calendar date mentioned in a piece of text. Rules
run in a fixed priority order, most explicit first, and the first rule
that produces a calendar-legal date wins.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date, datetime, timedelta

from src.event_parsing.schemas import Absent, DateCandidate, DateMatch

logger = logging.getLogger(__name__)


# Month name → number mapping
MONTHS: dict[str, int] = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "jun": 6, "jul": 7, "aug": 8, "sep": 9,
    "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Index matches date.weekday()
WEEKDAYS: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday",
    "friday", "saturday", "sunday",
)

# Longest names first so "sept" is not cut short by "sep"
_MONTH = "|".join(sorted(MONTHS, key=len, reverse=True))
_WEEKDAY = "|".join(WEEKDAYS)
_ORDINAL = r"(?:st|nd|rd|th)?"

_ISO_RE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")
_NUMERIC_FULL_RE = re.compile(r"\b(\d{1,2})[/-](\d{1,2})[/-](\d{4})\b")
_MONTH_DAY_YEAR_RE = re.compile(
    rf"\b({_MONTH})\.?\s+(\d{{1,2}}){_ORDINAL}[,\s]+(\d{{4}})\b", re.IGNORECASE
)
# Not part of a clock time ("3:30-4") and not the start of a meridiem range ("2-4 pm")
_NUMERIC_SHORT_RE = re.compile(
    r"(?<![\w:/-])(\d{1,2})[/-](\d{1,2})\b(?![/-]\d)(?!\s*[ap]\.?m\b)(?!\s*:)",
    re.IGNORECASE,
)
_MONTH_DAY_RE = re.compile(
    rf"\b({_MONTH})\.?\s+(\d{{1,2}}){_ORDINAL}\b", re.IGNORECASE
)
_DAY_MONTH_RE = re.compile(
    rf"\b(\d{{1,2}}){_ORDINAL}\s+({_MONTH})\b(?:\.?,?\s+(\d{{4}})\b)?", re.IGNORECASE
)
_TODAY_RE = re.compile(r"\btoday\b", re.IGNORECASE)
_DAY_AFTER_RE = re.compile(r"\bday\s+after\s+(?:tomorrow|tmrw)\b", re.IGNORECASE)
_TOMORROW_RE = re.compile(r"\btomorrow\b", re.IGNORECASE)
_NEXT_WEEK_RE = re.compile(r"\bnext\s+week\b", re.IGNORECASE)
_QUALIFIED_WEEKDAY_RE = re.compile(rf"\b(next|this)\s+({_WEEKDAY})\b", re.IGNORECASE)
_WEEKDAY_RE = re.compile(rf"\b({_WEEKDAY})\b", re.IGNORECASE)


def _build_date(year: int, month: int, day: int) -> date | None:
    """Return the date if it exists on the calendar, else None."""
    try:
        return date(year, month, day)
    except ValueError:
        return None


class DateResolver:
    """
    Rule cascade that resolves a calendar date from text.

    Stateless apart from the reference instant, which is fixed for the
    lifetime of the resolver so every rollover decision in one parse agrees.

    Args:
        now: Reference instant for relative dates and year rollover.
        trace: Log each rule attempt at DEBUG level.
    """

    def __init__(self, now: datetime, trace: bool = False):
        self._today = now.date()
        self._trace = trace

    @property
    def rules(self) -> tuple[Callable[[str], DateMatch | None], ...]:
        """Rules in priority order."""
        return (
            self._try_iso,
            self._try_numeric_full,
            self._try_month_day_year,
            self._try_numeric_short,
            self._try_month_day,
            self._try_day_month,
            self._try_today,
            self._try_day_after_tomorrow,
            self._try_tomorrow,
            self._try_next_week,
            self._try_qualified_weekday,
            self._try_weekday,
        )

    def resolve(self, text: str) -> DateCandidate:
        """
        Resolve the best date mentioned in text.

        Args:
            text: Raw event text.

        Returns:
            DateMatch from the first rule that fired, or Absent.
        """
        for rule in self.rules:
            result = rule(text)
            if self._trace:
                logger.debug(
                    "date rule %s: %s",
                    rule.__name__,
                    f"matched {result.value.isoformat()}" if result else "no match",
                )
            if result is not None:
                return result
        return Absent()

    def _with_rollover(self, month: int, day: int) -> date | None:
        """This year's date, or next year's if that one is already past."""
        candidate = _build_date(self._today.year, month, day)
        if candidate is None or candidate < self._today:
            candidate = _build_date(self._today.year + 1, month, day)
        return candidate

    def _offset(self, days: int) -> date:
        return self._today + timedelta(days=days)

    def _try_iso(self, text: str) -> DateMatch | None:
        """Match 'YYYY-MM-DD'."""
        m = _ISO_RE.search(text)
        if not m:
            return None
        value = _build_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        return DateMatch(value, "iso") if value else None

    def _try_numeric_full(self, text: str) -> DateMatch | None:
        """Match 'MM/DD/YYYY' and 'MM-DD-YYYY' (month first)."""
        m = _NUMERIC_FULL_RE.search(text)
        if not m:
            return None
        value = _build_date(int(m.group(3)), int(m.group(1)), int(m.group(2)))
        return DateMatch(value, "mm-dd-yyyy") if value else None

    def _try_month_day_year(self, text: str) -> DateMatch | None:
        """Match 'January 5, 2025', 'Jan 5th 2025'."""
        m = _MONTH_DAY_YEAR_RE.search(text)
        if not m:
            return None
        month = MONTHS[m.group(1).lower()]
        value = _build_date(int(m.group(3)), month, int(m.group(2)))
        return DateMatch(value, "month-day-year") if value else None

    def _try_numeric_short(self, text: str) -> DateMatch | None:
        """Match 'MM/DD' or 'MM-DD' without a year."""
        m = _NUMERIC_SHORT_RE.search(text)
        if not m:
            return None
        month, day = int(m.group(1)), int(m.group(2))
        if not (1 <= month <= 12 and 1 <= day <= 31):
            return None
        value = self._with_rollover(month, day)
        return DateMatch(value, "mm-dd") if value else None

    def _try_month_day(self, text: str) -> DateMatch | None:
        """Match 'January 5', 'Jan 5th'."""
        m = _MONTH_DAY_RE.search(text)
        if not m:
            return None
        value = self._with_rollover(MONTHS[m.group(1).lower()], int(m.group(2)))
        return DateMatch(value, "month-day") if value else None

    def _try_day_month(self, text: str) -> DateMatch | None:
        """Match '5 January', '5th January 2025'."""
        m = _DAY_MONTH_RE.search(text)
        if not m:
            return None
        day = int(m.group(1))
        month = MONTHS[m.group(2).lower()]
        if m.group(3):
            value = _build_date(int(m.group(3)), month, day)
        else:
            value = self._with_rollover(month, day)
        return DateMatch(value, "day-month") if value else None

    def _try_today(self, text: str) -> DateMatch | None:
        if _TODAY_RE.search(text):
            return DateMatch(self._today, "relative-today")
        return None

    def _try_day_after_tomorrow(self, text: str) -> DateMatch | None:
        if _DAY_AFTER_RE.search(text):
            return DateMatch(self._offset(2), "relative-dayafter")
        return None

    def _try_tomorrow(self, text: str) -> DateMatch | None:
        if _TOMORROW_RE.search(text):
            return DateMatch(self._offset(1), "relative-tomorrow")
        return None

    def _try_next_week(self, text: str) -> DateMatch | None:
        if _NEXT_WEEK_RE.search(text):
            return DateMatch(self._offset(7), "relative-nextweek")
        return None

    def _try_qualified_weekday(self, text: str) -> DateMatch | None:
        """
        Match 'next Monday' and 'this Monday'.

        'next' always skips into the following week (at least 8 days out).
        'this' is the nearest occurrence on or after today.
        """
        m = _QUALIFIED_WEEKDAY_RE.search(text)
        if not m:
            return None
        modifier = m.group(1).lower()
        delta = WEEKDAYS.index(m.group(2).lower()) - self._today.weekday()
        if modifier == "next":
            if delta <= 0:
                delta += 7
            delta += 7
        elif delta < 0:
            delta += 7
        return DateMatch(self._offset(delta), f"day-{modifier}")

    def _try_weekday(self, text: str) -> DateMatch | None:
        """Match a bare weekday name; always strictly after today."""
        m = _WEEKDAY_RE.search(text)
        if not m:
            return None
        delta = WEEKDAYS.index(m.group(1).lower()) - self._today.weekday()
        if delta <= 0:
            delta += 7
        return DateMatch(self._offset(delta), "day-standalone")


def extract_date(text: str, now: datetime, trace: bool = False) -> DateCandidate:
    """Resolve the best date in text relative to ``now``."""
    return DateResolver(now, trace=trace).resolve(text)
