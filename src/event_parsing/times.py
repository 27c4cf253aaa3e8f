"""Time resolution for free-text event descriptions.

Two entry points: a time range ("6-8pm", "2pm until 4pm") that supplies
both a start time and a duration, and a single start time ("at 3",
"10:30 AM", "noon"). The range is tried first by the parser.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from src.event_parsing.schemas import (
    Absent,
    TimeCandidate,
    TimeMatch,
    TimeRangeCandidate,
    TimeRangeMatch,
)

logger = logging.getLogger(__name__)

MERIDIEM = r"(am|pm|a\.m\.?|p\.m\.?)"

# Hours 1-7 written without am/pm are read as afternoon (business hours)
BUSINESS_HOURS_PM_MAX = 7

# (kind, pattern, exclusion, hours) in priority order
NAMED_TIMES: tuple[tuple[str, str, str | None, int], ...] = (
    ("noon", r"\bnoon\b", None, 12),
    ("midnight", r"\bmidnight\b", None, 0),
    ("morning", r"\bmorning\b", r"\bgood\s+morning\b", 9),
    ("afternoon", r"\bafternoon\b", None, 14),
    ("evening", r"\bevening\b", None, 18),
    ("night", r"\bnight\b", r"\bgood\s+night\b", 20),
)

_RANGE_RE = re.compile(
    rf"\b(\d{{1,2}})(?::(\d{{2}}))?\s*{MERIDIEM}?"
    r"\s*(?:-|–|—|\bto\b|\buntil\b|\btill\b)\s*"
    rf"(\d{{1,2}})(?::(\d{{2}}))?\s*{MERIDIEM}\b",
    re.IGNORECASE,
)
_TWELVE_HOUR_RE = re.compile(
    rf"\b(\d{{1,2}})(?::(\d{{2}}))?\s*{MERIDIEM}\b", re.IGNORECASE
)
# Not adjacent to a slash, dash or digit, which would make it part of a date
_TWENTY_FOUR_HOUR_RE = re.compile(r"(?<![/\-\d])(\d{1,2}):(\d{2})(?![/\-\d])")
_AT_HOUR_RE = re.compile(r"\bat\s+(\d{1,2})\b(?!\s*[:\d/-])", re.IGNORECASE)
_OCLOCK_RE = re.compile(r"\b(\d{1,2})\s*o['’]?clock\b", re.IGNORECASE)

_NAMED_TIME_PATTERNS = tuple(
    (
        kind,
        re.compile(pattern, re.IGNORECASE),
        re.compile(exclusion, re.IGNORECASE) if exclusion else None,
        hours,
    )
    for kind, pattern, exclusion, hours in NAMED_TIMES
)


def is_pm(meridiem: str) -> bool:
    return meridiem.lower().startswith("p")


def to_24_hour(hour: int, meridiem: str) -> int:
    """Convert a 1-12 hour with its meridiem to 0-23."""
    if is_pm(meridiem):
        return hour if hour == 12 else hour + 12
    return 0 if hour == 12 else hour


def infer_range_start_hour(start_hour: int, end_hours: int) -> int:
    """
    Place a meridiem-less range start relative to a 24-hour end.

    With a PM end, a start that is not later on the 12-hour dial shares the
    PM ("6-8pm"); a later one crosses noon and is AM ("11-1pm"). With an AM
    end the start is AM too.
    """
    if end_hours >= 12:
        if start_hour % 12 <= end_hours % 12:
            return to_24_hour(start_hour, "pm")
        return start_hour
    return to_24_hour(start_hour, "am")


def infer_business_hour(hour: int) -> int:
    """Read a bare 1-12 hour as business hours: 1-7 is PM, 8-12 literal."""
    if 1 <= hour <= BUSINESS_HOURS_PM_MAX:
        return hour + 12
    return hour


def _minutes(value: str | None) -> int:
    return int(value) if value else 0


class TimeResolver:
    """
    Rule cascade that resolves a start time, or a start/end range, from text.

    Args:
        trace: Log each rule attempt at DEBUG level.
    """

    def __init__(self, trace: bool = False):
        self._trace = trace

    @property
    def rules(self) -> tuple[Callable[[str], TimeMatch | None], ...]:
        """Single-time rules in priority order."""
        return (
            self._try_named_time,
            self._try_twelve_hour,
            self._try_twenty_four_hour,
            self._try_at_hour,
            self._try_oclock,
        )

    def resolve_range(self, text: str) -> TimeRangeCandidate:
        """
        Match 'H[:MM][am|pm] (-|to|until) H[:MM](am|pm)'.

        The end meridiem is mandatory; a missing start meridiem is inferred
        from the end. Hours outside 1-12 reject the range.
        """
        m = _RANGE_RE.search(text)
        result: TimeRangeMatch | None = None
        if m:
            start_hour, end_hour = int(m.group(1)), int(m.group(4))
            start_minutes, end_minutes = _minutes(m.group(2)), _minutes(m.group(5))
            if (
                1 <= start_hour <= 12
                and 1 <= end_hour <= 12
                and start_minutes <= 59
                and end_minutes <= 59
            ):
                end_hours = to_24_hour(end_hour, m.group(6))
                if m.group(3):
                    start_hours = to_24_hour(start_hour, m.group(3))
                else:
                    start_hours = infer_range_start_hour(start_hour, end_hours)
                result = TimeRangeMatch(start_hours, start_minutes, end_hours, end_minutes)

        if self._trace:
            logger.debug("time rule range: %s", "matched" if result else "no match")
        return result if result is not None else Absent()

    def resolve(self, text: str) -> TimeCandidate:
        """
        Resolve a single start time.

        Args:
            text: Raw event text.

        Returns:
            TimeMatch from the first rule that fired, or Absent.
        """
        for rule in self.rules:
            result = rule(text)
            if self._trace:
                logger.debug(
                    "time rule %s: %s",
                    rule.__name__,
                    f"matched {result.hours}:{result.minutes:02d}" if result else "no match",
                )
            if result is not None:
                return result
        return Absent()

    def _try_named_time(self, text: str) -> TimeMatch | None:
        """Match noon, midnight, morning, afternoon, evening, night."""
        for kind, pattern, exclusion, hours in _NAMED_TIME_PATTERNS:
            if pattern.search(text) and not (exclusion and exclusion.search(text)):
                return TimeMatch(hours, 0, kind)
        return None

    def _try_twelve_hour(self, text: str) -> TimeMatch | None:
        """Match '3pm', '3:00 PM', '9:30 a.m.'."""
        m = _TWELVE_HOUR_RE.search(text)
        if not m:
            return None
        hour, minutes = int(m.group(1)), _minutes(m.group(2))
        if not (1 <= hour <= 12 and minutes <= 59):
            return None
        return TimeMatch(to_24_hour(hour, m.group(3)), minutes, "12-hour")

    def _try_twenty_four_hour(self, text: str) -> TimeMatch | None:
        """Match '15:00', '09:30'."""
        m = _TWENTY_FOUR_HOUR_RE.search(text)
        if not m:
            return None
        hours, minutes = int(m.group(1)), int(m.group(2))
        if hours > 23 or minutes > 59:
            return None
        return TimeMatch(hours, minutes, "24-hour")

    def _try_at_hour(self, text: str) -> TimeMatch | None:
        """Match 'at 3' with no meridiem."""
        m = _AT_HOUR_RE.search(text)
        if not m:
            return None
        hour = int(m.group(1))
        if not 1 <= hour <= 12:
            return None
        return TimeMatch(infer_business_hour(hour), 0, "at-number")

    def _try_oclock(self, text: str) -> TimeMatch | None:
        """Match "3 o'clock"."""
        m = _OCLOCK_RE.search(text)
        if not m:
            return None
        hour = int(m.group(1))
        if not 1 <= hour <= 12:
            return None
        return TimeMatch(infer_business_hour(hour), 0, "oclock")


def extract_time_range(text: str, trace: bool = False) -> TimeRangeCandidate:
    """Resolve a start/end range from text."""
    return TimeResolver(trace=trace).resolve_range(text)


def extract_time(text: str, trace: bool = False) -> TimeCandidate:
    """Resolve a single start time from text."""
    return TimeResolver(trace=trace).resolve(text)
