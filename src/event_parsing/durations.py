"""Duration resolution for free-text event descriptions.

Finds an explicit or implied event length ("for 45 minutes", "2 hour
workshop", "until 5pm"). Only consulted when no time range already
supplied the duration.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable

from src.event_parsing.schemas import Absent, DurationCandidate, DurationMatch
from src.event_parsing.times import MERIDIEM, to_24_hour

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MAX_UNTIL_MINUTES = 24 * 60
MAX_DURATION_MINUTES = 366 * 24 * 60

DURATION_NOUNS: tuple[str, ...] = (
    "meeting", "call", "session", "appointment",
    "event", "class", "lecture", "workshop",
)

_NUMBER = r"(\d+(?:\.\d+)?)"
_UNIT = r"(hours?|hrs?|h|minutes?|mins?|m)"

_UNTIL_RE = re.compile(
    rf"\buntil\s+(\d{{1,2}})(?::(\d{{2}}))?(?!\d)\s*{MERIDIEM}?", re.IGNORECASE
)
_FOR_RE = re.compile(rf"\bfor\s+{_NUMBER}\s*{_UNIT}\b", re.IGNORECASE)
_FOR_AN_HOUR_RE = re.compile(r"\bfor\s+an?\s+hour\b", re.IGNORECASE)
_FOR_HALF_HOUR_RE = re.compile(r"\bfor\s+(?:a\s+)?half\s+(?:an?\s+)?hour\b", re.IGNORECASE)
_NOUN_RE = re.compile(
    rf"\b{_NUMBER}\s*-?\s*{_UNIT}\s+(?:{'|'.join(DURATION_NOUNS)})", re.IGNORECASE
)
_GENERAL_RE = re.compile(rf"\b{_NUMBER}\s*(hours?|hrs?|minutes?|mins?)\b", re.IGNORECASE)
_TRAILING_AT_RE = re.compile(r"\bat\s*$", re.IGNORECASE)
_HALF_HOUR_RE = re.compile(r"\bhalf\s+(?:an?\s+)?hour\b", re.IGNORECASE)


def infer_end_hour(end_hour: int, start_hours: int) -> int:
    """
    Place a meridiem-less end hour relative to a 24-hour start.

    Mirror of the range start inference: an end that is not earlier on the
    12-hour dial stays in the start's half of the day ("3pm until 5"), an
    earlier one crosses into the other half ("11am until 1").
    """
    if end_hour > 12:
        return end_hour
    start_pm = start_hours >= 12
    same_half = end_hour % 12 >= start_hours % 12
    pm = start_pm if same_half else not start_pm
    return end_hour % 12 + (12 if pm else 0)


def _to_milliseconds(value: str, unit: str) -> int | None:
    """Convert an amount and unit to a positive millisecond count of at most a year."""
    per_unit = MS_PER_HOUR if unit.lower().startswith("h") else MS_PER_MINUTE
    amount = float(value) * per_unit
    if not math.isfinite(amount):
        return None
    milliseconds = round(amount)
    if not 0 < milliseconds <= MAX_DURATION_MINUTES * MS_PER_MINUTE:
        return None
    return milliseconds


def _unit_kind(prefix: str, unit: str) -> str:
    return f"{prefix}-hours" if unit.lower().startswith("h") else f"{prefix}-minutes"


class DurationResolver:
    """
    Rule cascade that resolves an event length from text.

    Args:
        start_hours: Resolved start hour (0-23), needed for 'until' phrases.
        start_minutes: Resolved start minute.
        trace: Log each rule attempt at DEBUG level.
    """

    def __init__(
        self,
        start_hours: int | None = None,
        start_minutes: int = 0,
        trace: bool = False,
    ):
        self._start_hours = start_hours
        self._start_minutes = start_minutes
        self._trace = trace

    @property
    def rules(self) -> tuple[Callable[[str], DurationMatch | None], ...]:
        """Rules in priority order."""
        return (
            self._try_until,
            self._try_for_amount,
            self._try_for_an_hour,
            self._try_for_half_hour,
            self._try_noun_amount,
            self._try_general_amount,
            self._try_half_hour,
        )

    def resolve(self, text: str) -> DurationCandidate:
        """
        Resolve the event length mentioned in text.

        Returns:
            DurationMatch from the first rule that fired, or Absent when the
            caller should fall back to the default length.
        """
        for rule in self.rules:
            result = rule(text)
            if self._trace:
                logger.debug(
                    "duration rule %s: %s",
                    rule.__name__,
                    f"matched {result.milliseconds}ms" if result else "no match",
                )
            if result is not None:
                return result
        return Absent(kind="default")

    def _try_until(self, text: str) -> DurationMatch | None:
        """Match 'until 5', 'until 5:30pm' against a known start time."""
        if self._start_hours is None:
            return None
        m = _UNTIL_RE.search(text)
        if not m:
            return None

        end_hour = int(m.group(1))
        end_minutes = int(m.group(2)) if m.group(2) else 0
        meridiem = m.group(3)
        if end_minutes > 59:
            return None
        if meridiem:
            if not 1 <= end_hour <= 12:
                return None
            end_hours = to_24_hour(end_hour, meridiem)
        elif end_hour <= 23:
            end_hours = infer_end_hour(end_hour, self._start_hours)
        else:
            return None

        start_total = self._start_hours * 60 + self._start_minutes
        end_total = end_hours * 60 + end_minutes
        if end_total <= start_total:
            end_total += 24 * 60

        duration = end_total - start_total
        if duration <= 0 or duration > MAX_UNTIL_MINUTES:
            return None
        return DurationMatch(duration * MS_PER_MINUTE, "until")

    def _try_for_amount(self, text: str) -> DurationMatch | None:
        """Match 'for 2 hours', 'for 45 mins', 'for 1.5h'."""
        m = _FOR_RE.search(text)
        if not m:
            return None
        milliseconds = _to_milliseconds(m.group(1), m.group(2))
        if milliseconds is None:
            return None
        return DurationMatch(milliseconds, _unit_kind("for", m.group(2)))

    def _try_for_an_hour(self, text: str) -> DurationMatch | None:
        if _FOR_AN_HOUR_RE.search(text):
            return DurationMatch(MS_PER_HOUR, "for-an-hour")
        return None

    def _try_for_half_hour(self, text: str) -> DurationMatch | None:
        if _FOR_HALF_HOUR_RE.search(text):
            return DurationMatch(30 * MS_PER_MINUTE, "for-half-hour")
        return None

    def _try_noun_amount(self, text: str) -> DurationMatch | None:
        """Match '2 hour workshop', '30-minute call'."""
        m = _NOUN_RE.search(text)
        if not m:
            return None
        milliseconds = _to_milliseconds(m.group(1), m.group(2))
        if milliseconds is None:
            return None
        return DurationMatch(milliseconds, _unit_kind("noun", m.group(2)))

    def _try_general_amount(self, text: str) -> DurationMatch | None:
        """Match a bare '2 hours' / '30 minutes' not directly after 'at'."""
        for m in _GENERAL_RE.finditer(text):
            if _TRAILING_AT_RE.search(text[: m.start()]):
                continue
            milliseconds = _to_milliseconds(m.group(1), m.group(2))
            if milliseconds is not None:
                return DurationMatch(milliseconds, _unit_kind("general", m.group(2)))
        return None

    def _try_half_hour(self, text: str) -> DurationMatch | None:
        if _HALF_HOUR_RE.search(text):
            return DurationMatch(30 * MS_PER_MINUTE, "half-hour")
        return None


def extract_duration(
    text: str,
    start_hours: int | None = None,
    start_minutes: int = 0,
    trace: bool = False,
) -> DurationCandidate:
    """Resolve the event length in text, given the start time if known."""
    return DurationResolver(start_hours, start_minutes, trace=trace).resolve(text)
