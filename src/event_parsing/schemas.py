"""Schema definitions for event parsing.

Every resolver returns a tagged variant: a ``*Match`` dataclass when one of
its rules fired, or ``Absent`` when none did. ``ParsedEvent`` is the single
record handed back to callers.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Union

DEFAULT_DURATION_MINUTES = 60


@dataclass(frozen=True)
class Absent:
    """No rule in a cascade matched."""

    kind: str = "none"


@dataclass(frozen=True)
class DateMatch:
    """A calendar date resolved from text, at local midnight."""

    value: date
    kind: str


@dataclass(frozen=True)
class TimeMatch:
    """A single wall-clock time in 24-hour form."""

    hours: int
    minutes: int
    kind: str


@dataclass(frozen=True)
class TimeRangeMatch:
    """
    A start and end time taken from one expression such as "6-8pm".

    Attributes:
        start_hours: Start hour, 0-23.
        start_minutes: Start minute, 0-59.
        end_hours: End hour, 0-23.
        end_minutes: End minute, 0-59.
        kind: Rule that produced the range.
    """

    start_hours: int
    start_minutes: int
    end_hours: int
    end_minutes: int
    kind: str = "range"

    @property
    def duration_minutes(self) -> int:
        """Minutes from start to end, wrapping past midnight when needed."""
        start = self.start_hours * 60 + self.start_minutes
        end = self.end_hours * 60 + self.end_minutes
        if end <= start:
            end += 24 * 60
        return end - start

    @property
    def start(self) -> TimeMatch:
        return TimeMatch(self.start_hours, self.start_minutes, self.kind)


@dataclass(frozen=True)
class DurationMatch:
    """An explicit or implied event length."""

    milliseconds: int
    kind: str

    @property
    def delta(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)

    @property
    def is_end_time(self) -> bool:
        """True when the length was derived from an explicit end time."""
        return self.kind == "until"


DateCandidate = Union[DateMatch, Absent]
TimeCandidate = Union[TimeMatch, Absent]
TimeRangeCandidate = Union[TimeRangeMatch, Absent]
DurationCandidate = Union[DurationMatch, Absent]


@dataclass(frozen=True)
class ParsedEvent:
    """
    A calendar event extracted from free text.

    Attributes:
        title: Short label derived from the text.
        start: Start instant (local wall clock).
        end: End instant, always after ``start``.
        description: The raw input text, unchanged.
        confidence: Extraction confidence score (0.0-1.0, two decimals).
        date_rule: Kind of the date rule that fired, or "none".
        time_rule: Kind of the time rule that fired, or "none".
        duration_rule: Kind of the duration rule that fired, or "default".
    """

    title: str
    start: datetime
    end: datetime
    description: str
    confidence: float
    date_rule: str = "none"
    time_rule: str = "none"
    duration_rule: str = "default"

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "description": self.description,
            "confidence": self.confidence,
            "date_rule": self.date_rule,
            "time_rule": self.time_rule,
            "duration_rule": self.duration_rule,
        }
