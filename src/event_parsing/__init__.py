"""
Rule-based calendar event parsing from free text.

This module turns an arbitrary text snippet into a structured calendar
event (title, start, end, confidence) using fixed, ordered pattern rules
for dates, times, time ranges and durations.

Components:
- EventParsingConfig: Configuration for the parser
- EventParser: Facade running the resolvers and assembling the event
- ParsedEvent: Dataclass representing a parsed event
- DateResolver / TimeResolver / DurationResolver: Ordered rule cascades
- extract_title: Title derivation from raw text
"""

from src.event_parsing.config import EventParsingConfig
from src.event_parsing.dates import DateResolver, extract_date
from src.event_parsing.durations import DurationResolver, extract_duration
from src.event_parsing.parser import EventParser, parse_event
from src.event_parsing.schemas import (
    Absent,
    DateMatch,
    DurationMatch,
    ParsedEvent,
    TimeMatch,
    TimeRangeMatch,
)
from src.event_parsing.times import TimeResolver, extract_time, extract_time_range
from src.event_parsing.title import extract_title

__all__ = [
    "Absent",
    "DateMatch",
    "DateResolver",
    "DurationMatch",
    "DurationResolver",
    "EventParser",
    "EventParsingConfig",
    "ParsedEvent",
    "TimeMatch",
    "TimeRangeMatch",
    "TimeResolver",
    "extract_date",
    "extract_duration",
    "extract_time",
    "extract_time_range",
    "extract_title",
    "parse_event",
]
