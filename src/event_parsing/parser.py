"""Event parsing facade.

Single entry point that runs the title, date, time and duration
resolvers in a fixed sequence and assembles the final event.
"""

from __future__ import annotations

import logging
from datetime import datetime

from src.event_parsing.config import EventParsingConfig
from src.event_parsing.dates import DateResolver
from src.event_parsing.durations import DurationResolver
from src.event_parsing.schemas import (
    DateMatch,
    DurationMatch,
    ParsedEvent,
    TimeMatch,
    TimeRangeMatch,
)
from src.event_parsing.scoring import assemble, compute_confidence
from src.event_parsing.times import TimeResolver
from src.event_parsing.title import extract_title

logger = logging.getLogger(__name__)


class EventParser:
    """
    Deterministic rule-based parser from free text to a calendar event.

    Holds no state between calls; the same text and ``now`` always give
    the same result.

    Usage:
        parser = EventParser()
        event = parser.parse("Lunch with Sam tomorrow at noon", now=datetime.now())
    """

    def __init__(self, config: EventParsingConfig | None = None):
        self._config = config or EventParsingConfig()

    def parse(self, text: str, now: datetime | None = None) -> ParsedEvent:
        """
        Parse text into a calendar event.

        Args:
            text: Free text describing the event.
            now: Reference instant, captured once for the whole parse.
                Defaults to the current local time.

        Returns:
            ParsedEvent with start, end, title and confidence.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be str, not {type(text).__name__}")
        if now is None:
            now = datetime.now()
        trace = self._config.trace_rules

        logger.debug("Parsing text: %r", text)
        title = extract_title(text)

        date_result = DateResolver(now, trace=trace).resolve(text)
        if isinstance(date_result, DateMatch):
            logger.debug("Extracted date: %s (%s)", date_result.value, date_result.kind)

        times = TimeResolver(trace=trace)
        range_result = times.resolve_range(text)
        if isinstance(range_result, TimeRangeMatch):
            time_result = range_result.start
            duration_result = DurationMatch(
                range_result.duration_minutes * 60 * 1000, range_result.kind
            )
        else:
            time_result = times.resolve(text)
            if isinstance(time_result, TimeMatch):
                duration_result = DurationResolver(
                    time_result.hours, time_result.minutes, trace=trace
                ).resolve(text)
            else:
                duration_result = DurationResolver(trace=trace).resolve(text)

        if isinstance(time_result, TimeMatch):
            logger.debug(
                "Extracted time: %d:%02d (%s)",
                time_result.hours,
                time_result.minutes,
                time_result.kind,
            )
        if isinstance(duration_result, DurationMatch):
            logger.debug(
                "Extracted duration: %d minutes (%s)",
                duration_result.milliseconds // 60000,
                duration_result.kind,
            )

        start, end = assemble(now, date_result, time_result, duration_result)
        confidence = compute_confidence(
            text,
            date_found=isinstance(date_result, DateMatch),
            time_found=isinstance(time_result, TimeMatch),
            duration_found=isinstance(duration_result, DurationMatch),
        )
        logger.debug("Confidence score: %.2f", confidence)

        return ParsedEvent(
            title=title,
            start=start,
            end=end,
            description=text,
            confidence=confidence,
            date_rule=date_result.kind,
            time_rule=time_result.kind,
            duration_rule=duration_result.kind,
        )


def parse_event(
    text: str,
    now: datetime | None = None,
    config: EventParsingConfig | None = None,
) -> ParsedEvent:
    """Parse text into a calendar event with a one-off parser."""
    return EventParser(config=config).parse(text, now=now)
