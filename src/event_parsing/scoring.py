"""Event assembly and confidence scoring.

Turns the resolver outputs into a concrete start/end instant pair and a
0-1 score describing how much structure was recovered from the text.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

from src.event_parsing.schemas import (
    DEFAULT_DURATION_MINUTES,
    DateCandidate,
    DateMatch,
    DurationCandidate,
    DurationMatch,
    TimeCandidate,
    TimeMatch,
)

DEFAULT_START_HOUR = 9

CONFIDENCE_WEIGHTS: dict[str, float] = {
    "date": 0.35,
    "time": 0.35,
    "duration": 0.20,
    "text_length": 0.10,
}
TEXT_LENGTH_BAND = (10, 200)
MIN_TEXT_LENGTH = 5


def assemble_start(
    now: datetime,
    date_result: DateCandidate,
    time_result: TimeCandidate,
) -> datetime:
    """
    Resolve the start instant.

    - Date found: that date at the resolved time, or 09:00.
    - Time only: today at that time, tomorrow if not after ``now``.
    - Neither: the top of the next hour.
    """
    if isinstance(date_result, DateMatch):
        if isinstance(time_result, TimeMatch):
            at = time(time_result.hours, time_result.minutes)
        else:
            at = time(DEFAULT_START_HOUR, 0)
        return datetime.combine(date_result.value, at, tzinfo=now.tzinfo)

    if isinstance(time_result, TimeMatch):
        start = now.replace(
            hour=time_result.hours, minute=time_result.minutes, second=0, microsecond=0
        )
        if start <= now:
            start += timedelta(days=1)
        return start

    return now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def resolve_length(duration_result: DurationCandidate) -> timedelta:
    """Length of the event, falling back to the one hour default."""
    if isinstance(duration_result, DurationMatch):
        return duration_result.delta
    return timedelta(minutes=DEFAULT_DURATION_MINUTES)


def assemble(
    now: datetime,
    date_result: DateCandidate,
    time_result: TimeCandidate,
    duration_result: DurationCandidate,
) -> tuple[datetime, datetime]:
    """Build the (start, end) pair for a parse."""
    start = assemble_start(now, date_result, time_result)
    try:
        end = start + resolve_length(duration_result)
    except OverflowError:
        # End falls past the last representable instant
        end = datetime.max.replace(tzinfo=start.tzinfo)
    return start, end


def compute_confidence(
    text: str,
    date_found: bool,
    time_found: bool,
    duration_found: bool,
) -> float:
    """
    Compute confidence score for a parsed event.

    +0.35 if a date was found.
    +0.35 if a start time was found.
    +0.20 if a duration or an explicit end time was found.
    +0.10 if the trimmed text is 10-200 characters, +0.05 if it is longer
    than 5 characters but outside that band.
    Capped at 1.0, rounded to two decimals.
    """
    score = 0.0
    if date_found:
        score += CONFIDENCE_WEIGHTS["date"]
    if time_found:
        score += CONFIDENCE_WEIGHTS["time"]
    if duration_found:
        score += CONFIDENCE_WEIGHTS["duration"]

    length = len(text.strip())
    low, high = TEXT_LENGTH_BAND
    if low <= length <= high:
        score += CONFIDENCE_WEIGHTS["text_length"]
    elif length > MIN_TEXT_LENGTH:
        score += CONFIDENCE_WEIGHTS["text_length"] * 0.5

    return min(1.0, round(score, 2))
