"""Shared fixtures for event parsing tests."""

import pytest

from src.event_parsing.config import EventParsingConfig
from src.event_parsing.parser import EventParser


@pytest.fixture
def parsing_config():
    """Default event parsing config."""
    return EventParsingConfig()


@pytest.fixture
def event_parser(parsing_config):
    """EventParser with default config."""
    return EventParser(config=parsing_config)


@pytest.fixture
def sample_event_texts():
    """Texts covering each kind of rule, used for invariant checks."""
    return [
        "Meeting with John tomorrow at 3pm",
        "Doctor appointment January 15, 2025 at 10:30 AM for 45 minutes",
        "Call mom",
        "Meeting at 2pm until 4pm",
        "2 hour workshop on React basics",
        "Dinner 6-8pm next friday",
        "Shift 10pm-2am",
        "Lunch with Sam at noon until 2",
        "Review on 03/15/2025",
        "Party 1/5 in the evening",
        "Trip 5 January",
        "Standup at 9 for half an hour",
        "Deploy at 15:45 for 0 hours",
        "Sync this monday at 7",
        "day after tomorrow 3 o'clock",
        "",
        "   ",
        "Good morning! Good night!",
        "x" * 300,
        "Archive for 100000000 hours",
        "Archive for " + "9" * 400 + " hours",
        "Deadline 9999-12-31 at 11:30pm",
        "12/31/9999 at 11pm for 2 hours",
    ]
