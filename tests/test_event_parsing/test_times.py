"""Tests for TimeResolver."""

import pytest

from src.event_parsing.schemas import Absent, TimeMatch, TimeRangeMatch
from src.event_parsing.times import (
    TimeResolver,
    extract_time,
    extract_time_range,
    infer_business_hour,
    infer_range_start_hour,
    to_24_hour,
)


class TestMeridiemHelpers:
    """Tests for 12-hour conversion helpers."""

    @pytest.mark.parametrize(
        "hour,meridiem,expected",
        [
            (1, "am", 1),
            (12, "am", 0),
            (12, "pm", 12),
            (3, "PM", 15),
            (9, "a.m.", 9),
            (11, "p.m", 23),
        ],
    )
    def test_to_24_hour(self, hour, meridiem, expected):
        assert to_24_hour(hour, meridiem) == expected

    @pytest.mark.parametrize(
        "hour,expected",
        [(1, 13), (7, 19), (8, 8), (11, 11), (12, 12)],
    )
    def test_business_hour_boundary(self, hour, expected):
        assert infer_business_hour(hour) == expected

    @pytest.mark.parametrize(
        "start,end_hours,expected",
        [
            (6, 20, 18),   # 6-8pm
            (12, 14, 12),  # 12-2pm
            (11, 13, 11),  # 11-1pm crosses noon
            (11, 12, 11),  # 11-12pm
            (9, 9, 9),     # 9-9:15am
            (12, 1, 0),    # 12-1am
        ],
    )
    def test_infer_range_start_hour(self, start, end_hours, expected):
        assert infer_range_start_hour(start, end_hours) == expected


class TestTimeRange:
    """Tests for start/end ranges."""

    def test_shared_pm(self):
        result = extract_time_range("Dinner 6-8pm")
        assert result == TimeRangeMatch(18, 0, 20, 0)
        assert result.duration_minutes == 120

    def test_am_end_makes_start_am(self):
        result = extract_time_range("Standup 9-9:15am")
        assert result == TimeRangeMatch(9, 0, 9, 15)
        assert result.duration_minutes == 15

    def test_crosses_noon(self):
        result = extract_time_range("Lunch 11-1pm")
        assert (result.start_hours, result.end_hours) == (11, 13)
        assert result.duration_minutes == 120

    def test_noon_start(self):
        assert extract_time_range("Workshop 12-2pm") == TimeRangeMatch(12, 0, 14, 0)

    def test_to_separator(self):
        assert extract_time_range("Call 2pm to 4pm") == TimeRangeMatch(14, 0, 16, 0)

    def test_until_separator(self):
        assert extract_time_range("Meeting at 2pm until 4pm") == TimeRangeMatch(14, 0, 16, 0)

    def test_en_dash(self):
        assert extract_time_range("Party 9–11pm") == TimeRangeMatch(21, 0, 23, 0)

    def test_minutes_on_both_ends(self):
        result = extract_time_range("Review 10:30am - 12:15pm")
        assert result == TimeRangeMatch(10, 30, 12, 15)
        assert result.duration_minutes == 105

    def test_overnight(self):
        result = extract_time_range("Shift 10pm-2am")
        assert result == TimeRangeMatch(22, 0, 2, 0)
        assert result.duration_minutes == 240

    def test_end_meridiem_required(self):
        assert extract_time_range("Standup 9-10") == Absent()

    def test_invalid_hour_rejected(self):
        assert extract_time_range("Slot 13-14pm") == Absent()

    def test_start_is_time_match(self):
        assert extract_time_range("Dinner 6-8pm").start == TimeMatch(18, 0, "range")


class TestNamedTimes:
    """Tests for named times of day."""

    @pytest.mark.parametrize(
        "text,hours,kind",
        [
            ("Lunch at noon", 12, "noon"),
            ("Deploy at midnight", 0, "midnight"),
            ("Run in the morning", 9, "morning"),
            ("Tea this afternoon", 14, "afternoon"),
            ("Drinks in the evening", 18, "evening"),
            ("Movie at night", 20, "night"),
        ],
    )
    def test_named(self, text, hours, kind):
        assert extract_time(text) == TimeMatch(hours, 0, kind)

    def test_good_morning_excluded(self):
        assert extract_time("Good morning team") == Absent()

    def test_good_night_excluded(self):
        assert extract_time("Good night everyone") == Absent()

    def test_named_time_beats_explicit_time(self):
        assert extract_time("Tomorrow morning at 10am").kind == "morning"


class TestExplicitTimes:
    """Tests for 12-hour and 24-hour clock times."""

    @pytest.mark.parametrize(
        "text,hours,minutes",
        [
            ("Call at 3pm", 15, 0),
            ("Call at 10:30 AM", 10, 30),
            ("Call at 9:30 a.m.", 9, 30),
            ("Call at 12am", 0, 0),
            ("Call at 12pm", 12, 0),
            ("Call at 7 PM", 19, 0),
        ],
    )
    def test_twelve_hour(self, text, hours, minutes):
        assert extract_time(text) == TimeMatch(hours, minutes, "12-hour")

    def test_twelve_hour_invalid_hour(self):
        assert extract_time("Call at 13pm") == Absent()

    def test_twenty_four_hour(self):
        assert extract_time("Deploy at 15:45") == TimeMatch(15, 45, "24-hour")

    def test_twenty_four_hour_out_of_range(self):
        assert extract_time("Deploy at 25:00") == Absent()

    def test_twenty_four_hour_not_date_fragment(self):
        assert extract_time("Ref 1/12:30") == Absent()


class TestBareHours:
    """Tests for meridiem-less 'at N' and "N o'clock"."""

    @pytest.mark.parametrize(
        "text,hours",
        [
            ("Meet at 1", 13),
            ("Meet at 3", 15),
            ("Meet at 7", 19),
            ("Meet at 8", 8),
            ("Meet at 12", 12),
        ],
    )
    def test_at_number(self, text, hours):
        assert extract_time(text) == TimeMatch(hours, 0, "at-number")

    def test_at_number_out_of_range(self):
        assert extract_time("Meet at 13") == Absent()

    def test_at_number_not_date(self):
        assert extract_time("Meet at 3/4") == Absent()

    @pytest.mark.parametrize(
        "text,hours",
        [
            ("Call at 3 o'clock", 15),
            ("Call 9 oclock", 9),
            ("Call 10 o’clock", 10),
        ],
    )
    def test_oclock(self, text, hours):
        result = extract_time(text)
        assert result.hours == hours
        assert result.minutes == 0

    def test_oclock_kind(self):
        assert extract_time("Call 9 oclock").kind == "oclock"


class TestNoTime:
    """Tests for text without a time."""

    def test_absent(self):
        assert extract_time("Call mom") == Absent()
        assert extract_time_range("Call mom") == Absent()

    def test_rule_order(self):
        names = [rule.__name__ for rule in TimeResolver().rules]
        assert names == [
            "_try_named_time",
            "_try_twelve_hour",
            "_try_twenty_four_hour",
            "_try_at_hour",
            "_try_oclock",
        ]
