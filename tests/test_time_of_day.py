"""
Tests for time-of-day parsing/formatting and request clamping.

Run: python -m pytest tests/test_time_of_day.py -v
"""

from datetime import datetime
import pytz
import pytest

from core import InvalidInput, format_time_of_day, seconds_from_datetime, seconds_from_hhmm
from models.data_models import BedtimeRecommendation, BedtimeRequest


class TestParsing:

    @pytest.mark.parametrize("text,expected", [
        ("00:00", 0),
        ("07:00", 25200),
        ("7:05", 25500),
        (" 22:30 ", 81000),
        ("23:59", 86340),
    ])
    def test_hhmm(self, text, expected):
        assert seconds_from_hhmm(text) == expected

    @pytest.mark.parametrize("text", ["24:00", "12:60", "7", "ab:cd", "07:00:00", "-1:00", "", 700])
    def test_bad_hhmm(self, text):
        with pytest.raises(InvalidInput):
            seconds_from_hhmm(text)

    def test_naive_datetime(self):
        assert seconds_from_datetime(datetime(2025, 3, 10, 7, 30, 45)) == 7 * 3600 + 30 * 60

    def test_aware_datetime_converted_to_timezone(self):
        moment = datetime(2025, 3, 10, 4, 0, tzinfo=pytz.utc)
        assert seconds_from_datetime(moment, 'Asia/Qatar') == 7 * 3600

    def test_naive_datetime_localized(self):
        tz = pytz.timezone('Europe/Rome')
        assert seconds_from_datetime(datetime(2025, 7, 1, 6, 15), tz) == 6 * 3600 + 15 * 60


class TestFormatting:

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"),
        (82440, "22:54"),
        (-3600, "23:00"),
        (86400 + 60, "00:01"),
        (86380, "00:00"),
    ])
    def test_24h(self, seconds, expected):
        assert format_time_of_day(seconds) == expected

    @pytest.mark.parametrize("seconds,expected", [
        (0, "12:00 AM"),
        (12 * 3600, "12:00 PM"),
        (82440, "10:54 PM"),
        (9 * 3600 + 5 * 60, "9:05 AM"),
    ])
    def test_12h(self, seconds, expected):
        assert format_time_of_day(seconds, "12h") == expected

    def test_unknown_clock(self):
        with pytest.raises(ValueError):
            format_time_of_day(0, "utc")


class TestBedtimeRequest:

    def test_default(self):
        assert BedtimeRequest.default() == BedtimeRequest(25200, 8.0, 0)

    def test_clamped_out_of_range(self):
        request = BedtimeRequest(90000, 3.1, 25).clamped()
        assert request == BedtimeRequest(3600, 4.0, 20)

    def test_clamped_negative_wake_wraps(self):
        request = BedtimeRequest(-60, 8.1, -2).clamped()
        assert request == BedtimeRequest(86340, 8.0, 0)

    def test_clamped_snaps_to_quarter_hours(self):
        assert BedtimeRequest(25200, 8.13, 2).clamped().sleep_goal_hours == 8.25

    @pytest.mark.parametrize("sleep_goal,coffee", [
        (float('nan'), float('nan')),
        (float('inf'), float('-inf')),
    ])
    def test_clamped_non_finite_uses_defaults(self, sleep_goal, coffee):
        request = BedtimeRequest(25200, sleep_goal, coffee).clamped()
        assert request == BedtimeRequest(25200, 8.0, 0)

    def test_clamped_non_finite_wake_uses_default(self):
        assert BedtimeRequest(float('nan'), 8.0, 1).clamped().wake_time_seconds == 25200

    def test_clamped_in_range_unchanged(self):
        request = BedtimeRequest(25200, 9.75, 3)
        assert request.clamped() == request


class TestBedtimeRecommendation:

    def test_formatting(self):
        rec = BedtimeRecommendation(BedtimeRequest.default(), 8.0, 82800.0)
        assert rec.bedtime == "23:00"
        assert rec.formatted("12h") == "11:00 PM"
        assert rec.message == "Your ideal bedtime is 23:00"
