"""Tests for convobot.utils."""

from datetime import datetime, timedelta

import pytz

from convobot.utils import (
    format_countdown,
    format_number,
    format_signed,
    format_time_ago,
    generate_profile_link,
    parse_iso_datetime,
    resolve_path,
)

NOW = datetime(2024, 10, 20, 12, 0, tzinfo=pytz.utc)


class TestParseIsoDatetime:
    """Tests for parse_iso_datetime()."""

    def test_espn_minute_precision(self):
        assert parse_iso_datetime("2024-10-20T17:00Z") == datetime(2024, 10, 20, 17, 0, tzinfo=pytz.utc)

    def test_offset_preserved(self):
        dt = parse_iso_datetime("2024-10-20T17:00:00+02:00")
        assert dt.utcoffset() == timedelta(hours=2)

    def test_naive_assumed_utc(self):
        assert parse_iso_datetime("2024-10-20T17:00:00").tzinfo is not None

    def test_invalid_and_empty(self):
        assert parse_iso_datetime("not a date") is None
        assert parse_iso_datetime("") is None
        assert parse_iso_datetime(None) is None

    def test_non_string_rejected(self):
        assert parse_iso_datetime(1700000000) is None
        assert parse_iso_datetime(["2024-10-20T17:00Z"]) is None


class TestFormatTimeAgo:
    """Tests for format_time_ago()."""

    def test_units(self):
        assert format_time_ago(NOW - timedelta(seconds=30), NOW) == "30s ago"
        assert format_time_ago(NOW - timedelta(minutes=5), NOW) == "5m ago"
        assert format_time_ago(NOW - timedelta(hours=3, minutes=59), NOW) == "3h ago"
        assert format_time_ago(NOW - timedelta(days=2, hours=1), NOW) == "2d ago"

    def test_future_clamped(self):
        assert format_time_ago(NOW + timedelta(seconds=10), NOW) == "0s ago"


class TestFormatCountdown:
    """Tests for format_countdown()."""

    def test_hours_and_minutes(self):
        assert format_countdown(NOW + timedelta(hours=2, minutes=5), NOW) == "2h 5m"

    def test_minutes_only(self):
        assert format_countdown(NOW + timedelta(minutes=45, seconds=30), NOW) == "45m"

    def test_zero(self):
        assert format_countdown(NOW, NOW) == "0m"

    def test_past_returns_none(self):
        assert format_countdown(NOW - timedelta(minutes=1), NOW) is None


class TestNumberFormatting:
    """Tests for format_number() and format_signed()."""

    def test_whole_float_drops_decimal(self):
        assert format_number(-110.0) == "-110"
        assert format_number(3.5) == "3.5"

    def test_signed(self):
        assert format_signed(150) == "+150"
        assert format_signed(-3.5) == "-3.5"
        assert format_signed(0) == "0"
        assert format_signed(7.0) == "+7"


class TestHelpers:
    """Tests for generate_profile_link() and resolve_path()."""

    def test_profile_link(self):
        assert generate_profile_link("42") == "(https://hackforums.net/member.php?action=profile&uid=42)"

    def test_profile_link_custom_template(self):
        assert generate_profile_link("7", "https://example.org/u/{uid}") == "(https://example.org/u/7)"

    def test_resolve_relative(self, tmp_path):
        assert resolve_path("logs/bot.log", tmp_path) == str((tmp_path / "logs" / "bot.log").resolve())

    def test_resolve_absolute(self, tmp_path):
        absolute = str(tmp_path / "bot.log")
        assert resolve_path(absolute, "/elsewhere") == absolute


class TestChatMessageFromEvent:
    """Tests for ChatMessage.from_event."""

    def test_username_from_directory(self):
        from convobot.models import ChatMessage
        message = ChatMessage.from_event({
            "uid": 42,
            "message": "/sports nfl",
            "users": {"42": {"username": "alice"}},
        })
        assert message.sender_id == "42"
        assert message.sender_name == "alice"
        assert message.content == "/sports nfl"

    def test_unknown_sender(self):
        from convobot.models import ChatMessage
        message = ChatMessage.from_event({"uid": "7", "message": "/commands", "users": {}})
        assert message.sender_name == "Unknown"
