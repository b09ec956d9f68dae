from datetime import datetime, timedelta, timezone

import pytest

from tracker import timefmt
from tracker.errors import ValidationError


def test_duration_overnight():
    span = timefmt.duration("2024-01-01T22:00:00Z", "2024-01-02T06:30:00Z")
    assert span == (8, 30, 510)
    assert span.total_minutes == 510


@pytest.mark.parametrize(
    "start,end",
    [
        ("2024-01-01T22:00:00Z", "2024-01-01T22:00:00Z"),
        ("2024-01-01T22:00:00Z", "2024-01-01T22:59:29Z"),
        ("2024-01-01T23:15:10Z", "2024-01-02T07:02:55Z"),
        ("2024-01-01T22:00:00Z", "2024-01-03T01:00:00Z"),
    ],
)
def test_total_minutes_is_rounded_span(start, end):
    ms = (timefmt.parse_timestamp(end) - timefmt.parse_timestamp(start)) / timedelta(milliseconds=1)
    assert timefmt.duration(start, end).total_minutes == timefmt.round_half_up(ms / 60000)


def test_half_minute_rounds_up():
    assert timefmt.duration("2024-01-01T00:00:00Z", "2024-01-01T00:00:30Z") == (0, 1, 1)
    assert timefmt.round_half_up(2.5) == 3
    assert timefmt.round_half_up(-0.5) == 0


def test_inverted_span_is_negative():
    assert timefmt.duration("2024-01-01T23:30:00Z", "2024-01-01T22:00:00Z") == (-2, -30, -90)


def test_canonical_form():
    assert timefmt.canonical("2024-01-01T22:00:00Z") == "2024-01-01T22:00:00.000Z"
    assert timefmt.canonical("2024-01-02T06:00:00.250+08:00") == "2024-01-01T22:00:00.250Z"
    assert timefmt.canonical(datetime(2024, 1, 1, 22, tzinfo=timezone.utc)) == "2024-01-01T22:00:00.000Z"


def test_bare_date_is_utc_midnight():
    assert timefmt.canonical("2024-01-07") == "2024-01-07T00:00:00.000Z"


@pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01T00:00:00"])
def test_invalid_timestamp(value):
    with pytest.raises(ValidationError):
        timefmt.canonical(value)


def test_canonical_strings_sort_in_time_order():
    stamps = ["2024-01-02T01:00:00+08:00", "2024-01-01T09:00:00Z", "2024-01-01T18:30:00Z"]
    ordered = sorted(stamps, key=timefmt.parse_timestamp)
    assert sorted(timefmt.canonical(s) for s in stamps) == [timefmt.canonical(s) for s in ordered]


def test_display_moment_uses_local_time():
    assert timefmt.display_moment("2024-03-05T07:45:00") == "03月05日07时"
    # a canonical UTC string is shown back in local time
    assert timefmt.display_moment(timefmt.canonical("2024-03-05T07:45:00")) == "03月05日07时"


def test_display_session_under_an_hour():
    text = timefmt.display_session("2024-03-05T07:00:00", "2024-03-05T07:45:00")
    assert text == "03月05日07时-03月05日07时 共睡了45分钟"


def test_display_session_whole_hours():
    text = timefmt.display_session("2024-03-04T23:00:00", "2024-03-05T07:00:00")
    assert text == "03月04日23时-03月05日07时 共睡了8小时"


def test_display_session_hours_and_minutes():
    text = timefmt.display_session("2024-03-04T22:00:00", "2024-03-05T06:30:00")
    assert text == "03月04日22时-03月05日06时 共睡了8小时30分钟"


def test_display_meal_and_local_date():
    assert timefmt.display_meal("2024-01-08T12:30:00", "午餐") == "01月08日12时 (午餐)"
    assert timefmt.local_date("2024-01-08T22:00:00") == "2024-01-08"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-01-01T22:00:00.5Z", "2024-01-01T22:00:00.500Z"),
        ("2024-01-01T22:00:00.12345Z", "2024-01-01T22:00:00.123Z"),
    ],
)
def test_canonical_accepts_short_and_long_fractions(value, expected):
    assert timefmt.canonical(value) == expected


def test_days_before_steps_back_on_the_local_calendar():
    # the span crosses the spring DST change in zones that have one
    moment = datetime(2024, 4, 10, 12, 0, tzinfo=timezone.utc)
    window_start = timefmt.parse_timestamp(timefmt.days_before(moment, 30)).astimezone()
    local_now = moment.astimezone()
    assert window_start.date() == (local_now - timedelta(days=30)).date()
    assert window_start.time() == local_now.time()


def test_days_before_out_of_range():
    moment = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
    with pytest.raises(ValidationError, match="days out of range"):
        timefmt.days_before(moment, 1_000_000)
