"""Tests for Retry-After parsing."""

from datetime import UTC, datetime, timedelta
from email.utils import format_datetime

import pytest

from webpush_vapid.retry_after import parse_retry_after

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def test_delta_seconds():
    assert parse_retry_after("120") == timedelta(seconds=120)


def test_delta_seconds_with_whitespace():
    assert parse_retry_after(" 30 ") == timedelta(seconds=30)


def test_zero():
    assert parse_retry_after("0") == timedelta(0)


def test_http_date_in_future():
    value = "Mon, 01 Jan 2024 12:00:10 GMT"
    assert parse_retry_after(value, now=NOW) == timedelta(seconds=10)


def test_http_date_numeric_zone():
    value = "Mon, 01 Jan 2024 13:00:10 +0100"
    assert parse_retry_after(value, now=NOW) == timedelta(seconds=10)


def test_http_date_in_past_clamps_to_zero():
    value = "Mon, 01 Jan 2024 11:00:00 GMT"
    assert parse_retry_after(value, now=NOW) == timedelta(0)


def test_http_date_against_real_clock():
    value = format_datetime(datetime.now(UTC) + timedelta(seconds=10), usegmt=True)
    result = parse_retry_after(value)
    assert result is not None
    assert timedelta(seconds=8) <= result <= timedelta(seconds=10)


@pytest.mark.parametrize(
    "value",
    [None, "", "soon", "-5", "1.5", "Mon, 99 Foo 2024", "٣"],
)
def test_unparsable_is_none(value):
    assert parse_retry_after(value, now=NOW) is None


@pytest.mark.parametrize("value", ["9" * 30, "9" * 5000])
def test_oversized_delta_is_none(value):
    assert parse_retry_after(value) is None
