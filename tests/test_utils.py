"""Tests for date and validation helpers."""
from datetime import date, datetime
from decimal import Decimal

import pytest
import pytz

from exceptions import ValidationError
from utils.date_helpers import day_bounds, days_inclusive, to_calendar_date
from utils.validation import normalize_size_class, split_size_type, validate_days, validate_non_negative_amount


def test_days_inclusive():
    assert days_inclusive(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert days_inclusive(date(2024, 2, 1), date(2024, 2, 29)) == 29
    assert days_inclusive(date(2024, 1, 2), date(2024, 1, 1)) == 0


def test_day_bounds_cover_whole_days():
    start, after = day_bounds(date(2024, 1, 1), date(2024, 1, 31))

    assert start == datetime(2024, 1, 1)
    assert after == datetime(2024, 2, 1)


def test_aware_timestamp_uses_yard_calendar_day():
    late_utc = pytz.UTC.localize(datetime(2024, 1, 1, 2, 30))

    assert to_calendar_date(late_utc, "UTC") == date(2024, 1, 1)
    assert to_calendar_date(late_utc, "America/New_York") == date(2023, 12, 31)
    assert to_calendar_date(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)



def test_size_type_is_split():
    assert split_size_type("40HC") == ("40", "HC")
    assert split_size_type("20") == ("20", "")
    assert normalize_size_class("45hc") == "45"


def test_size_without_digits_is_rejected():
    with pytest.raises(ValidationError):
        normalize_size_class("N/A")


def test_amount_validation():
    assert validate_non_negative_amount("12.50") == Decimal("12.50")
    assert validate_non_negative_amount(0) == Decimal("0")

    with pytest.raises(ValidationError):
        validate_non_negative_amount(-1)
    with pytest.raises(ValidationError):
        validate_non_negative_amount("abc")


def test_days_validation():
    assert validate_days(3) == 3

    with pytest.raises(ValidationError):
        validate_days(-1)
    with pytest.raises(ValidationError):
        validate_days(1.5)
