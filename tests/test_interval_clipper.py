"""Tests for interval clipping and handling event detection."""
from datetime import date

from services.billing_types import BillingWindow, MovementRecord
from services.interval_clipper import clip, handling_events

JANUARY = BillingWindow(date(2024, 1, 1), date(2024, 1, 31))


def movement(date_in, date_out=None):
    return MovementRecord(
        id="m-1",
        container_id="MSCU1234565",
        client_id=1,
        size_class="40",
        date_in=date_in,
        date_out=date_out,
    )


def test_same_day_in_and_out_counts_one_day():
    interval = clip(movement(date(2024, 1, 15), date(2024, 1, 15)), JANUARY)

    assert interval.storage_days == 1
    assert not interval.malformed


def test_still_in_yard_for_whole_month():
    interval = clip(movement(date(2024, 1, 1)), JANUARY)

    assert interval.effective_in == date(2024, 1, 1)
    assert interval.effective_out == date(2024, 1, 31)
    assert interval.storage_days == 31


def test_clipped_at_window_start():
    interval = clip(movement(date(2023, 12, 15), date(2024, 1, 10)), JANUARY)

    assert interval.effective_in == date(2024, 1, 1)
    assert interval.effective_out == date(2024, 1, 10)
    assert interval.storage_days == 10


def test_clipped_at_window_end():
    interval = clip(movement(date(2024, 1, 20)), JANUARY)

    assert interval.effective_out == date(2024, 1, 31)
    assert interval.storage_days == 12


def test_gate_out_after_window_is_clipped_to_end():
    interval = clip(movement(date(2023, 11, 1), date(2024, 3, 1)), JANUARY)

    assert (interval.effective_in, interval.effective_out) == (date(2024, 1, 1), date(2024, 1, 31))
    assert interval.storage_days == 31


def test_gate_out_before_gate_in_is_zero_days():
    interval = clip(movement(date(2024, 1, 20), date(2024, 1, 5)), JANUARY)

    assert interval.storage_days == 0
    assert interval.malformed


def test_no_handling_when_present_throughout():
    assert handling_events(movement(date(2023, 12, 1)), JANUARY) == (False, False)


def test_handling_in_and_out_inside_window():
    assert handling_events(movement(date(2024, 1, 3), date(2024, 1, 9)), JANUARY) == (True, True)


def test_handling_on_window_boundaries():
    assert handling_events(movement(date(2024, 1, 1), date(2024, 1, 31)), JANUARY) == (True, True)
    assert handling_events(movement(date(2023, 12, 31), date(2024, 2, 1)), JANUARY) == (False, False)
