"""Tests for selecting the movements a billing window covers."""
from datetime import date, datetime

import pytest
import pytz
from sqlalchemy.exc import OperationalError

from constants import GATE_STATUS_CANCELLED, GATE_STATUS_PRE_IN
from exceptions import StorageFailureError
from models import InventoryMovement
from repositories import MovementRepository
from services.billing_types import BillingWindow
from services.movement_selector import MovementSelector


@pytest.fixture
def window(january):
    return BillingWindow(*january)


def selected(db_session, window, client_id=None):
    return [m.container_no for m in MovementRepository(db_session).find_movements(window, client_id)]


def test_overlapping_movements_are_selected(db_session, add_movement, window):
    add_movement("IN_WINDOW", date(2024, 1, 10), date(2024, 1, 12))
    add_movement("OUT_IN_WINDOW", date(2023, 12, 1), date(2024, 1, 5))
    add_movement("SPANS_WINDOW", date(2023, 12, 1), date(2024, 2, 10))
    add_movement("STILL_IN_YARD", date(2023, 6, 1))
    add_movement("ENTERS_LAST_DAY", date(2024, 1, 31))
    add_movement("LEAVES_FIRST_DAY", date(2023, 12, 20), date(2024, 1, 1))

    assert selected(db_session, window) == [
        "ENTERS_LAST_DAY",
        "IN_WINDOW",
        "LEAVES_FIRST_DAY",
        "OUT_IN_WINDOW",
        "SPANS_WINDOW",
        "STILL_IN_YARD",
    ]


def test_movements_outside_window_are_skipped(db_session, add_movement, window):
    add_movement("LEFT_BEFORE", date(2023, 12, 1), date(2023, 12, 31))
    add_movement("ARRIVES_AFTER", date(2024, 2, 1))

    assert selected(db_session, window) == []


def test_only_gated_in_movements_are_candidates(db_session, add_movement, window):
    add_movement("PRE_ADVISED", date(2024, 1, 10), gate_status=GATE_STATUS_PRE_IN)
    add_movement("CANCELLED", date(2024, 1, 10), gate_status=GATE_STATUS_CANCELLED)
    add_movement("GATED_IN", date(2024, 1, 10))

    assert selected(db_session, window) == ["GATED_IN"]


def test_malformed_gate_out_inside_window_is_still_selected(db_session, add_movement, window):
    add_movement("DIRTY_ROW", date(2024, 2, 5), date(2024, 1, 15))

    assert selected(db_session, window) == ["DIRTY_ROW"]


def test_late_evening_timestamp_counts_by_calendar_day(db_session, add_movement, window):
    add_movement("LATE_ENTRY", datetime(2024, 1, 31, 23, 59, 59))
    add_movement("NEXT_MORNING", datetime(2024, 2, 1, 0, 0, 1))

    assert selected(db_session, window) == ["LATE_ENTRY"]


def test_client_filter(db_session, add_client, add_movement, window):
    acme = add_client(code="ACME")
    other = add_client(code="OTHER", name="Other Lines")
    add_movement("ACME_BOX", date(2024, 1, 5), client=acme)
    add_movement("OTHER_BOX", date(2024, 1, 5), client=other)

    assert selected(db_session, window, client_id=acme.id) == ["ACME_BOX"]


def test_repeat_visits_are_ordered_by_gate_in(db_session, add_movement, window):
    second = add_movement("SAME_BOX", date(2024, 1, 20))
    first = add_movement("SAME_BOX", date(2024, 1, 2), date(2024, 1, 8))

    rows = MovementRepository(db_session).find_movements(window)

    assert [row.id for row in rows] == [first.id, second.id]


def test_selector_builds_calendar_date_records(db_session, add_client, add_movement, window):
    client = add_client()
    row = add_movement("MSCU1234565", date(2024, 1, 3), date(2024, 1, 9), client=client, size="40HC", container_type=None)

    [record] = MovementSelector(db_session).select_movements(window)

    assert record.id == row.external_id
    assert record.size_class == "40"
    assert record.container_type == "HC"
    assert record.date_in == date(2024, 1, 3)
    assert record.date_out == date(2024, 1, 9)
    assert record.client_code == "ACME"


def test_selector_converts_aware_timestamps_to_yard_day(db_session):
    row = InventoryMovement(
        external_id="m-1",
        container_no="MSCU1234565",
        size="20",
        date_in=pytz.UTC.localize(datetime(2024, 1, 1, 3, 0)),
    )

    record = MovementSelector(db_session, timezone_str="America/New_York").to_record(row)

    assert record.date_in == date(2023, 12, 31)
    assert record.date_out is None


def test_unrecognised_size_does_not_stop_selection(db_session):
    row = InventoryMovement(external_id="m-2", container_no="X", size="N/A", date_in=datetime(2024, 1, 1))

    record = MovementSelector(db_session).to_record(row)

    assert record.size_class == "N/A"


def test_database_errors_become_storage_failures(db_session, window, monkeypatch):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "query", broken_query)

    with pytest.raises(StorageFailureError):
        MovementRepository(db_session).find_movements(window)


def test_select_capped_reports_truncation(db_session, add_movement, window):
    for n in range(3):
        add_movement(f"AAAU000000{n}", date(2024, 1, 5))

    records, truncated = MovementSelector(db_session, max_records=2).select_capped(window)
    full, not_truncated = MovementSelector(db_session, max_records=3).select_capped(window)

    assert [r.container_id for r in records] == ["AAAU0000000", "AAAU0000001"]
    assert truncated
    assert len(full) == 3
    assert not not_truncated
