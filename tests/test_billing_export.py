"""Tests for the billing CSV export."""
import csv
import io
from datetime import date
from decimal import Decimal

from constants import EXPORT_HEADERS
from services.billing_export import build_billing_csv, export_filename, format_money
from services.billing_types import BillingResult, BillingWindow, ChargeLine
from services.charge_calculator import ChargeCalculator

WINDOW = BillingWindow(date(2024, 1, 1), date(2024, 1, 31))


def line(container, date_in, date_out, storage_days, storage_charge, handling_in, handling_out):
    handling_count = int(handling_in) + int(handling_out)
    handling_charge = Decimal("250.00") * handling_count
    return ChargeLine(
        movement_id=container,
        container_id=container,
        client_id=1,
        size_class="40",
        container_type="HC",
        client_code="ACME",
        client_name="Acme Lines",
        date_in=date_in,
        date_out=date_out,
        effective_in=max(date_in, WINDOW.start_date),
        effective_out=min(date_out or WINDOW.end_date, WINDOW.end_date),
        storage_days=storage_days,
        free_days=0,
        billable_days=storage_days,
        storage_rate=Decimal("100.00"),
        storage_charge=Decimal(storage_charge),
        handling_in=handling_in,
        handling_out=handling_out,
        handling_count=handling_count,
        handling_rate=Decimal("250.00"),
        handling_charge=handling_charge,
        total=Decimal(storage_charge) + handling_charge,
    )


def result():
    lines = [
        line("AAAU1234560", date(2024, 1, 5), date(2024, 1, 7), 3, "300.00", True, True),
        line("BBBU1234560", date(2023, 12, 1), None, 31, "3100.00", False, False),
    ]
    return BillingResult(window=WINDOW, client_id=None, lines=lines, summary=ChargeCalculator.summarize(lines))


def rows():
    return list(csv.reader(io.StringIO(build_billing_csv(result()))))


def test_export_filename():
    assert export_filename(WINDOW) == "Billing_Report_2024-01-01_to_2024-01-31.csv"


def test_format_money():
    assert format_money(Decimal("3100")) == "3,100.00"
    assert format_money(Decimal("0.5")) == "0.50"


def test_header_and_rows():
    header, first, second = rows()[:3]

    assert header == EXPORT_HEADERS
    assert first[:6] == ["AAAU1234560", "40HC", "ACME", "Acme Lines", "2024-01-05", "2024-01-07"]
    assert first[12:] == ["250.00", "250.00", "500.00", "800.00"]
    assert second[5] == "In Yard"
    assert second[6] == "31"
    assert second[12:14] == ["0.00", "0.00"]


def test_totals_row():
    all_rows = rows()

    assert all_rows[3] == []
    totals = all_rows[4]
    assert totals[0] == "TOTALS"
    assert totals[2] == "Total Units: 2"
    assert totals[6] == "34"
    assert totals[10] == "3,400.00"
    assert totals[12:] == ["250.00", "250.00", "500.00", "3,900.00"]
