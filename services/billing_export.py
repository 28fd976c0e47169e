"""CSV export of a billing run."""
import csv
import io
from decimal import Decimal

from constants import EXPORT_FILENAME_TEMPLATE, EXPORT_HEADERS, EXPORT_IN_YARD_LABEL
from services.billing_types import BillingResult, BillingWindow, ChargeLine


def format_money(amount: Decimal) -> str:
    """Two decimals with thousands separators, e.g. 1,234.50."""
    return f"{amount:,.2f}"


def export_filename(window: BillingWindow) -> str:
    """File name offered for download."""
    return EXPORT_FILENAME_TEMPLATE.format(
        start=window.start_date.isoformat(),
        end=window.end_date.isoformat(),
    )


def _row(line: ChargeLine) -> list:
    handling_in = line.handling_rate if line.handling_in else Decimal("0")
    handling_out = line.handling_rate if line.handling_out else Decimal("0")

    return [
        line.container_id,
        line.container_size,
        line.client_code or "",
        line.client_name or "",
        line.date_in.isoformat(),
        line.date_out.isoformat() if line.date_out else EXPORT_IN_YARD_LABEL,
        line.storage_days,
        line.free_days,
        line.billable_days,
        format_money(line.storage_rate),
        format_money(line.storage_charge),
        format_money(line.handling_rate),
        format_money(handling_in),
        format_money(handling_out),
        format_money(line.handling_charge),
        format_money(line.total),
    ]


def build_billing_csv(result: BillingResult) -> str:
    """
    Render a billing run as CSV.

    Header row, one row per charge line, a blank row, then a TOTALS row
    with the unit count, day totals and money totals.

    Args:
        result: Billing run to export

    Returns:
        CSV text
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(EXPORT_HEADERS)
    for line in result.lines:
        writer.writerow(_row(line))

    summary = result.summary
    total_in = sum(
        (line.handling_rate for line in result.lines if line.handling_in),
        Decimal("0"),
    )
    total_out = sum(
        (line.handling_rate for line in result.lines if line.handling_out),
        Decimal("0"),
    )

    writer.writerow([])
    writer.writerow([
        "TOTALS",
        "",
        f"Total Units: {summary.record_count}",
        "",
        "",
        "",
        summary.total_storage_days,
        "",
        summary.total_billable_days,
        "",
        format_money(summary.total_storage_charge),
        "",
        format_money(total_in),
        format_money(total_out),
        format_money(summary.total_handling_charge),
        format_money(summary.total_charge),
    ])

    return buffer.getvalue()
