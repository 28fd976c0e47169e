"""Value objects passed between the billing stages."""
from dataclasses import dataclass, field, asdict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from constants import RATE_SOURCE_NONE
from exceptions import InvalidWindowError
from utils.date_helpers import parse_iso_date


@dataclass(frozen=True)
class BillingWindow:
    """Inclusive calendar-date range being billed."""

    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise InvalidWindowError(
                f"Billing window ends ({self.end_date}) before it starts ({self.start_date})"
            )

    @classmethod
    def from_strings(cls, start: str, end: str) -> "BillingWindow":
        """Build a window from two YYYY-MM-DD strings."""
        return cls(parse_iso_date(start, "start"), parse_iso_date(end, "end"))

    def contains(self, day: date) -> bool:
        """True if day falls inside the window, both ends included."""
        return self.start_date <= day <= self.end_date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class MovementRecord:
    """A container's stay in the yard, reduced to calendar dates."""

    id: str
    container_id: str
    client_id: Optional[int]
    size_class: str
    date_in: date
    date_out: Optional[date] = None
    container_type: Optional[str] = None
    client_code: Optional[str] = None
    client_name: Optional[str] = None

    @property
    def container_size(self) -> str:
        """Size and type as printed on reports, e.g. 40HC."""
        return f"{self.size_class}{self.container_type or ''}"


@dataclass(frozen=True)
class ClippedInterval:
    """A movement's presence interval truncated to the billing window."""

    effective_in: date
    effective_out: date
    storage_days: int
    malformed: bool = False


@dataclass(frozen=True)
class ResolvedRates:
    """Rates that apply to one (client, size) pair."""

    storage_rate: Decimal = Decimal("0.00")
    free_days: int = 0
    handling_rate: Decimal = Decimal("0.00")
    storage_source: str = RATE_SOURCE_NONE
    handling_source: str = RATE_SOURCE_NONE


ZERO_RATES = ResolvedRates()


@dataclass(frozen=True)
class ChargeLine:
    """Storage and handling charges for one movement."""

    movement_id: str
    container_id: str
    client_id: Optional[int]
    size_class: str
    date_in: date
    date_out: Optional[date]
    effective_in: date
    effective_out: date
    storage_days: int
    free_days: int
    billable_days: int
    storage_rate: Decimal
    storage_charge: Decimal
    handling_in: bool
    handling_out: bool
    handling_count: int
    handling_rate: Decimal
    handling_charge: Decimal
    total: Decimal
    container_type: Optional[str] = None
    client_code: Optional[str] = None
    client_name: Optional[str] = None

    @property
    def container_size(self) -> str:
        return f"{self.size_class}{self.container_type or ''}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["container_size"] = self.container_size
        return data


@dataclass(frozen=True)
class BillingSummary:
    """Totals over a set of charge lines."""

    total_storage_charge: Decimal
    total_handling_charge: Decimal
    total_charge: Decimal
    record_count: int
    total_storage_days: int = 0
    total_billable_days: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class BillingWarning:
    """Something worth a human look that did not stop the computation."""

    code: str
    message: str
    movement_id: Optional[str] = None
    container_id: Optional[str] = None
    client_id: Optional[int] = None
    size_class: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping unset fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass
class BillingResult:
    """Everything one billing run produced."""

    window: BillingWindow
    client_id: Optional[int]
    lines: List[ChargeLine]
    summary: BillingSummary
    warnings: List[BillingWarning] = field(default_factory=list)

    def audit_parameters(self) -> Dict[str, Any]:
        """Inputs of the run, for whoever records the audit trail."""
        return {
            "start_date": self.window.start_date.isoformat(),
            "end_date": self.window.end_date.isoformat(),
            "client_id": self.client_id,
            "record_count": self.summary.record_count,
        }
