"""Storage and handling charge calculation service."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from constants import WARNING_MALFORMED_INTERVAL, WARNING_RECORD_LIMIT_REACHED
from repositories.rate_repository import RateRepository
from services.billing_types import (
    BillingResult,
    BillingSummary,
    BillingWarning,
    BillingWindow,
    ChargeLine,
    MovementRecord,
)
from services.interval_clipper import clip, handling_events
from services.movement_selector import MovementSelector
from services.rate_resolver import RateResolver
from logging_config import get_logger

logger = get_logger(__name__)

_CENT = Decimal("0.01")
_ZERO = Decimal("0.00")


def round_money(value: Decimal) -> Decimal:
    """Round an amount to cents, halves away from zero."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class ChargeCalculator:
    """Calculate yard storage and handling charges for a billing window."""

    def __init__(
        self,
        db: Optional[Session] = None,
        selector: Optional[MovementSelector] = None,
        rate_repository: Optional[RateRepository] = None
    ):
        """
        Initialize calculator.

        Args:
            db: Database session used to build the default collaborators
            selector: Movement selector (for testing)
            rate_repository: Rate repository (for testing)
        """
        if db is None and (selector is None or rate_repository is None):
            raise ValueError("ChargeCalculator needs a session or both collaborators")

        self.selector = selector or MovementSelector(db)
        self.rate_repository = rate_repository or RateRepository(db)

    def compute_charge(
        self,
        movement: MovementRecord,
        window: BillingWindow,
        resolver: Optional[RateResolver] = None,
        warnings: Optional[List[BillingWarning]] = None
    ) -> ChargeLine:
        """
        Calculate the charge line for one movement.

        Storage: clipped inclusive days, less free days, times the daily
        rate. Handling: one event each for a gate-in and a gate-out inside
        the window. A malformed stay bills no storage and no handling. Each
        charge is rounded to cents after multiplying.

        Args:
            movement: Movement to charge
            window: Billing window
            resolver: Rate resolver to share across a run (default: a new one)
            warnings: List collecting malformed-interval warnings

        Returns:
            Charge line
        """
        resolver = resolver or RateResolver(self.rate_repository)

        interval = clip(movement, window)
        if interval.malformed:
            logger.warning(
                "Malformed interval billed as zero days and no handling",
                movement_id=movement.id,
                container=movement.container_id,
                date_in=str(movement.date_in),
                date_out=str(movement.date_out),
            )
            if warnings is not None:
                warnings.append(
                    BillingWarning(
                        code=WARNING_MALFORMED_INTERVAL,
                        message=(
                            f"Container {movement.container_id} gated out ({movement.date_out}) "
                            f"before it gated in ({movement.date_in})"
                        ),
                        movement_id=movement.id,
                        container_id=movement.container_id,
                        client_id=movement.client_id,
                    )
                )

        rates = resolver.resolve(movement.client_id, movement.size_class)

        billable_days = max(0, interval.storage_days - rates.free_days)
        storage_charge = round_money(billable_days * rates.storage_rate)

        if interval.malformed:
            handled_in = handled_out = False
        else:
            handled_in, handled_out = handling_events(movement, window)
        handling_count = int(handled_in) + int(handled_out)
        handling_charge = round_money(handling_count * rates.handling_rate)

        return ChargeLine(
            movement_id=movement.id,
            container_id=movement.container_id,
            client_id=movement.client_id,
            size_class=movement.size_class,
            date_in=movement.date_in,
            date_out=movement.date_out,
            effective_in=interval.effective_in,
            effective_out=interval.effective_out,
            storage_days=interval.storage_days,
            free_days=rates.free_days,
            billable_days=billable_days,
            storage_rate=rates.storage_rate,
            storage_charge=storage_charge,
            handling_in=handled_in,
            handling_out=handled_out,
            handling_count=handling_count,
            handling_rate=rates.handling_rate,
            handling_charge=handling_charge,
            total=storage_charge + handling_charge,
            container_type=movement.container_type,
            client_code=movement.client_code,
            client_name=movement.client_name,
        )

    @staticmethod
    def summarize(lines: Iterable[ChargeLine]) -> BillingSummary:
        """
        Total a set of charge lines.

        Sums are taken over the already-rounded line amounts so the summary
        always equals the sum of the printed lines.
        """
        total_storage = _ZERO
        total_handling = _ZERO
        total = _ZERO
        storage_days = 0
        billable_days = 0
        count = 0

        for line in lines:
            total_storage += line.storage_charge
            total_handling += line.handling_charge
            total += line.total
            storage_days += line.storage_days
            billable_days += line.billable_days
            count += 1

        return BillingSummary(
            total_storage_charge=total_storage,
            total_handling_charge=total_handling,
            total_charge=total,
            record_count=count,
            total_storage_days=storage_days,
            total_billable_days=billable_days,
        )

    def compute_billing(
        self,
        window: BillingWindow,
        client_id: Optional[int] = None
    ) -> BillingResult:
        """
        Calculate charges for every movement overlapping the window.

        Args:
            window: Billing window
            client_id: Restrict to one client

        Returns:
            Charge lines, summary and warnings

        Raises:
            StorageFailureError: If movements or rates cannot be read
        """
        logger.info(
            "Billing run started",
            start_date=str(window.start_date),
            end_date=str(window.end_date),
            client_id=client_id,
        )

        movements, truncated = self.selector.select_capped(window, client_id)
        resolver = RateResolver(self.rate_repository)
        warnings: List[BillingWarning] = []

        if truncated:
            logger.warning("Billing record limit reached", limit=self.selector.max_records)
            warnings.append(
                BillingWarning(
                    code=WARNING_RECORD_LIMIT_REACHED,
                    message=(
                        f"Only the first {self.selector.max_records} movements were billed; "
                        "narrow the window or filter by client"
                    ),
                )
            )

        lines = [
            self.compute_charge(movement, window, resolver, warnings)
            for movement in movements
        ]
        warnings.extend(resolver.warnings)

        summary = self.summarize(lines)

        logger.info(
            "Billing run completed",
            start_date=str(window.start_date),
            end_date=str(window.end_date),
            client_id=client_id,
            record_count=summary.record_count,
            total_charge=str(summary.total_charge),
            warnings=len(warnings),
        )

        return BillingResult(
            window=window,
            client_id=client_id,
            lines=lines,
            summary=summary,
            warnings=warnings,
        )
