"""Resolve the storage and handling rates for a client and container size."""
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from constants import (
    RATE_SOURCE_CLIENT,
    RATE_SOURCE_DEFAULT,
    RATE_SOURCE_NONE,
    WARNING_RATE_NOT_CONFIGURED,
)
from models import RateKind
from repositories.rate_repository import RateRepository
from services.billing_types import BillingWarning, ResolvedRates
from logging_config import get_logger

logger = get_logger(__name__)

_ZERO = Decimal("0.00")


class RateResolver:
    """
    Two-level rate lookup: the client's own rate, then the default rate.

    When neither exists the rate is zero; the line is billed at zero and a
    RATE_NOT_CONFIGURED warning is recorded once per client, size and kind.
    Lookups are cached for the lifetime of the resolver, which is one
    billing run.
    """

    def __init__(self, rate_repository: RateRepository):
        self.rate_repository = rate_repository
        self.warnings: List[BillingWarning] = []
        self._cache: Dict[Tuple[Optional[int], str], ResolvedRates] = {}

    def resolve(self, client_id: Optional[int], size_class: str) -> ResolvedRates:
        """
        Get the rates for one client and size.

        Args:
            client_id: Client ID (None for stock without a client)
            size_class: Container size without type suffix

        Returns:
            Resolved rates, zero where nothing is configured

        Raises:
            StorageFailureError: If the rate store cannot be read
        """
        key = (client_id or None, size_class)
        if key not in self._cache:
            self._cache[key] = self._resolve(client_id or None, size_class)
        return self._cache[key]

    def _resolve(self, client_id: Optional[int], size_class: str) -> ResolvedRates:
        storage, storage_source = self._lookup(client_id, size_class, RateKind.STORAGE)
        handling, handling_source = self._lookup(client_id, size_class, RateKind.HANDLING)

        return ResolvedRates(
            storage_rate=_as_decimal(storage.rate) if storage else _ZERO,
            free_days=(storage.free_days or 0) if storage else 0,
            handling_rate=_as_decimal(handling.rate) if handling else _ZERO,
            storage_source=storage_source,
            handling_source=handling_source,
        )

    def _lookup(self, client_id: Optional[int], size_class: str, kind: RateKind):
        if client_id is not None:
            rate = self.rate_repository.find_rate(client_id, size_class, kind)
            if rate is not None:
                return rate, RATE_SOURCE_CLIENT

        rate = self.rate_repository.find_rate(None, size_class, kind)
        if rate is not None:
            return rate, RATE_SOURCE_DEFAULT

        message = f"No {kind.value} rate configured for size {size_class}"
        if client_id is not None:
            message += f" (client {client_id}, no default either)"

        logger.warning("Rate not configured", kind=kind.value, client_id=client_id, size=size_class)
        self.warnings.append(
            BillingWarning(
                code=WARNING_RATE_NOT_CONFIGURED,
                message=message,
                client_id=client_id,
                size_class=size_class,
            )
        )
        return None, RATE_SOURCE_NONE


def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))
