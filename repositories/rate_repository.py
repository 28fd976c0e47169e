"""Repository for storage and handling rates."""
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import StorageFailureError
from models import RateKind, StorageRate, HandlingRate
from logging_config import get_logger
from utils.validation import normalize_size_class, validate_non_negative_amount, validate_days

logger = get_logger(__name__)

Rate = Union[StorageRate, HandlingRate]

_RATE_MODELS = {
    RateKind.STORAGE: StorageRate,
    RateKind.HANDLING: HandlingRate,
}


class RateRepository:
    """Lookups and maintenance for both rate tables."""

    def __init__(self, db: Session):
        """
        Initialize rate repository.

        Args:
            db: Database session
        """
        self.db = db

    def find_rate(
        self,
        client_id: Optional[int],
        size_class: str,
        kind: RateKind
    ) -> Optional[Rate]:
        """
        Get the rate row for exactly this client and size.

        client_id None (or 0) addresses the default rate for the size. No
        fallback happens here; that is the resolver's job.

        Args:
            client_id: Client ID, or None for the default rate
            size_class: Container size
            kind: Storage or handling

        Returns:
            Rate row or None
        """
        model = _RATE_MODELS[RateKind(kind)]

        try:
            query = self.db.query(model).filter(model.size == size_class)

            if client_id:
                query = query.filter(model.client_id == client_id)
            else:
                query = query.filter(or_(model.client_id.is_(None), model.client_id == 0))

            # Latest entry wins when a size was rated more than once
            return query.order_by(model.id.desc()).first()

        except SQLAlchemyError as e:
            logger.error(
                "Failed to read rate",
                kind=RateKind(kind).value,
                client_id=client_id,
                size=size_class,
                error=str(e),
            )
            raise StorageFailureError(f"Failed to read {RateKind(kind).value} rate") from e

    def set_rate(
        self,
        kind: RateKind,
        size: str,
        rate: Decimal | int | float | str,
        client_id: Optional[int] = None,
        free_days: int = 0,
    ) -> Rate:
        """
        Create or replace the rate for a client (or the default) and size.

        Args:
            kind: Storage or handling
            size: Container size, type suffix allowed
            rate: Amount per day (storage) or per event (handling)
            client_id: Client ID, or None for the default rate
            free_days: Free storage days, storage rates only

        Returns:
            Saved rate row
        """
        kind = RateKind(kind)
        model = _RATE_MODELS[kind]
        size_class = normalize_size_class(size)
        amount = validate_non_negative_amount(rate, f"{kind.value} rate")

        existing = self.find_rate(client_id, size_class, kind)

        try:
            if existing is None:
                existing = model(client_id=client_id or None, size=size_class)
                self.db.add(existing)

            existing.rate = amount
            if kind == RateKind.STORAGE:
                existing.free_days = validate_days(free_days, "Free days")

            self.db.commit()
            self.db.refresh(existing)

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to save rate", kind=kind.value, client_id=client_id, size=size_class, error=str(e))
            raise StorageFailureError(f"Failed to save {kind.value} rate") from e

        logger.info("Saved rate", kind=kind.value, client_id=client_id, size=size_class, rate=str(amount))
        return existing
