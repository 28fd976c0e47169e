"""Repository for yard inventory movements."""
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from constants import GATE_STATUS_IN
from exceptions import StorageFailureError
from models import InventoryMovement
from repositories.base import BaseRepository
from logging_config import get_logger
from utils.date_helpers import day_bounds

logger = get_logger(__name__)


class MovementRepository(BaseRepository[InventoryMovement]):
    """Repository for inventory movement database operations."""

    def __init__(self, db: Session):
        """
        Initialize movement repository.

        Args:
            db: Database session
        """
        super().__init__(InventoryMovement, db)

    def find_movements(
        self,
        window,
        client_id: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[InventoryMovement]:
        """
        Get gated-in movements whose yard stay touches the billing window.

        A movement is returned when its gate-in or gate-out falls in the
        window, when it spans the whole window, or when it is still in the
        yard having entered on or before the window end.

        Args:
            window: BillingWindow to overlap
            client_id: Restrict to one client
            limit: Maximum number of rows

        Returns:
            Movements ordered by container number, gate-in and id
        """
        window_start, after_window = day_bounds(window.start_date, window.end_date)
        date_in = InventoryMovement.date_in
        date_out = InventoryMovement.date_out

        overlaps = or_(
            and_(date_in >= window_start, date_in < after_window),
            and_(date_out >= window_start, date_out < after_window),
            and_(date_in < window_start, or_(date_out >= after_window, date_out.is_(None))),
            and_(date_out.is_(None), date_in < after_window),
        )

        try:
            query = (
                self.db.query(InventoryMovement)
                .options(joinedload(InventoryMovement.client))
                .filter(InventoryMovement.gate_status == GATE_STATUS_IN)
                .filter(overlaps)
            )

            if client_id is not None:
                query = query.filter(InventoryMovement.client_id == client_id)

            query = query.order_by(
                InventoryMovement.container_no.asc(),
                InventoryMovement.date_in.asc(),
                InventoryMovement.id.asc(),
            )

            if limit:
                query = query.limit(limit)

            return query.all()

        except SQLAlchemyError as e:
            logger.error(
                "Failed to select movements",
                start_date=str(window.start_date),
                end_date=str(window.end_date),
                client_id=client_id,
                error=str(e),
            )
            raise StorageFailureError("Failed to read inventory movements") from e
