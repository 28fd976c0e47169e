"""Select the inventory movements that a billing window has to charge."""
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from config import get_settings
from exceptions import ValidationError
from models import InventoryMovement
from repositories.movement_repository import MovementRepository
from services.billing_types import BillingWindow, MovementRecord
from utils.date_helpers import to_calendar_date
from utils.validation import split_size_type
from logging_config import get_logger

logger = get_logger(__name__)


class MovementSelector:
    """Reads movements overlapping a window and reduces them to calendar dates."""

    def __init__(
        self,
        db: Session,
        max_records: Optional[int] = None,
        timezone_str: Optional[str] = None
    ):
        """
        Initialize selector.

        Args:
            db: Database session
            max_records: Cap on rows per run (default from settings)
            timezone_str: Yard timezone for aware timestamps (default from settings)
        """
        settings = get_settings()
        self.repository = MovementRepository(db)
        self.max_records = max_records or settings.billing_max_records
        self.timezone_str = timezone_str or settings.yard_timezone

    def select_movements(
        self,
        window: BillingWindow,
        client_id: Optional[int] = None
    ) -> List[MovementRecord]:
        """
        Get every gated-in movement whose stay overlaps the window.

        At most max_records movements are returned.

        Args:
            window: Billing window
            client_id: Restrict to one client

        Returns:
            Movement records in container number order

        Raises:
            StorageFailureError: If the inventory store cannot be read
        """
        records, _ = self.select_capped(window, client_id)
        return records

    def select_capped(
        self,
        window: BillingWindow,
        client_id: Optional[int] = None
    ) -> Tuple[List[MovementRecord], bool]:
        """
        Like select_movements, also saying whether the cap cut rows off.

        One row past the cap is fetched so a selection of exactly
        max_records rows is not reported as truncated.

        Returns:
            (records, truncated)
        """
        rows = self.repository.find_movements(window, client_id, limit=self.max_records + 1)
        truncated = len(rows) > self.max_records
        rows = rows[:self.max_records]

        logger.debug(
            "Selected movements",
            start_date=str(window.start_date),
            end_date=str(window.end_date),
            client_id=client_id,
            count=len(rows),
            truncated=truncated,
        )

        return [self.to_record(row) for row in rows], truncated

    def to_record(self, row: InventoryMovement) -> MovementRecord:
        """Convert an ORM row to a MovementRecord."""
        try:
            size_class, size_type = split_size_type(row.size)
        except ValidationError:
            # Unrated size; the resolver will find no rate and warn
            logger.warning("Unrecognised container size", container=row.container_no, size=row.size)
            size_class, size_type = (row.size or "").strip() or "N/A", ""
        client = row.client

        return MovementRecord(
            id=row.external_id,
            container_id=row.container_no,
            client_id=row.client_id,
            size_class=size_class,
            date_in=to_calendar_date(row.date_in, self.timezone_str),
            date_out=to_calendar_date(row.date_out, self.timezone_str) if row.date_out else None,
            container_type=row.container_type or size_type or None,
            client_code=client.client_code if client else None,
            client_name=client.client_name if client else None,
        )
