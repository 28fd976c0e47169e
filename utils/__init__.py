"""Utility modules."""
from utils.validation import (
    split_size_type,
    normalize_size_class,
    validate_non_negative_amount,
    validate_days,
)
from utils.date_helpers import (
    parse_iso_date,
    to_calendar_date,
    days_inclusive,
    day_bounds,
)

__all__ = [
    "split_size_type",
    "normalize_size_class",
    "validate_non_negative_amount",
    "validate_days",
    "parse_iso_date",
    "to_calendar_date",
    "days_inclusive",
    "day_bounds",
]
