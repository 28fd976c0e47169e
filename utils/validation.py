"""Validation utilities for data integrity."""
import re
from decimal import Decimal, InvalidOperation
from typing import Tuple

from exceptions import ValidationError

_SIZE_TYPE_PATTERN = re.compile(r'^\s*(\d+)\s*([A-Za-z]*)\s*$')


def split_size_type(size_type: str) -> Tuple[str, str]:
    """
    Split an ISO-style size/type code into its size and type parts.

    Example: "40HC" -> ("40", "HC"), "20" -> ("20", "")

    Raises:
        ValidationError: If the code does not start with a numeric size
    """
    if size_type is None:
        raise ValidationError("Container size cannot be empty")

    match = _SIZE_TYPE_PATTERN.match(str(size_type))
    if not match:
        raise ValidationError(f"Container size must look like 20, 40 or 40HC, got {size_type!r}")

    return match.group(1), match.group(2).upper()


def normalize_size_class(size_type: str) -> str:
    """
    Reduce a size/type code to the size used for rate lookups.

    Only the size drives rates; the type suffix is dropped.
    """
    return split_size_type(size_type)[0]


def validate_non_negative_amount(
    amount: Decimal | int | float | str,
    field_name: str = "Amount"
) -> Decimal:
    """
    Validate a money amount and return it as a Decimal.

    Args:
        amount: Amount to validate
        field_name: Name of field for error message

    Returns:
        Validated amount

    Raises:
        ValidationError: If amount is missing, not numeric or negative
    """
    if amount is None:
        raise ValidationError(f"{field_name} cannot be None")

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as e:
        raise ValidationError(f"{field_name} must be a number, got {amount!r}") from e

    if not value.is_finite() or value < 0:
        raise ValidationError(f"{field_name} must be non-negative, got {amount}")

    return value


def validate_days(days: int, field_name: str = "Days") -> int:
    """
    Validate number of days.

    Raises:
        ValidationError: If days is not a non-negative integer
    """
    if not isinstance(days, int) or isinstance(days, bool):
        raise ValidationError(f"{field_name} must be an integer, got {type(days)}")

    if days < 0:
        raise ValidationError(f"{field_name} must be non-negative, got {days}")

    return days
