"""Clip a container's yard stay to the billing window and count its days."""
from typing import Tuple

from services.billing_types import BillingWindow, ClippedInterval, MovementRecord
from utils.date_helpers import days_inclusive


def clip(movement: MovementRecord, window: BillingWindow) -> ClippedInterval:
    """
    Truncate a movement's presence interval to the window.

    A container still in the yard is billed up to the window end, never up
    to today. Storage days are counted inclusively: a container in and out
    on the same day is billed one day. A gate-out before the gate-in (after
    clipping) yields zero days and is flagged as malformed.

    Args:
        movement: Movement to clip
        window: Billing window

    Returns:
        Effective in/out dates and storage days
    """
    effective_in = max(movement.date_in, window.start_date)

    if movement.date_out is None:
        effective_out = window.end_date
    else:
        effective_out = min(movement.date_out, window.end_date)

    malformed = effective_in > effective_out

    return ClippedInterval(
        effective_in=effective_in,
        effective_out=effective_out,
        storage_days=days_inclusive(effective_in, effective_out),
        malformed=malformed,
    )


def handling_events(movement: MovementRecord, window: BillingWindow) -> Tuple[bool, bool]:
    """
    Which gate moves of this stay happened inside the window.

    Returns:
        (gate-in in window, gate-out in window)
    """
    handled_in = window.contains(movement.date_in)
    handled_out = movement.date_out is not None and window.contains(movement.date_out)
    return handled_in, handled_out
