"""Seat arithmetic for events.

These functions never cache: callers pass a booking count read from the store
in the same request that makes the booking decision.
"""

from __future__ import annotations


def available_seats(capacity: int, active_booking_count: int) -> int:
    """Seats left for an event.

    Not clamped: a negative value means the event was over-filled.
    """
    return capacity - active_booking_count


def is_full(capacity: int, active_booking_count: int) -> bool:
    return available_seats(capacity, active_booking_count) <= 0


def displayed_seats(capacity: int, active_booking_count: int) -> int:
    return max(0, available_seats(capacity, active_booking_count))
