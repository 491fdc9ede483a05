"""Client for the restaurant reservations backend API."""

from reservation_client.api import (
    create_reservation,
    create_table,
    edit_reservation,
    finish_table,
    list_reservations,
    list_tables,
    seat_reservation,
    update_reservation_status,
)
from reservation_client.cancellation import AbortController, AbortSignal
from reservation_client.transport import ApiError

__all__ = [
    "AbortController",
    "AbortSignal",
    "ApiError",
    "create_reservation",
    "create_table",
    "edit_reservation",
    "finish_table",
    "list_reservations",
    "list_tables",
    "seat_reservation",
    "update_reservation_status",
]
