"""Date and time normalization for reservations returned by the backend."""

import re
from datetime import date
from typing import Any, Callable, Optional

DATE_FORMAT = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_FORMAT = re.compile(r"\d\d:\d\d")


def today() -> str:
    return date.today().isoformat()


def format_as_date(value: Any) -> str:
    """Reduce a date or timestamp (e.g. "2023-01-01T00:00:00.000Z") to YYYY-MM-DD."""
    text = str(value)
    match = DATE_FORMAT.search(text)
    return match.group(0) if match else text


def format_as_time(value: Any) -> str:
    """Reduce a time (e.g. "18:30:00") to HH:MM."""
    text = str(value)
    match = TIME_FORMAT.search(text)
    return match.group(0) if match else text


def _format_field(reservations: Any, field: str, formatter: Callable[[Any], str]) -> Any:
    def format_one(reservation: Any) -> Any:
        if not isinstance(reservation, dict) or reservation.get(field) is None:
            return reservation
        return {**reservation, field: formatter(reservation[field])}

    if isinstance(reservations, list):
        return [format_one(reservation) for reservation in reservations]
    return format_one(reservations)


def format_reservation_date(reservations: Optional[Any]) -> Optional[Any]:
    """Normalize `reservation_date` on one reservation or a list of them."""
    return _format_field(reservations, "reservation_date", format_as_date)


def format_reservation_time(reservations: Optional[Any]) -> Optional[Any]:
    """Normalize `reservation_time` on one reservation or a list of them."""
    return _format_field(reservations, "reservation_time", format_as_time)
