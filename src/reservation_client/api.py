"""Operations against the reservations backend.

Every operation builds one request and awaits `fetch_json`. A request
aborted through its signal resolves to an empty list.
"""

import json
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from reservation_client.cancellation import AbortSignal
from reservation_client.configuration import get_configuration
from reservation_client.formatting import format_reservation_date, format_reservation_time
from reservation_client.schemas import Reservation, ReservationFilter, ReservationStatus, Table
from reservation_client.transport import fetch_json

Payload = Union[BaseModel, Mapping[str, Any]]


def _api_url(path: str) -> str:
    return get_configuration().api_base_url.rstrip("/") + path


def _body(payload: Payload) -> str:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    return json.dumps({"data": dict(payload)}, separators=(",", ":"))


async def list_reservations(
    params: Optional[Union[ReservationFilter, Mapping[str, Any]]] = None,
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    Retrieve reservations, optionally filtered by date or mobile number.

    Returns:
        A possibly empty list of reservations with `reservation_date` and
        `reservation_time` normalized
    """
    url = httpx.URL(_api_url("/reservations"))
    if params:
        options = params if isinstance(params, ReservationFilter) else ReservationFilter.model_validate(params)
        url = url.copy_merge_params(options.to_query())

    reservations = await fetch_json(url, method="GET", signal=signal, on_cancel=[], client=client)
    return format_reservation_time(format_reservation_date(reservations))


async def create_reservation(
    reservation: Union[Reservation, Mapping[str, Any]],
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    url = _api_url("/reservations")
    return await fetch_json(url, method="POST", body=_body(reservation), signal=signal, on_cancel=[], client=client)


async def edit_reservation(
    reservation_id: Union[int, str],
    reservation: Union[Reservation, Mapping[str, Any]],
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Replace a reservation's details."""
    url = _api_url(f"/reservations/{reservation_id}")
    return await fetch_json(url, method="PUT", body=_body(reservation), signal=signal, on_cancel=[], client=client)


async def update_reservation_status(
    reservation_id: Union[int, str],
    status: ReservationStatus,
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Move a reservation between booked, seated, finished and cancelled."""
    url = _api_url(f"/reservations/{reservation_id}/status")
    body = _body({"status": status})
    return await fetch_json(url, method="PUT", body=body, signal=signal, on_cancel=[], client=client)


async def list_tables(
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    url = _api_url("/tables")
    return await fetch_json(url, method="GET", signal=signal, on_cancel=[], client=client)


async def create_table(
    table: Union[Table, Mapping[str, Any]],
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    url = _api_url("/tables")
    return await fetch_json(url, method="POST", body=_body(table), signal=signal, on_cancel=[], client=client)


async def seat_reservation(
    reservation_id: Union[int, str],
    table_id: Union[int, str],
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Occupy a table with a reservation."""
    url = _api_url(f"/tables/{table_id}/seat")
    body = _body({"reservation_id": reservation_id})
    return await fetch_json(url, method="PUT", body=body, signal=signal, on_cancel=[], client=client)


async def finish_table(
    table_id: Union[int, str],
    signal: Optional[AbortSignal] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """Free a table; the backend marks its reservation finished."""
    url = _api_url(f"/tables/{table_id}/seat")
    return await fetch_json(url, method="DELETE", signal=signal, on_cancel=[], client=client)
