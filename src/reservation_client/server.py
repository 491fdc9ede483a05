"""Restaurant Reservations MCP Server.

Exposes the reservations backend API as MCP tools: the dashboard listing for a
day, search by mobile number, reservation and table management.
"""

import json
import logging
import os
import sys
from typing import Any, Optional

from fastmcp import FastMCP
from pydantic import ValidationError

from reservation_client import api
from reservation_client.configuration import get_configuration
from reservation_client.formatting import today
from reservation_client.schemas import Reservation, ReservationStatus, Table
from reservation_client.transport import ApiError

logger = logging.getLogger(__name__)

mcp = FastMCP("Restaurant Reservations")


def _dump(result: Any) -> str:
    return json.dumps(result, indent=2)


async def _call(name: str, operation, *args) -> str:
    try:
        return _dump(await operation(*args))
    except (ApiError, ValidationError) as e:
        logger.warning(f"Rejected request in {name}: {e}")
        return json.dumps({"error": getattr(e, "message", str(e))})
    except Exception as e:
        logger.exception(f"Error in {name}: {e}")
        return json.dumps({"error": str(e)})


async def list_reservations(date: Optional[str] = None) -> str:
    """
    List the reservations booked for a day, as shown on the dashboard.

    Args:
        date: Day to list in YYYY-MM-DD format; defaults to today

    Returns:
        JSON string containing the day's reservations
    """
    date = date or today()
    logger.info(f"list_reservations called: date={date}")
    return await _call("list_reservations", api.list_reservations, {"date": date})


async def search_reservations(mobile_number: str) -> str:
    """
    Find reservations by the guest's mobile number.

    Args:
        mobile_number: Full or partial mobile number

    Returns:
        JSON string containing matching reservations
    """
    logger.info(f"search_reservations called: mobile_number={mobile_number}")
    return await _call("search_reservations", api.list_reservations, {"mobile_number": mobile_number})


async def create_reservation(
    first_name: str,
    last_name: str,
    mobile_number: str,
    reservation_date: str,
    reservation_time: str,
    people: int,
) -> str:
    """
    Book a new reservation.

    Args:
        first_name: Guest first name
        last_name: Guest last name
        mobile_number: Guest mobile number
        reservation_date: Date in YYYY-MM-DD format
        reservation_time: Time in HH:MM format
        people: Party size

    Returns:
        JSON string containing the created reservation
    """
    logger.info(f"create_reservation called: name={first_name} {last_name}, people={people}")
    try:
        reservation = Reservation(
            first_name=first_name,
            last_name=last_name,
            mobile_number=mobile_number,
            reservation_date=reservation_date,
            reservation_time=reservation_time,
            people=people,
        )
    except ValidationError as e:
        logger.warning(f"Validation error in create_reservation: {e}")
        return json.dumps({"error": str(e)})
    return await _call("create_reservation", api.create_reservation, reservation)


async def edit_reservation(
    reservation_id: int,
    first_name: str,
    last_name: str,
    mobile_number: str,
    reservation_date: str,
    reservation_time: str,
    people: int,
) -> str:
    """
    Replace the details of an existing reservation.

    Returns:
        JSON string containing the updated reservation
    """
    logger.info(f"edit_reservation called: reservation_id={reservation_id}")
    try:
        reservation = Reservation(
            reservation_id=reservation_id,
            first_name=first_name,
            last_name=last_name,
            mobile_number=mobile_number,
            reservation_date=reservation_date,
            reservation_time=reservation_time,
            people=people,
        )
    except ValidationError as e:
        logger.warning(f"Validation error in edit_reservation: {e}")
        return json.dumps({"error": str(e)})
    return await _call("edit_reservation", api.edit_reservation, reservation_id, reservation)


async def update_reservation_status(reservation_id: int, status: ReservationStatus) -> str:
    """
    Change a reservation's status.

    Args:
        reservation_id: Reservation identifier
        status: One of booked, seated, finished, cancelled

    Returns:
        JSON string containing the updated reservation
    """
    logger.info(f"update_reservation_status called: reservation_id={reservation_id}, status={status}")
    return await _call("update_reservation_status", api.update_reservation_status, reservation_id, status)


async def list_tables() -> str:
    """List all tables with their current occupancy."""
    logger.info("list_tables called")
    return await _call("list_tables", api.list_tables)


async def create_table(table_name: str, capacity: int) -> str:
    """
    Add a table.

    Args:
        table_name: Name shown on the dashboard
        capacity: Number of seats

    Returns:
        JSON string containing the created table
    """
    logger.info(f"create_table called: table_name={table_name}, capacity={capacity}")
    try:
        table = Table(table_name=table_name, capacity=capacity)
    except ValidationError as e:
        logger.warning(f"Validation error in create_table: {e}")
        return json.dumps({"error": str(e)})
    return await _call("create_table", api.create_table, table)


async def seat_reservation(reservation_id: int, table_id: int) -> str:
    """
    Seat a reservation at a table.

    Returns:
        JSON string containing the occupied table
    """
    logger.info(f"seat_reservation called: reservation_id={reservation_id}, table_id={table_id}")
    return await _call("seat_reservation", api.seat_reservation, reservation_id, table_id)


async def finish_table(table_id: int) -> str:
    """
    Free a table once its party has left. The seated reservation becomes finished.

    Returns:
        JSON string, null on success
    """
    logger.info(f"finish_table called: table_id={table_id}")
    return await _call("finish_table", api.finish_table, table_id)


READ_ONLY = {"readOnlyHint": True, "destructiveHint": False, "idempotentHint": True}
WRITE = {"readOnlyHint": False, "destructiveHint": False, "idempotentHint": False}
UPDATE = {"readOnlyHint": False, "destructiveHint": False, "idempotentHint": True}

for tool, annotations in (
    (list_reservations, READ_ONLY),
    (search_reservations, READ_ONLY),
    (list_tables, READ_ONLY),
    (create_reservation, WRITE),
    (create_table, WRITE),
    (edit_reservation, UPDATE),
    (update_reservation_status, UPDATE),
    (seat_reservation, UPDATE),
    (finish_table, UPDATE),
):
    mcp.tool(annotations=annotations)(tool)


def run_server():
    """Run the MCP server with configured transport."""
    config = get_configuration()
    logging.basicConfig(
        level=config.log_level,
        stream=sys.stdout,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    transport = os.getenv("MCP_TRANSPORT", "streamable-http")
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    logger.info(f"Starting Restaurant Reservations MCP Server on {host}:{port} with transport={transport}")
    logger.info(f"Backend API: {config.api_base_url}")

    mcp.run(transport=transport, host=host, port=port)


if __name__ == "__main__":
    run_server()
