"""Tests for the reservations MCP tools."""

import asyncio
import json

import pytest

from reservation_client import api, server
from reservation_client.formatting import today
from reservation_client.transport import ApiError


class FakeOperation:
    """Stand-in for an api operation that records its arguments."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def __call__(self, *args):
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake(monkeypatch):
    def install(name, **kwargs):
        operation = FakeOperation(**kwargs)
        monkeypatch.setattr(api, name, operation)
        return operation

    return install


class TestReservationTools:
    """Test reservation tools."""

    def test_list_reservations_defaults_to_today(self, fake):
        operation = fake("list_reservations", result=[{"reservation_id": 1}])
        result = json.loads(asyncio.run(server.list_reservations()))
        assert result == [{"reservation_id": 1}]
        assert operation.calls == [({"date": today()},)]

    def test_list_reservations_for_date(self, fake):
        operation = fake("list_reservations", result=[])
        asyncio.run(server.list_reservations(date="2023-05-01"))
        assert operation.calls == [({"date": "2023-05-01"},)]

    def test_search_reservations(self, fake):
        operation = fake("list_reservations", result=[])
        asyncio.run(server.search_reservations("555-1212"))
        assert operation.calls == [({"mobile_number": "555-1212"},)]

    def test_create_reservation(self, fake):
        operation = fake("create_reservation", result={"reservation_id": 9, "status": "booked"})
        result = json.loads(asyncio.run(server.create_reservation(
            first_name="Ann",
            last_name="Lee",
            mobile_number="800-555-1212",
            reservation_date="2035-01-01",
            reservation_time="18:30",
            people=2,
        )))
        assert result["reservation_id"] == 9
        (reservation,) = operation.calls[0]
        assert reservation.first_name == "Ann"
        assert reservation.people == 2

    def test_create_reservation_rejects_empty_party(self, fake):
        operation = fake("create_reservation")
        result = json.loads(asyncio.run(server.create_reservation(
            first_name="Ann",
            last_name="Lee",
            mobile_number="800-555-1212",
            reservation_date="2035-01-01",
            reservation_time="18:30",
            people=0,
        )))
        assert "error" in result
        assert operation.calls == []

    def test_backend_error_is_returned(self, fake):
        fake("update_reservation_status", error=ApiError("reservation is already finished", 400))
        result = json.loads(asyncio.run(server.update_reservation_status(4, "seated")))
        assert result == {"error": "reservation is already finished"}

    def test_unexpected_error_is_returned(self, fake):
        fake("edit_reservation", error=RuntimeError("connection reset"))
        result = json.loads(asyncio.run(server.edit_reservation(
            reservation_id=4,
            first_name="Ann",
            last_name="Lee",
            mobile_number="800-555-1212",
            reservation_date="2035-01-01",
            reservation_time="18:30",
            people=2,
        )))
        assert result == {"error": "connection reset"}


class TestTableTools:
    """Test table tools."""

    def test_list_tables(self, fake):
        fake("list_tables", result=[{"table_id": 1, "table_name": "#1"}])
        assert json.loads(asyncio.run(server.list_tables())) == [{"table_id": 1, "table_name": "#1"}]

    def test_create_table(self, fake):
        operation = fake("create_table", result={"table_id": 2})
        asyncio.run(server.create_table("Bar #1", 1))
        (table,) = operation.calls[0]
        assert table.table_name == "Bar #1"
        assert table.capacity == 1

    def test_seat_reservation(self, fake):
        operation = fake("seat_reservation", result={"table_id": 7, "reservation_id": 3})
        asyncio.run(server.seat_reservation(3, 7))
        assert operation.calls == [(3, 7)]

    def test_finish_table(self, fake):
        fake("finish_table", result=None)
        assert json.loads(asyncio.run(server.finish_table(7))) is None
