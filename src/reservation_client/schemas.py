"""Data models for the reservations backend API."""

from datetime import date as Date
from typing import Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


ReservationStatus = Literal["booked", "seated", "finished", "cancelled"]


class Reservation(BaseModel):
    """Restaurant reservation as stored by the backend."""

    model_config = ConfigDict(extra="allow")

    reservation_id: Optional[int] = Field(None, description="Backend reservation identifier")
    first_name: Optional[str] = Field(None, description="Guest first name")
    last_name: Optional[str] = Field(None, description="Guest last name")
    mobile_number: Optional[str] = Field(None, description="Guest mobile number")
    reservation_date: Optional[str] = Field(None, description="Reservation date (YYYY-MM-DD)")
    reservation_time: Optional[str] = Field(None, description="Reservation time (HH:MM)")
    people: Optional[int] = Field(None, ge=1, description="Number of guests")
    status: ReservationStatus = Field(default="booked", description="Reservation status")


class Table(BaseModel):
    """Dining table that reservations are seated at."""

    model_config = ConfigDict(extra="allow")

    table_id: Optional[int] = Field(None, description="Backend table identifier")
    table_name: Optional[str] = Field(None, description="Table name shown on the dashboard")
    capacity: Optional[int] = Field(None, ge=1, description="Seats at the table")
    reservation_id: Optional[int] = Field(None, description="Reservation currently seated, if any")


class ReservationFilter(BaseModel):
    """Query options accepted by the reservation listing."""

    model_config = ConfigDict(extra="forbid")

    date: Optional[Date] = Field(None, description="Only reservations on this date")
    mobile_number: Optional[str] = Field(None, description="Only reservations matching this mobile number")

    def to_query(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.model_dump(exclude_none=True).items()}


class DataEnvelope(BaseModel):
    """Successful backend response."""

    data: Any = None


class ErrorEnvelope(BaseModel):
    """Backend response reporting a failure."""

    error: str


Envelope = Union[DataEnvelope, ErrorEnvelope]


def parse_envelope(payload: Any) -> Envelope:
    """Classify a decoded response body.

    A truthy `error` wins even when `data` is also present. Bodies that are
    not JSON objects carry no data.
    """
    if not isinstance(payload, dict):
        return DataEnvelope()
    if payload.get("error"):
        return ErrorEnvelope(error=str(payload["error"]))
    return DataEnvelope(data=payload.get("data"))
