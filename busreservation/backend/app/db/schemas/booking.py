from datetime import datetime
from decimal import Decimal
from pydantic import Field
from ...core.constants import MAX_INT_VALUE, MAX_SEATS_PER_REQUEST
from .base import CamelModel


class BookingCreate(CamelModel):
    schedule_id: int = Field(gt=0, le=MAX_INT_VALUE)
    passenger_name: str = Field(min_length=1, max_length=255)
    passenger_email: str = Field(min_length=3, max_length=255)
    passenger_phone: str | None = Field(default=None, max_length=32)
    seats: int = Field(ge=1, le=MAX_SEATS_PER_REQUEST)
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)


class BookingCreated(CamelModel):
    message: str = "Booking created"
    pnr: str
    booking_id: int


class BookingCancel(CamelModel):
    passenger_email: str = Field(min_length=3, max_length=255)


class Booking(CamelModel):
    id: int
    pnr: str
    status: str
    schedule_id: int
    passenger_name: str
    passenger_email: str
    passenger_phone: str | None = None
    seats: int
    amount: float
    created_at: datetime | None = None
    cancelled_at: datetime | None = None
    departure_time: datetime | None = None
    arrival_time: datetime | None = None
    from_city: str | None = None
    to_city: str | None = None
    bus_name: str | None = None


class BookingList(CamelModel):
    bookings: list[Booking]


class BookingStats(CamelModel):
    total: int
    confirmed: int
    cancelled: int
    seats_sold: int
    revenue: float
