from datetime import datetime
from decimal import Decimal
from pydantic import Field
from ...core.constants import MAX_INT_VALUE
from .base import CamelModel


class ScheduleCreate(CamelModel):
    bus_id: int = Field(gt=0, le=MAX_INT_VALUE)
    from_city: str = Field(min_length=1, max_length=128)
    to_city: str = Field(min_length=1, max_length=128)
    departure_time: datetime
    arrival_time: datetime
    duration_minutes: int | None = Field(default=None, ge=0, le=MAX_INT_VALUE)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)


class ScheduleCreated(CamelModel):
    message: str = "Schedule created successfully"
    schedule_id: int


class Schedule(CamelModel):
    schedule_id: int
    bus_id: int
    name: str
    type: str
    seat_type: str
    departure_time: datetime
    arrival_time: datetime
    duration_minutes: int | None = None
    duration: str
    price: float
    available_seats: int
    total_seats: int
    from_city: str
    to_city: str


class ScheduleSearchResponse(CamelModel):
    schedules: list[Schedule]


class ScheduleAvailability(CamelModel):
    schedule_id: int
    total_seats: int
    booked_seats: int
    available_seats: int
