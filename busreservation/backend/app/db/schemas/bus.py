from pydantic import Field
from ...core.constants import MAX_INT_VALUE
from .base import CamelModel


class BusCreate(CamelModel):
    bus_name: str = Field(min_length=1, max_length=128)
    bus_type: str = Field(default="AC", min_length=1, max_length=32)
    seat_type: str = Field(default="Seater", min_length=1, max_length=32)
    total_seats: int = Field(default=40, gt=0, le=MAX_INT_VALUE)


class BusCreated(CamelModel):
    message: str = "Bus created successfully"
    bus_id: int


class Bus(CamelModel):
    id: int
    bus_name: str
    bus_type: str
    seat_type: str
    total_seats: int
