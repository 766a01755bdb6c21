from pydantic import Field
from ...core.constants import MAX_INT_VALUE
from .base import CamelModel


class City(CamelModel):
    id: int
    name: str
    country: str
    state: str | None = None


class RouteSave(CamelModel):
    from_city: str = Field(min_length=1, max_length=128)
    to_city: str = Field(min_length=1, max_length=128)
    distance_km: int | None = Field(default=None, ge=0, le=MAX_INT_VALUE)
    from_country: str | None = None
    to_country: str | None = None
    from_state: str | None = None
    to_state: str | None = None


class Route(CamelModel):
    id: int
    from_city: str
    to_city: str
    distance_km: int | None = None
