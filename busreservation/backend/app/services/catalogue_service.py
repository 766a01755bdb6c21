from datetime import datetime
from decimal import Decimal
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, aliased, selectinload

from ..core.constants import DEFAULT_BUS_CAPACITY, MIN_SCHEDULE_DURATION_MINUTES
from ..db import models
from .availability_service import SeatAvailability, get_availability_map

logger = logging.getLogger(__name__)


class CatalogueError(Exception):
    pass


def ensure_city(
    db: Session,
    name: str,
    country: str | None = None,
    state: str | None = None,
) -> models.City:
    name = name.strip()
    city = db.execute(select(models.City).where(models.City.name == name)).scalar_one_or_none()
    if city:
        return city
    city = models.City(name=name, country=country or models.DEFAULT_COUNTRY, state=state)
    db.add(city)
    db.flush()
    logger.info("Created city", extra={"city": name})
    return city


def _get_or_create_route(
    db: Session, origin: models.City, destination: models.City
) -> tuple[models.Route, bool]:
    route = db.execute(
        select(models.Route).where(
            models.Route.from_city_id == origin.id,
            models.Route.to_city_id == destination.id,
        )
    ).scalar_one_or_none()
    if route:
        return route, False
    route = models.Route(from_city_id=origin.id, to_city_id=destination.id)
    db.add(route)
    db.flush()
    return route, True


def save_route(
    db: Session,
    *,
    from_city: str,
    to_city: str,
    distance_km: int | None = None,
    from_country: str | None = None,
    to_country: str | None = None,
    from_state: str | None = None,
    to_state: str | None = None,
) -> models.Route:
    """Create the route between two cities, or update its distance if it exists."""
    if from_city.strip() == to_city.strip():
        raise CatalogueError("fromCity and toCity must differ")
    origin = ensure_city(db, from_city, from_country, from_state)
    destination = ensure_city(db, to_city, to_country, to_state)
    route, _ = _get_or_create_route(db, origin, destination)
    route.distance_km = distance_km
    db.commit()
    db.refresh(route)
    return route


def list_cities(db: Session) -> list[models.City]:
    return list(db.execute(select(models.City).order_by(models.City.name)).scalars().all())


def list_routes(db: Session) -> list[models.Route]:
    origin = aliased(models.City)
    stmt = (
        select(models.Route)
        .join(origin, models.Route.from_city_id == origin.id)
        .options(selectinload(models.Route.from_city), selectinload(models.Route.to_city))
        .order_by(origin.name, models.Route.id)
    )
    return list(db.execute(stmt).scalars().all())


def create_bus(
    db: Session,
    *,
    bus_name: str,
    bus_type: str = "AC",
    seat_type: str = "Seater",
    total_seats: int = DEFAULT_BUS_CAPACITY,
) -> models.Bus:
    if total_seats <= 0:
        raise CatalogueError("totalSeats must be a positive integer")
    bus = models.Bus(
        bus_name=bus_name.strip(),
        bus_type=bus_type,
        seat_type=seat_type,
        total_seats=total_seats,
    )
    db.add(bus)
    db.commit()
    db.refresh(bus)
    logger.info("Created bus", extra={"bus_id": bus.id, "total_seats": total_seats})
    return bus


def list_buses(db: Session) -> list[models.Bus]:
    return list(db.execute(select(models.Bus).order_by(models.Bus.id)).scalars().all())


def _wall_clock(value: datetime) -> datetime:
    # schedules store the local wall-clock time as written by the operator
    return value.replace(tzinfo=None) if value.tzinfo else value


def _duration_minutes(departure_time: datetime, arrival_time: datetime) -> int:
    minutes = round((arrival_time - departure_time).total_seconds() / 60)
    return max(MIN_SCHEDULE_DURATION_MINUTES, minutes)


def create_schedule(
    db: Session,
    *,
    bus_id: int,
    from_city: str,
    to_city: str,
    departure_time: datetime,
    arrival_time: datetime,
    price: Decimal,
    duration_minutes: int | None = None,
) -> models.Schedule:
    departure_time = _wall_clock(departure_time)
    arrival_time = _wall_clock(arrival_time)
    bus = db.get(models.Bus, bus_id)
    if not bus:
        raise CatalogueError(
            f"Bus with ID {bus_id} does not exist. Please create the bus first."
        )
    if arrival_time <= departure_time:
        raise CatalogueError("arrivalTime must be after departureTime")
    if from_city.strip() == to_city.strip():
        raise CatalogueError("fromCity and toCity must differ")
    origin = ensure_city(db, from_city)
    destination = ensure_city(db, to_city)
    route, _ = _get_or_create_route(db, origin, destination)
    if duration_minutes is None:
        duration_minutes = _duration_minutes(departure_time, arrival_time)
    schedule = models.Schedule(
        bus_id=bus.id,
        route_id=route.id,
        departure_time=departure_time,
        arrival_time=arrival_time,
        duration_minutes=duration_minutes,
        price=price,
    )
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    logger.info(
        "Created schedule",
        extra={"schedule_id": schedule.id, "bus_id": bus.id, "route_id": route.id},
    )
    return schedule


def list_schedules(
    db: Session,
    *,
    from_dt: datetime | None = None,
    to_dt: datetime | None = None,
    bus_id: int | None = None,
) -> list[tuple[models.Schedule, SeatAvailability]]:
    stmt = select(models.Schedule).options(
        selectinload(models.Schedule.bus),
        selectinload(models.Schedule.route).selectinload(models.Route.from_city),
        selectinload(models.Schedule.route).selectinload(models.Route.to_city),
    )
    if from_dt:
        stmt = stmt.where(models.Schedule.departure_time >= from_dt)
    if to_dt:
        stmt = stmt.where(models.Schedule.departure_time <= to_dt)
    if bus_id:
        stmt = stmt.where(models.Schedule.bus_id == bus_id)
    schedules = list(
        db.execute(stmt.order_by(models.Schedule.departure_time, models.Schedule.id)).scalars().all()
    )
    availability = get_availability_map(db, [schedule.id for schedule in schedules])
    return [(schedule, availability[schedule.id]) for schedule in schedules]
