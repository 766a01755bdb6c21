"""Seat availability shared by search results and booking-time enforcement.

Availability of a schedule is the capacity of its bus minus the seats held by
its ``Confirmed`` bookings. Every reader goes through :func:`availability_select`
so search listings and the booking check can never disagree.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, aliased, selectinload
from sqlalchemy.sql import Select

from ..db import models


@dataclass(slots=True)
class SeatAvailability:
    schedule_id: int
    total_seats: int
    booked_seats: int

    @property
    def available_seats(self) -> int:
        return max(self.total_seats - self.booked_seats, 0)


def booked_seats_expr():
    return func.coalesce(func.sum(models.Booking.seats), 0)


def availability_select(*columns) -> Select:
    """Schedules joined to their bus and confirmed bookings, grouped per schedule."""
    booked = booked_seats_expr()
    return (
        select(*columns, models.Bus.total_seats, booked.label("booked_seats"))
        .select_from(models.Schedule)
        .join(models.Bus, models.Schedule.bus_id == models.Bus.id)
        .outerjoin(
            models.Booking,
            and_(
                models.Booking.schedule_id == models.Schedule.id,
                models.Booking.status == models.BookingStatus.confirmed,
            ),
        )
        .group_by(models.Schedule.id, models.Bus.total_seats)
    )


def get_schedule_availability(db: Session, schedule_id: int) -> SeatAvailability | None:
    row = db.execute(
        availability_select(models.Schedule.id).where(models.Schedule.id == schedule_id)
    ).one_or_none()
    if row is None:
        return None
    schedule_id, total_seats, booked = row
    return SeatAvailability(
        schedule_id=schedule_id,
        total_seats=int(total_seats),
        booked_seats=int(booked),
    )


def get_availability_map(db: Session, schedule_ids: list[int]) -> dict[int, SeatAvailability]:
    if not schedule_ids:
        return {}
    rows = db.execute(
        availability_select(models.Schedule.id).where(models.Schedule.id.in_(schedule_ids))
    ).all()
    return {
        schedule_id: SeatAvailability(
            schedule_id=schedule_id,
            total_seats=int(total_seats),
            booked_seats=int(booked),
        )
        for schedule_id, total_seats, booked in rows
    }


def search_schedules(
    db: Session,
    *,
    from_city: str,
    to_city: str,
    travel_date: date,
    passengers: int = 1,
) -> list[tuple[models.Schedule, SeatAvailability]]:
    """Departures on ``travel_date`` with room for ``passengers``, earliest first."""
    origin = aliased(models.City)
    destination = aliased(models.City)
    day_start = datetime.combine(travel_date, time.min)
    day_end = day_start + timedelta(days=1)
    booked = booked_seats_expr()
    stmt = (
        availability_select(models.Schedule)
        .join(models.Route, models.Schedule.route_id == models.Route.id)
        .join(origin, models.Route.from_city_id == origin.id)
        .join(destination, models.Route.to_city_id == destination.id)
        .where(origin.name == from_city)
        .where(destination.name == to_city)
        .where(models.Schedule.departure_time >= day_start)
        .where(models.Schedule.departure_time < day_end)
        .having(models.Bus.total_seats - booked >= passengers)
        .order_by(models.Schedule.departure_time.asc(), models.Schedule.id.asc())
        .options(
            selectinload(models.Schedule.bus),
            selectinload(models.Schedule.route).selectinload(models.Route.from_city),
            selectinload(models.Schedule.route).selectinload(models.Route.to_city),
        )
    )
    results = []
    for schedule, total_seats, booked_seats in db.execute(stmt).all():
        results.append(
            (
                schedule,
                SeatAvailability(
                    schedule_id=schedule.id,
                    total_seats=int(total_seats),
                    booked_seats=int(booked_seats),
                ),
            )
        )
    return results
