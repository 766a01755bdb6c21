from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session
from ...core.constants import MAX_INT_VALUE, MAX_SEATS_PER_REQUEST
from ...db.session import get_db
from ...db import models, schemas
from ...services import availability_service
from ...services.availability_service import SeatAvailability

router = APIRouter(prefix="/schedules", tags=["schedules"])


def format_duration(minutes: int | None) -> str:
    if not minutes:
        return ""
    return f"{minutes // 60}h {minutes % 60}m"


def schedule_response(
    schedule: models.Schedule, availability: SeatAvailability
) -> schemas.Schedule:
    return schemas.Schedule(
        schedule_id=schedule.id,
        bus_id=schedule.bus.id,
        name=schedule.bus.bus_name,
        type=schedule.bus.bus_type,
        seat_type=schedule.bus.seat_type,
        departure_time=schedule.departure_time,
        arrival_time=schedule.arrival_time,
        duration_minutes=schedule.duration_minutes,
        duration=format_duration(schedule.duration_minutes),
        price=float(schedule.price),
        available_seats=availability.available_seats,
        total_seats=availability.total_seats,
        from_city=schedule.route.from_city.name,
        to_city=schedule.route.to_city.name,
    )


@router.get("/search", response_model=schemas.ScheduleSearchResponse)
def search_schedules(
    from_city: str = Query(alias="from", min_length=1),
    to_city: str = Query(alias="to", min_length=1),
    travel_date: date = Query(alias="date"),
    passengers: int = Query(default=1, ge=1, le=MAX_SEATS_PER_REQUEST),
    db: Session = Depends(get_db),
):
    results = availability_service.search_schedules(
        db,
        from_city=from_city.strip(),
        to_city=to_city.strip(),
        travel_date=travel_date,
        passengers=passengers,
    )
    return schemas.ScheduleSearchResponse(
        schedules=[schedule_response(schedule, seats) for schedule, seats in results]
    )


@router.get("/{schedule_id}/availability", response_model=schemas.ScheduleAvailability)
def get_availability(
    schedule_id: int = Path(gt=0, le=MAX_INT_VALUE),
    db: Session = Depends(get_db),
):
    availability = availability_service.get_schedule_availability(db, schedule_id)
    if availability is None:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schemas.ScheduleAvailability(
        schedule_id=availability.schedule_id,
        total_seats=availability.total_seats,
        booked_seats=availability.booked_seats,
        available_seats=availability.available_seats,
    )
