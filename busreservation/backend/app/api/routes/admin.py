from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session
from ...core.constants import MAX_INT_VALUE
from ...api import deps
from ...db.session import get_db
from ...db import models, schemas
from ...services import booking_service, catalogue_service
from .bookings import booking_http_error, booking_response
from .schedules import schedule_response

router = APIRouter(prefix="/admin", tags=["admin"])

read_access = deps.require_roles(*deps.ADMIN_READ_ROLES)
write_access = deps.require_roles(*deps.ADMIN_WRITE_ROLES)


def route_response(route: models.Route) -> schemas.Route:
    return schemas.Route(
        id=route.id,
        from_city=route.from_city.name,
        to_city=route.to_city.name,
        distance_km=route.distance_km,
    )


@router.get("/cities", response_model=list[schemas.City])
def list_cities(db: Session = Depends(get_db), _: models.AdminUser = Depends(read_access)):
    return catalogue_service.list_cities(db)


@router.get("/routes", response_model=list[schemas.Route])
def list_routes(db: Session = Depends(get_db), _: models.AdminUser = Depends(read_access)):
    return [route_response(route) for route in catalogue_service.list_routes(db)]


@router.post("/routes", status_code=status.HTTP_201_CREATED)
def save_route(
    payload: schemas.RouteSave,
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(write_access),
):
    try:
        route = catalogue_service.save_route(db, **payload.model_dump())
    except catalogue_service.CatalogueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {"message": "Route saved successfully", "routeId": route.id}


@router.get("/buses", response_model=list[schemas.Bus])
def list_buses(db: Session = Depends(get_db), _: models.AdminUser = Depends(read_access)):
    return catalogue_service.list_buses(db)


@router.post("/buses", response_model=schemas.BusCreated, status_code=status.HTTP_201_CREATED)
def create_bus(
    payload: schemas.BusCreate,
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(write_access),
):
    try:
        bus = catalogue_service.create_bus(db, **payload.model_dump())
    except catalogue_service.CatalogueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return schemas.BusCreated(bus_id=bus.id)


@router.get("/schedules", response_model=list[schemas.Schedule])
def list_schedules(
    from_dt: datetime | None = None,
    to_dt: datetime | None = None,
    bus_id: int | None = Query(default=None, gt=0, le=MAX_INT_VALUE),
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(read_access),
):
    rows = catalogue_service.list_schedules(db, from_dt=from_dt, to_dt=to_dt, bus_id=bus_id)
    return [schedule_response(schedule, seats) for schedule, seats in rows]


@router.post("/schedules", response_model=schemas.ScheduleCreated, status_code=status.HTTP_201_CREATED)
def create_schedule(
    payload: schemas.ScheduleCreate,
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(write_access),
):
    try:
        schedule = catalogue_service.create_schedule(db, **payload.model_dump())
    except catalogue_service.CatalogueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return schemas.ScheduleCreated(schedule_id=schedule.id)


@router.get("/bookings", response_model=list[schemas.Booking])
def list_bookings(
    schedule_id: int | None = Query(default=None, gt=0, le=MAX_INT_VALUE),
    status_filter: models.BookingStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(read_access),
):
    bookings = booking_service.list_bookings(db, schedule_id=schedule_id, status=status_filter)
    return [booking_response(booking) for booking in bookings]


@router.get("/bookings/stats", response_model=schemas.BookingStats)
def booking_stats(db: Session = Depends(get_db), _: models.AdminUser = Depends(read_access)):
    return schemas.BookingStats(**booking_service.booking_stats(db))


@router.post("/bookings/{booking_id}/cancel", response_model=schemas.Booking)
def cancel_booking(
    booking_id: int = Path(gt=0, le=MAX_INT_VALUE),
    db: Session = Depends(get_db),
    admin: models.AdminUser = Depends(write_access),
):
    booking = db.get(models.Booking, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    try:
        booking = booking_service.cancel_booking(db, booking, actor=admin.login)
    except booking_service.BookingError as exc:
        raise booking_http_error(exc) from exc
    return booking_response(booking)
