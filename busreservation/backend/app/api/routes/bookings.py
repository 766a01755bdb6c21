from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from ...core.constants import PASSENGER_ACTOR
from ...db.session import get_db
from ...db import models, schemas
from ...services import booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


def booking_response(booking: models.Booking) -> schemas.Booking:
    result = schemas.Booking.model_validate(booking)
    result.status = booking.status.value
    schedule = booking.schedule
    if schedule is not None:
        result.departure_time = schedule.departure_time
        result.arrival_time = schedule.arrival_time
        if schedule.bus is not None:
            result.bus_name = schedule.bus.bus_name
        if schedule.route is not None:
            result.from_city = schedule.route.from_city.name
            result.to_city = schedule.route.to_city.name
    return result


def booking_http_error(exc: booking_service.BookingError) -> HTTPException:
    if isinstance(exc, booking_service.ScheduleNotFound):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (booking_service.ReferenceCollision, booking_service.StorageUnavailable)):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))


@router.post("", response_model=schemas.BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(payload: schemas.BookingCreate, db: Session = Depends(get_db)):
    try:
        booking = booking_service.create_booking(
            db,
            schedule_id=payload.schedule_id,
            passenger_name=payload.passenger_name,
            passenger_email=payload.passenger_email,
            passenger_phone=payload.passenger_phone,
            seats=payload.seats,
            amount=payload.amount,
        )
    except booking_service.BookingError as exc:
        raise booking_http_error(exc) from exc
    return schemas.BookingCreated(pnr=booking.pnr, booking_id=booking.id)


@router.get("", response_model=schemas.BookingList)
def list_bookings(
    email: str = Query(min_length=1),
    db: Session = Depends(get_db),
):
    bookings = booking_service.list_bookings_for_email(db, email)
    return schemas.BookingList(bookings=[booking_response(booking) for booking in bookings])


@router.get("/{pnr}", response_model=schemas.Booking)
def get_booking(pnr: str, db: Session = Depends(get_db)):
    booking = booking_service.get_booking_by_pnr(db, pnr)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking_response(booking)


@router.post("/{pnr}/cancel", response_model=schemas.Booking)
def cancel_booking(
    pnr: str,
    payload: schemas.BookingCancel,
    db: Session = Depends(get_db),
):
    booking = booking_service.get_booking_by_pnr(db, pnr)
    if not booking or booking.passenger_email.lower() != payload.passenger_email.lower():
        raise HTTPException(status_code=404, detail="Booking not found")
    try:
        booking = booking_service.cancel_booking(db, booking, actor=PASSENGER_ACTOR)
    except booking_service.BookingError as exc:
        raise booking_http_error(exc) from exc
    return booking_response(booking)
