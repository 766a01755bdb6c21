from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
import logging
import secrets
import threading
import weakref

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, selectinload

from ..config import get_settings
from ..core.constants import PNR_MAX_ATTEMPTS, PNR_RANDOM_BYTES
from ..db import models
from ..db.models.booking import BookingStatus
from .availability_service import get_schedule_availability

logger = logging.getLogger(__name__)

PNR_CONSTRAINT = "uq_bookings_pnr"
CENT = Decimal("0.01")


class BookingError(Exception):
    pass


class BookingValidationError(BookingError):
    pass


class ScheduleNotFound(BookingError):
    pass


class CapacityExceeded(BookingError):
    pass


class ReferenceCollision(BookingError):
    pass


class StorageUnavailable(BookingError):
    pass


_locks_guard = threading.Lock()
# Entries disappear once no request holds the lock
_schedule_locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()


def _schedule_lock(schedule_id: int) -> threading.Lock:
    with _locks_guard:
        lock = _schedule_locks.get(schedule_id)
        if lock is None:
            lock = _schedule_locks[schedule_id] = threading.Lock()
        return lock


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_pnr() -> str:
    return secrets.token_hex(PNR_RANDOM_BYTES).upper()


def _is_pnr_conflict(exc: IntegrityError) -> bool:
    constraint = getattr(getattr(exc.orig, "diag", None), "constraint_name", None)
    if constraint:
        return constraint == PNR_CONSTRAINT
    # sqlite reports the column instead of the constraint name
    return "bookings.pnr" in str(exc.orig)


def _release_transaction(db: Session) -> None:
    # Ends the read transaction opened by earlier queries; unflushed changes are discarded
    if db.in_transaction():
        db.rollback()


def _validate_request(
    passenger_name: str, passenger_email: str, seats: int, amount: Decimal | int | float | str
) -> Decimal:
    if not passenger_name or not passenger_name.strip():
        raise BookingValidationError("Passenger name is required")
    if not passenger_email or not passenger_email.strip():
        raise BookingValidationError("Passenger email is required")
    if isinstance(seats, bool) or not isinstance(seats, int) or seats < 1:
        raise BookingValidationError("Seats must be a positive integer")
    if amount is None:
        raise BookingValidationError("Amount is required")
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise BookingValidationError("Amount must be a number") from exc
    if not value.is_finite() or value <= 0:
        raise BookingValidationError("Amount must be positive")
    return value.quantize(CENT)


def _verify_amount(schedule: models.Schedule, seats: int, amount: Decimal) -> None:
    expected = (Decimal(schedule.price) * seats).quantize(CENT)
    if amount != expected:
        raise BookingValidationError(
            f"Amount does not match fare: expected {expected} for {seats} seat(s)"
        )


def _lock_schedule(db: Session, schedule_id: int) -> models.Schedule:
    schedule = db.execute(
        select(models.Schedule)
        .where(models.Schedule.id == schedule_id)
        .with_for_update()
    ).scalar_one_or_none()
    if schedule is None:
        raise ScheduleNotFound("Schedule not found")
    return schedule


def create_booking(
    db: Session,
    *,
    schedule_id: int,
    passenger_name: str,
    passenger_email: str,
    seats: int,
    amount: Decimal,
    passenger_phone: str | None = None,
) -> models.Booking:
    """Reserve ``seats`` on a schedule and return the confirmed booking.

    The capacity check and the insert run in one transaction while holding
    both the in-process lock for the schedule and a row lock on it, so two
    requests for the last seats cannot both succeed. Any failure leaves the
    ledger untouched. Uncommitted changes pending on ``db`` are discarded.
    """
    amount = _validate_request(passenger_name, passenger_email, seats, amount)
    verify_amount = get_settings().verify_booking_amount
    try:
        known = db.get(models.Schedule, schedule_id) is not None
    except OperationalError as exc:
        logger.exception("Storage unavailable while booking", extra={"schedule_id": schedule_id})
        raise StorageUnavailable("Storage unavailable, please retry") from exc
    if not known:
        raise ScheduleNotFound("Schedule not found")

    lock = _schedule_lock(schedule_id)
    with lock:
        for attempt in range(1, PNR_MAX_ATTEMPTS + 1):
            try:
                _release_transaction(db)
                with db.begin():
                    schedule = _lock_schedule(db, schedule_id)
                    if verify_amount:
                        _verify_amount(schedule, seats, amount)
                    availability = get_schedule_availability(db, schedule.id)
                    if seats > availability.available_seats:
                        logger.info(
                            "Booking rejected, not enough seats",
                            extra={
                                "schedule_id": schedule_id,
                                "requested": seats,
                                "available": availability.available_seats,
                            },
                        )
                        raise CapacityExceeded("Not enough seats available")
                    booking = models.Booking(
                        schedule_id=schedule.id,
                        passenger_name=passenger_name.strip(),
                        passenger_email=passenger_email.strip(),
                        passenger_phone=passenger_phone or None,
                        seats=seats,
                        amount=amount,
                        pnr=generate_pnr(),
                        status=BookingStatus.confirmed,
                    )
                    db.add(booking)
            except IntegrityError as exc:
                db.rollback()
                if not _is_pnr_conflict(exc):
                    raise
                logger.warning(
                    "PNR collision, retrying",
                    extra={"schedule_id": schedule_id, "attempt": attempt},
                )
                continue
            except OperationalError as exc:
                logger.exception("Storage unavailable while booking", extra={"schedule_id": schedule_id})
                raise StorageUnavailable("Storage unavailable, please retry") from exc
            logger.info(
                "Booking created",
                extra={"schedule_id": schedule_id, "booking_id": booking.id, "seats": seats},
            )
            return booking

    raise ReferenceCollision(f"Could not allocate a unique PNR after {PNR_MAX_ATTEMPTS} attempts")


def cancel_booking(db: Session, booking: models.Booking, actor: str) -> models.Booking:
    schedule_id = booking.schedule_id
    booking_id = booking.id
    lock = _schedule_lock(schedule_id)
    with lock:
        try:
            _release_transaction(db)
            with db.begin():
                locked = db.execute(
                    select(models.Booking)
                    .where(models.Booking.id == booking_id)
                    .with_for_update()
                ).scalar_one()
                if locked.status != BookingStatus.confirmed:
                    raise BookingError("Cannot cancel")
                locked.status = BookingStatus.cancelled
                locked.cancelled_at = _utc_now()
                locked.cancelled_by = actor
        except OperationalError as exc:
            logger.exception("Storage unavailable while cancelling", extra={"booking_id": booking_id})
            raise StorageUnavailable("Storage unavailable, please retry") from exc
    db.refresh(locked)
    logger.info(
        "Booking cancelled",
        extra={"schedule_id": schedule_id, "booking_id": booking_id, "actor": actor},
    )
    return locked


def get_booking_by_pnr(db: Session, pnr: str) -> models.Booking | None:
    return db.execute(
        select(models.Booking).where(models.Booking.pnr == pnr.strip().upper())
    ).scalar_one_or_none()


def _with_display(stmt):
    return stmt.options(
        selectinload(models.Booking.schedule).selectinload(models.Schedule.bus),
        selectinload(models.Booking.schedule)
        .selectinload(models.Schedule.route)
        .selectinload(models.Route.from_city),
        selectinload(models.Booking.schedule)
        .selectinload(models.Schedule.route)
        .selectinload(models.Route.to_city),
    )


def list_bookings_for_email(db: Session, email: str) -> list[models.Booking]:
    stmt = (
        select(models.Booking)
        .where(func.lower(models.Booking.passenger_email) == email.strip().lower())
        .order_by(models.Booking.created_at.desc(), models.Booking.id.desc())
    )
    return list(db.execute(_with_display(stmt)).scalars().all())


def list_bookings(
    db: Session,
    *,
    schedule_id: int | None = None,
    status: BookingStatus | None = None,
) -> list[models.Booking]:
    stmt = select(models.Booking).order_by(
        models.Booking.created_at.desc(), models.Booking.id.desc()
    )
    if schedule_id:
        stmt = stmt.where(models.Booking.schedule_id == schedule_id)
    if status:
        stmt = stmt.where(models.Booking.status == status)
    return list(db.execute(_with_display(stmt)).scalars().all())


def booking_stats(db: Session) -> dict:
    total = db.scalar(select(func.count(models.Booking.id))) or 0
    confirmed_filter = models.Booking.status == BookingStatus.confirmed
    confirmed = db.scalar(select(func.count(models.Booking.id)).where(confirmed_filter)) or 0
    seats_sold = db.scalar(
        select(func.coalesce(func.sum(models.Booking.seats), 0)).where(confirmed_filter)
    )
    revenue = db.scalar(
        select(func.coalesce(func.sum(models.Booking.amount), 0)).where(confirmed_filter)
    )
    return {
        "total": total,
        "confirmed": confirmed,
        "cancelled": total - confirmed,
        "seats_sold": int(seats_sold or 0),
        "revenue": float(revenue or 0),
    }
