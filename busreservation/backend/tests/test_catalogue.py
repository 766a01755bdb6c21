from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.db import models
from app.services import catalogue_service, seed


def test_ensure_city_is_idempotent(db_session):
    first = catalogue_service.ensure_city(db_session, " Karachi ")
    second = catalogue_service.ensure_city(db_session, "Karachi")

    assert first.id == second.id
    assert first.country == models.DEFAULT_COUNTRY


def test_schedule_times_are_stored_as_wall_clock(db_session):
    bus = catalogue_service.create_bus(db_session, bus_name="Faisal Movers", total_seats=45)

    schedule = catalogue_service.create_schedule(
        db_session,
        bus_id=bus.id,
        from_city="Lahore",
        to_city="Islamabad",
        departure_time=datetime(2030, 3, 14, 7, 0, tzinfo=timezone.utc),
        arrival_time=datetime(2030, 3, 14, 11, 30, tzinfo=timezone.utc),
        price=Decimal("1800"),
    )

    assert schedule.departure_time == datetime(2030, 3, 14, 7, 0)
    assert schedule.duration_minutes == 270


def test_explicit_duration_is_kept(db_session):
    bus = catalogue_service.create_bus(db_session, bus_name="Faisal Movers")

    schedule = catalogue_service.create_schedule(
        db_session,
        bus_id=bus.id,
        from_city="Lahore",
        to_city="Islamabad",
        departure_time=datetime(2030, 3, 14, 7, 0),
        arrival_time=datetime(2030, 3, 14, 11, 30),
        duration_minutes=240,
        price=Decimal("1800"),
    )

    assert schedule.duration_minutes == 240
    assert bus.total_seats == 40


def test_same_city_schedule_rejected(db_session):
    bus = catalogue_service.create_bus(db_session, bus_name="Faisal Movers")

    with pytest.raises(catalogue_service.CatalogueError, match="must differ"):
        catalogue_service.create_schedule(
            db_session,
            bus_id=bus.id,
            from_city="Lahore",
            to_city="Lahore",
            departure_time=datetime(2030, 3, 14, 7, 0),
            arrival_time=datetime(2030, 3, 14, 11, 30),
            price=Decimal("1800"),
        )


def test_seed_creates_demo_timetable(db_session):
    seed.seed(db_session, days=2)
    seed.seed(db_session, days=2)

    assert db_session.query(models.Bus).count() == len(seed.DEMO_FLEET)
    assert db_session.query(models.Schedule).count() == 2 * len(seed.DEMO_TIMETABLE)
    assert db_session.query(models.Route).count() == 3
    assert db_session.query(models.AdminUser).count() == 1
