from datetime import datetime, time, timedelta
from decimal import Decimal
from sqlalchemy.orm import Session
from ..db.session import Base, SessionLocal, engine
from ..db import models
from ..config import get_settings
from .admin_service import ensure_admin_exists
from . import catalogue_service

DEMO_FLEET = [
    ("Daewoo Express", "AC", "Seater", 50),
    ("Faisal Movers", "AC", "Seater", 45),
    ("Skyways Sleeper", "Sleeper", "Sleeper", 30),
]

# (from, to, distance_km, departure, travel time, price)
DEMO_TIMETABLE = [
    ("Karachi", "Lahore", 1210, time(8, 0), timedelta(hours=10), Decimal("2500")),
    ("Karachi", "Lahore", 1210, time(21, 30), timedelta(hours=11), Decimal("3200")),
    ("Lahore", "Islamabad", 375, time(7, 0), timedelta(hours=4, minutes=30), Decimal("1800")),
    ("Islamabad", "Peshawar", 185, time(14, 0), timedelta(hours=2, minutes=45), Decimal("1200")),
]


def seed(session: Session, days: int = 7) -> None:
    settings = get_settings()
    ensure_admin_exists(session, settings.default_admin_login, settings.default_admin_password)
    if session.query(models.Schedule).count():
        return
    buses = [
        catalogue_service.create_bus(
            session, bus_name=name, bus_type=bus_type, seat_type=seat_type, total_seats=seats
        )
        for name, bus_type, seat_type, seats in DEMO_FLEET
    ]
    for origin, destination, distance, _, _, _ in DEMO_TIMETABLE:
        catalogue_service.save_route(
            session, from_city=origin, to_city=destination, distance_km=distance
        )
    today = datetime.now().date()
    for offset in range(days):
        day = today + timedelta(days=offset)
        for index, (origin, destination, _, departs, travel, price) in enumerate(DEMO_TIMETABLE):
            departure = datetime.combine(day, departs)
            catalogue_service.create_schedule(
                session,
                bus_id=buses[index % len(buses)].id,
                from_city=origin,
                to_city=destination,
                departure_time=departure,
                arrival_time=departure + travel,
                price=price,
            )


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed(session)
        print("Seed data created")
