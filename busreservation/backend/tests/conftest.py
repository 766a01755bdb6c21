import os

os.environ.setdefault("DB_BACKEND", "sqlite")
os.environ.setdefault("SQLITE_PATH", ":memory:")

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.api.errors import register_exception_handlers
from app.api.routes import admin, auth, bookings, contact, feedback, misc, schedules
from app.db import models
from app.db.session import Base, get_db

DEPARTURE = datetime(2030, 3, 14, 8, 0)


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_schedule(
    session,
    *,
    capacity=40,
    price=100,
    departure=DEPARTURE,
    from_city="Karachi",
    to_city="Lahore",
    bus_name="Daewoo Express",
):
    origin = session.query(models.City).filter_by(name=from_city).one_or_none()
    if origin is None:
        origin = models.City(name=from_city)
        session.add(origin)
    destination = session.query(models.City).filter_by(name=to_city).one_or_none()
    if destination is None:
        destination = models.City(name=to_city)
        session.add(destination)
    session.flush()
    route = (
        session.query(models.Route)
        .filter_by(from_city_id=origin.id, to_city_id=destination.id)
        .one_or_none()
    )
    if route is None:
        route = models.Route(from_city_id=origin.id, to_city_id=destination.id)
        session.add(route)
    bus = models.Bus(bus_name=bus_name, total_seats=capacity)
    session.add(bus)
    session.flush()
    schedule = models.Schedule(
        bus_id=bus.id,
        route_id=route.id,
        departure_time=departure,
        arrival_time=departure + timedelta(hours=10),
        duration_minutes=600,
        price=Decimal(price),
    )
    session.add(schedule)
    session.commit()
    session.refresh(schedule)
    return schedule


@pytest.fixture()
def make_schedule():
    return create_schedule


def build_app():
    test_app = FastAPI()
    register_exception_handlers(test_app)
    for module in (auth, schedules, bookings, admin, contact, feedback, misc):
        test_app.include_router(module.router, prefix="/api")
    return test_app


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal


@pytest.fixture()
def api_client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def override_get_current_admin():
        return models.AdminUser(id=1, login="admin", role=models.AdminRole.admin)

    test_app = build_app()
    test_app.dependency_overrides[get_db] = override_get_db
    test_app.dependency_overrides[deps.get_current_admin] = override_get_current_admin

    with TestClient(test_app) as client:
        yield client, session_factory

    test_app.dependency_overrides.clear()


@pytest.fixture()
def public_client(session_factory):
    """Client without the admin override, for authentication checks."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    test_app = build_app()
    test_app.dependency_overrides[get_db] = override_get_db

    with TestClient(test_app) as client:
        yield client, session_factory

    test_app.dependency_overrides.clear()
