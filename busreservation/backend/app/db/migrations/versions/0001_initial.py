"""cities, routes, buses, schedules and bookings

Revision ID: 0001_initial
Revises:
Create Date: 2025-11-02 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False, unique=True),
        sa.Column("country", sa.String(length=128), server_default="Pakistan"),
        sa.Column("state", sa.String(length=128)),
    )

    op.create_table(
        "routes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("from_city_id", sa.Integer(), sa.ForeignKey("cities.id", ondelete="CASCADE")),
        sa.Column("to_city_id", sa.Integer(), sa.ForeignKey("cities.id", ondelete="CASCADE")),
        sa.Column("distance_km", sa.Integer()),
        sa.UniqueConstraint("from_city_id", "to_city_id", name="uq_route_cities"),
    )

    op.create_table(
        "buses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("bus_name", sa.String(length=128), nullable=False),
        sa.Column("bus_type", sa.String(length=32), server_default="AC"),
        sa.Column("seat_type", sa.String(length=32), server_default="Seater"),
        sa.Column("total_seats", sa.Integer(), nullable=False, server_default="40"),
        sa.CheckConstraint("total_seats > 0", name="ck_bus_total_seats_positive"),
    )

    op.create_table(
        "schedules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("bus_id", sa.Integer(), sa.ForeignKey("buses.id", ondelete="CASCADE")),
        sa.Column("route_id", sa.Integer(), sa.ForeignKey("routes.id", ondelete="CASCADE")),
        sa.Column("departure_time", sa.DateTime()),
        sa.Column("arrival_time", sa.DateTime()),
        sa.Column("duration_minutes", sa.Integer()),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.CheckConstraint("arrival_time > departure_time", name="ck_schedule_arrival_after_departure"),
        sa.CheckConstraint("price > 0", name="ck_schedule_price_positive"),
    )
    op.create_index("ix_schedules_departure_time", "schedules", ["departure_time"])

    booking_status = sa.Enum("Confirmed", "Cancelled", name="bookingstatus")

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("schedule_id", sa.Integer(), sa.ForeignKey("schedules.id", ondelete="CASCADE")),
        sa.Column("passenger_name", sa.String(length=255), nullable=False),
        sa.Column("passenger_email", sa.String(length=255), nullable=False),
        sa.Column("passenger_phone", sa.String(length=32)),
        sa.Column("seats", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("pnr", sa.String(length=16), nullable=False),
        sa.Column("status", booking_status, server_default="Confirmed"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("cancelled_at", sa.DateTime(timezone=True)),
        sa.Column("cancelled_by", sa.String(length=64)),
        sa.UniqueConstraint("pnr", name="uq_bookings_pnr"),
        sa.CheckConstraint("seats >= 1", name="ck_booking_seats_positive"),
        sa.CheckConstraint("amount > 0", name="ck_booking_amount_positive"),
    )
    op.create_index("ix_bookings_schedule_id", "bookings", ["schedule_id"])
    op.create_index("ix_bookings_passenger_email", "bookings", ["passenger_email"])


def downgrade() -> None:
    op.drop_index("ix_bookings_passenger_email", table_name="bookings")
    op.drop_index("ix_bookings_schedule_id", table_name="bookings")
    op.drop_table("bookings")
    sa.Enum(name="bookingstatus").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_schedules_departure_time", table_name="schedules")
    op.drop_table("schedules")
    op.drop_table("buses")
    op.drop_table("routes")
    op.drop_table("cities")
