from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class Bus(Base):
    __tablename__ = "buses"
    __table_args__ = (
        CheckConstraint("total_seats > 0", name="ck_bus_total_seats_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    bus_name: Mapped[str] = mapped_column(String(128), nullable=False)
    bus_type: Mapped[str] = mapped_column(String(32), default="AC")
    seat_type: Mapped[str] = mapped_column(String(32), default="Seater")
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=40)

    schedules = relationship("Schedule", back_populates="bus")
