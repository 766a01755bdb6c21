from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class Route(Base):
    __tablename__ = "routes"
    __table_args__ = (
        UniqueConstraint("from_city_id", "to_city_id", name="uq_route_cities"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    from_city_id: Mapped[int] = mapped_column(ForeignKey("cities.id", ondelete="CASCADE"))
    to_city_id: Mapped[int] = mapped_column(ForeignKey("cities.id", ondelete="CASCADE"))
    distance_km: Mapped[int | None] = mapped_column(Integer)

    from_city = relationship("City", foreign_keys=[from_city_id])
    to_city = relationship("City", foreign_keys=[to_city_id])
    schedules = relationship("Schedule", back_populates="route")
