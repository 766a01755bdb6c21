from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base

DEFAULT_COUNTRY = "Pakistan"


class City(Base):
    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    country: Mapped[str] = mapped_column(String(128), default=DEFAULT_COUNTRY)
    state: Mapped[str | None] = mapped_column(String(128))
