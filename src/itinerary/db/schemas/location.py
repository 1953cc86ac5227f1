"""SQLAlchemy ORM model for the locations table."""

from sqlalchemy import CheckConstraint, Double, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from itinerary.db.schemas.base import Base


class Location(Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    lat: Mapped[float] = mapped_column(Double, nullable=False)
    lng: Mapped[float] = mapped_column(Double, nullable=False)
    day: Mapped[str] = mapped_column(String(10), nullable=False)
    time: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()"))
    updated_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()"))

    __table_args__ = (
        CheckConstraint("day IN ('day1', 'day2', 'day3', 'day4', 'day5')", name="chk_locations_day"),
        CheckConstraint("lat BETWEEN -90 AND 90", name="chk_locations_lat"),
        CheckConstraint("lng BETWEEN -180 AND 180", name="chk_locations_lng"),
        Index("idx_locations_day", "day"),
    )
