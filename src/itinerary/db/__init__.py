"""
Database ORM models and clients for the itinerary service.

Importing this package registers all models on Base.metadata,
which Alembic needs for autogenerate.
"""

from itinerary.db.aurora import AuroraClient
from itinerary.db.schemas.base import Base
from itinerary.db.schemas.location import Location as LocationRecord

__all__ = ["AuroraClient", "Base", "LocationRecord"]
