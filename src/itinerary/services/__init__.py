"""
Business services for the itinerary service.

- location_client.py: cached client-side access to the locations API
- travel_times.py: per-day travel time annotation via a MapProvider
- responses.py: API Gateway response envelopes
- migration.py: programmatic Alembic upgrades
"""

__all__: list[str] = []
