"""
Core business logic package for the itinerary map service.

All business logic, data access, and service integrations live here.
Lambda handlers in src/handlers/ are thin wrappers that call into itinerary/.
"""

__all__: list[str] = []
