"""Data models for the itinerary parser."""
from .itinerary import (
    Activity,
    ActivityCategory,
    ItineraryDay,
    ParseReport,
    ParseStrategy,
    ValidationResult,
)

__all__ = [
    "Activity",
    "ActivityCategory",
    "ItineraryDay",
    "ParseReport",
    "ParseStrategy",
    "ValidationResult",
]
