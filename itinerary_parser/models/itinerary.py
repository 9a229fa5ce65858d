"""
Itinerary models - Structured output of the parsing pipeline.
"""
from pydantic import BaseModel, Field
from enum import Enum


class ActivityCategory(str, Enum):
    """Closed set of activity categories accepted by storage."""
    SIGHTSEEING = "sightseeing"
    FOOD = "food"
    ACCOMMODATION = "accommodation"
    TRANSPORTATION = "transportation"
    ACTIVITY = "activity"
    NIGHTLIFE = "nightlife"
    OTHER = "other"


class Activity(BaseModel):
    """A single scheduled event within a day."""
    title: str = Field(
        ...,
        min_length=1,
        description="Short name of the activity"
    )
    description: str = Field(
        default="",
        description="Brief description of the activity"
    )
    category: ActivityCategory = Field(
        default=ActivityCategory.ACTIVITY,
        description="Normalized activity category"
    )
    time: str = Field(
        default="09:00",
        description="Start time, e.g. '09:00' or '9:00 AM'"
    )
    duration: str = Field(
        default="1 hour",
        description="Free-text duration, e.g. '2 hours'"
    )
    cost: float = Field(
        default=0.0,
        ge=0,
        description="Estimated cost as a plain number"
    )
    location: str = Field(
        default="TBD",
        description="Name and address of the place"
    )


class ItineraryDay(BaseModel):
    """Plan for a single day."""
    day_number: int = Field(
        ...,
        ge=1,
        description="1-based position of the day in the trip"
    )
    date: str = Field(
        ...,
        description="Date for this day (YYYY-MM-DD)"
    )
    activities: list[Activity] = Field(
        default_factory=list,
        description="Activities in the order they happen"
    )


class ValidationResult(BaseModel):
    """Outcome of a structural itinerary check."""
    is_valid: bool = Field(..., description="True when no errors were found")
    errors: list[str] = Field(
        default_factory=list,
        description="Human-readable problems, naming the day/activity and field"
    )


class ParseStrategy(str, Enum):
    """Which path produced an itinerary."""
    JSON = "json"  # Strict JSON parse succeeded
    REPAIRED = "repaired"  # JSON recovered by bracket-balance repair
    TEXT = "text"  # Heuristic line parser
    EMPTY = "empty"  # Nothing recoverable


class ParseReport(BaseModel):
    """Parsed itinerary together with how it was obtained and checked."""
    itinerary: list[ItineraryDay] = Field(default_factory=list)
    strategy: ParseStrategy = Field(default=ParseStrategy.EMPTY)
    validation: ValidationResult = Field(
        default_factory=lambda: ValidationResult(is_valid=False)
    )
    total_cost: float = Field(
        default=0.0,
        ge=0,
        description="Sum of all activity costs"
    )

    def to_display_dict(self) -> dict:
        """Convert to display-friendly dictionary."""
        return {
            "strategy": self.strategy.value,
            "is_valid": self.validation.is_valid,
            "errors": self.validation.errors,
            "total_days": len(self.itinerary),
            "total_cost": self.total_cost,
            "days": [day.model_dump(mode="json") for day in self.itinerary],
        }
