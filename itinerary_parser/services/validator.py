"""
Validator - Structural checks on an itinerary before it is stored.

Every violation is collected; nothing short-circuits after the top level.
"""
from typing import Any

from pydantic import BaseModel

from ..models.itinerary import ValidationResult


_DAY_NUMBER_KEYS = ("day_number", "dayNumber", "day")


def _as_dict(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def _day_number(day: dict) -> Any:
    for key in _DAY_NUMBER_KEYS:
        if day.get(key) is not None:
            return day[key]
    return None


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _validate_activity(activity: Any, prefix: str) -> list[str]:
    activity = _as_dict(activity)
    if not isinstance(activity, dict):
        return [f"{prefix}: Invalid activity entry"]

    errors = []
    if not (activity.get("activity") or activity.get("title")):
        errors.append(f"{prefix}: Missing activity title")
    if not (activity.get("category") or activity.get("type")):
        errors.append(f"{prefix}: Missing category")
    if not activity.get("time"):
        errors.append(f"{prefix}: Missing time")
    return errors


def validate_itinerary(itinerary: Any) -> ValidationResult:
    """Check itinerary shape and required fields."""
    if not isinstance(itinerary, list):
        return ValidationResult(is_valid=False, errors=["Itinerary must be a list"])
    if not itinerary:
        return ValidationResult(is_valid=False, errors=["Itinerary cannot be empty"])

    errors: list[str] = []
    for day_index, day in enumerate(itinerary, start=1):
        day = _as_dict(day)
        if not isinstance(day, dict):
            errors.append(f"Day {day_index}: Invalid day entry")
            continue

        if not _is_positive_number(_day_number(day)):
            errors.append(f"Day {day_index}: Missing or invalid day number")
        if not day.get("date"):
            errors.append(f"Day {day_index}: Missing date")

        activities = day.get("activities")
        if not isinstance(activities, list):
            errors.append(f"Day {day_index}: Activities must be a list")
            continue

        for activity_index, activity in enumerate(activities, start=1):
            errors.extend(
                _validate_activity(activity, f"Day {day_index}, Activity {activity_index}")
            )

    return ValidationResult(is_valid=not errors, errors=errors)
