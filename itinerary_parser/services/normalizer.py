"""
Structural Normalizer - Coerces loosely-typed day/activity data into models.

Generator output uses inconsistent field names, currency-formatted costs
and nested location objects, so every field has a deterministic default.
"""
import logging
import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel

from ..errors import InvalidStartDateError
from ..models.itinerary import Activity, ItineraryDay
from .categories import map_category

logger = logging.getLogger(__name__)


DEFAULT_TITLE = "Untitled Activity"
DEFAULT_TIME = "09:00"
DEFAULT_DURATION = "1 hour"
DEFAULT_LOCATION = "TBD"

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")


def coerce_start_date(value: Any) -> date:
    """Accept a date, datetime or ISO string as the trip start date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise InvalidStartDateError(f"Invalid start date: {value!r}")


def day_date(start_date: date, offset: int) -> str:
    """ISO date of the day `offset` days after the start."""
    return (start_date + timedelta(days=offset)).isoformat()


def normalize_cost(value: Any) -> float:
    """
    Coerce a cost to a finite non-negative number.

    Strings have every non-digit/non-dot character stripped ("₹1,200" -> 1200);
    anything unparseable, negative or of another type becomes 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            cost = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        numeric = _NON_NUMERIC_RE.sub("", value)
        try:
            cost = float(numeric)
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(cost) or cost < 0:
        return 0.0
    return cost


def normalize_location(value: Any) -> str:
    """Collapse location objects to 'name, address' and stringify the rest."""
    if isinstance(value, dict):
        value = ", ".join(
            str(part) for part in (value.get("name"), value.get("address")) if part
        )
    if not isinstance(value, str):
        value = str(value or DEFAULT_LOCATION)
    return value or DEFAULT_LOCATION


def normalize_activity(raw: Any) -> Activity:
    """Derive every activity field from a raw mapping, with defaults."""
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(mode="json")
    if not isinstance(raw, dict):
        raw = {}

    title = raw.get("activity") or raw.get("title") or DEFAULT_TITLE
    category = raw.get("category") or raw.get("type") or "activity"

    return Activity(
        title=str(title),
        description=str(raw.get("description") or ""),
        category=map_category(category),
        time=str(raw.get("time") or DEFAULT_TIME),
        duration=str(raw.get("duration") or DEFAULT_DURATION),
        cost=normalize_cost(raw.get("cost")),
        location=normalize_location(raw.get("location")),
    )


def _activities_of(day: dict) -> list:
    activities = day.get("activities")
    return activities if isinstance(activities, list) else []


def build_itinerary(days: list, start_date: date) -> list[ItineraryDay]:
    """
    Build an itinerary from a freshly parsed JSON day array.

    Day numbers and dates come from position only; whatever the source
    claims is discarded so the sequence is always contiguous.
    """
    itinerary = []
    for index, day in enumerate(days):
        if not isinstance(day, dict):
            day = {}
        itinerary.append(ItineraryDay(
            day_number=index + 1,
            date=day_date(start_date, index),
            activities=[normalize_activity(act) for act in _activities_of(day)],
        ))
    return itinerary


def _existing_date(value: Any) -> Optional[str]:
    """Return an existing day date as ISO, or None if it can't be read."""
    if isinstance(value, (date, str)) and value:
        try:
            return coerce_start_date(value).isoformat()
        except InvalidStartDateError:
            return None
    return None


def normalize_itinerary(itinerary: Any, start_date: date) -> list[ItineraryDay]:
    """
    Re-apply the activity rules to an already day-shaped itinerary.

    Accepts dicts or ItineraryDay models. Day numbers are positional, an
    existing readable date is kept, and non-list input yields [].
    """
    if not isinstance(itinerary, list):
        logger.warning(f"Cannot normalize itinerary of type {type(itinerary).__name__}")
        return []

    normalized = []
    for index, day in enumerate(itinerary):
        if isinstance(day, BaseModel):
            day = day.model_dump(mode="json")
        if not isinstance(day, dict):
            day = {}
        normalized.append(ItineraryDay(
            day_number=index + 1,
            date=_existing_date(day.get("date")) or day_date(start_date, index),
            activities=[normalize_activity(act) for act in _activities_of(day)],
        ))
    return normalized
