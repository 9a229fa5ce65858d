"""
Fallback Line Parser - Last-resort scan of prose itineraries.

Used only when no JSON can be recovered; it is deliberately lossy.
"""
import logging
import re
from datetime import date
from typing import Optional

from ..models.itinerary import ItineraryDay
from .categories import categorize_activity
from .normalizer import DEFAULT_LOCATION, day_date, normalize_activity

logger = logging.getLogger(__name__)


# "Day 3:", "## Day 3 -", "**Day 3**"
_DAY_RE = re.compile(r"^[\s#*>_-]*day\s+(\d+)\b", re.IGNORECASE)
# "9:00", "14:30", "9:00 AM"
_TIME_RE = re.compile(r"\d{1,2}:\d{2}(?:\s*[ap]m\b)?", re.IGNORECASE)
_LOCATION_RE = re.compile(r"\bat\s+([^,.]+)", re.IGNORECASE)

MIN_ACTIVITY_LINE_LENGTH = 5


def _extract_location(line: str) -> dict:
    match = _LOCATION_RE.search(line)
    if match and match.group(1).strip():
        return {"name": match.group(1).strip(), "address": ""}
    return {"name": DEFAULT_LOCATION, "address": ""}


def parse_itinerary_text(text: str, start_date: date) -> list[ItineraryDay]:
    """
    Build an itinerary from "Day N" headings and time-stamped lines.

    The first day heading is anchored at start_date; later headings are
    dated relative to it by their claimed numbers. Lines before the first
    heading, and lines without a clock time, are ignored.
    """
    days: list[ItineraryDay] = []
    first_number: Optional[int] = None
    # None before the first heading and after an unusable one
    current: Optional[ItineraryDay] = None

    for line in text.splitlines():
        day_match = _DAY_RE.match(line)
        if day_match:
            current = None
            try:
                number = int(day_match.group(1))
                offset = 0 if first_number is None else number - first_number
                day = ItineraryDay(
                    day_number=len(days) + 1,
                    date=day_date(start_date, offset),
                    activities=[],
                )
            except (ValueError, OverflowError) as e:
                logger.warning(f"Skipping unusable day heading {line.strip()[:40]!r}: {e}")
                continue
            if first_number is None:
                first_number = number
            days.append(day)
            current = day
            continue

        if current is None:
            continue

        stripped = line.strip()
        time_match = _TIME_RE.search(stripped)
        if not time_match or len(stripped) <= MIN_ACTIVITY_LINE_LENGTH:
            continue

        current.activities.append(normalize_activity({
            "activity": stripped,
            "time": time_match.group(0),
            "category": categorize_activity(stripped),
            "description": "",
            "duration": "1 hour",
            "cost": 0,
            "location": _extract_location(stripped),
        }))

    logger.debug(f"Line parser recovered {len(days)} day(s)")
    return days
