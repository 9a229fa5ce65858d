"""
Category mapping - Maps free-text categories onto ActivityCategory.

CATEGORY_SYNONYMS is the single lookup shared by the JSON path and
normalize(); the keyword scan below is only for prose lines.
"""
from typing import Any

from ..models.itinerary import ActivityCategory


_S = ActivityCategory.SIGHTSEEING
_F = ActivityCategory.FOOD
_A = ActivityCategory.ACCOMMODATION
_T = ActivityCategory.TRANSPORTATION
_ACT = ActivityCategory.ACTIVITY
_N = ActivityCategory.NIGHTLIFE
_O = ActivityCategory.OTHER

CATEGORY_SYNONYMS: dict[str, ActivityCategory] = {
    # Sightseeing
    "sightseeing": _S,
    "sight-seeing": _S,
    "touring": _S,
    "visit": _S,
    "exploring": _S,
    "attraction": _S,
    "monument": _S,
    "museum": _S,
    "cultural": _S,
    "heritage": _S,
    "historical": _S,
    # Food
    "food": _F,
    "dining": _F,
    "restaurant": _F,
    "eating": _F,
    "meal": _F,
    "lunch": _F,
    "dinner": _F,
    "breakfast": _F,
    "cuisine": _F,
    # Accommodation
    "accommodation": _A,
    "hotel": _A,
    "stay": _A,
    "lodging": _A,
    "check-in": _A,
    "check-out": _A,
    # Transportation
    "transportation": _T,
    "transport": _T,
    "travel": _T,
    "transfer": _T,
    "taxi": _T,
    "bus": _T,
    "train": _T,
    "metro": _T,
    "flight": _T,
    # Activity
    "activity": _ACT,
    "adventure": _ACT,
    "experience": _ACT,
    "tour": _ACT,
    "recreation": _ACT,
    "sport": _ACT,
    "outdoor": _ACT,
    "nature": _ACT,
    "park": _ACT,
    "garden": _ACT,
    "shopping": _ACT,
    "walk": _ACT,
    "relaxation": _ACT,
    "wellness": _ACT,
    "spa": _ACT,
    # Nightlife
    "nightlife": _N,
    "night": _N,
    "bar": _N,
    "club": _N,
    "entertainment": _N,
    "show": _N,
    # Other
    "other": _O,
    "misc": _O,
    "miscellaneous": _O,
}

# Checked in order; the first group with a matching substring wins.
CATEGORY_KEYWORDS: list[tuple[ActivityCategory, tuple[str, ...]]] = [
    (_F, ("breakfast", "lunch", "dinner", "restaurant", "café", "cafe")),
    (_A, ("hotel", "check-in", "check-out", "accommodation", "hostel", "airbnb")),
    (_T, ("flight", "airport", "train", "bus", "taxi", "transfer")),
    (_S, ("museum", "landmark", "monument", "tour", "visit", "explore")),
]


def map_category(raw: Any) -> ActivityCategory:
    """Look up a declared category; anything unknown becomes ACTIVITY."""
    if isinstance(raw, ActivityCategory):
        return raw
    if not isinstance(raw, str):
        return ActivityCategory.ACTIVITY
    return CATEGORY_SYNONYMS.get(raw.lower().strip(), ActivityCategory.ACTIVITY)


def categorize_activity(text: str) -> ActivityCategory:
    """Guess a category from keywords in a free-text activity line."""
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ActivityCategory.ACTIVITY
