"""Shared fixtures: a well-formed two-day generator response."""
import json
from datetime import date

import pytest


TWO_DAY_JSON = """[
  {
    "day": 1,
    "date": "2025-07-16",
    "activities": [
      {
        "time": "09:00",
        "activity": "National Museum",
        "description": "Explore the galleries",
        "category": "museum",
        "duration": "2 hours",
        "cost": "₹500",
        "location": {"name": "National Museum", "address": "Janpath"}
      },
      {
        "time": "13:00",
        "activity": "Lunch at Karim's",
        "category": "lunch",
        "duration": "1 hour",
        "cost": 800,
        "location": "Old Delhi"
      }
    ]
  },
  {
    "day": 2,
    "date": "2025-07-17",
    "activities": [
      {
        "time": "10:00",
        "activity": "Taxi to Agra",
        "category": "taxi",
        "duration": "4 hours",
        "cost": "₹1,200",
        "location": "Agra"
      }
    ]
  }
]"""


@pytest.fixture
def start_date() -> date:
    return date(2025, 7, 16)


@pytest.fixture
def two_day_json() -> str:
    return TWO_DAY_JSON


@pytest.fixture
def two_day_compact() -> str:
    """Same itinerary serialized on a single line."""
    return json.dumps(json.loads(TWO_DAY_JSON))


@pytest.fixture
def truncated_mid_activity() -> str:
    """Response cut inside day 2's first activity, after '"time": "10:0'."""
    cut = TWO_DAY_JSON.index('"time": "10:00"') + len('"time": "10:0')
    return TWO_DAY_JSON[:cut]
