"""Services for the itinerary parser."""
from .parser import ItineraryParser, get_parser
from .json_repair import repair_json_array
from .normalizer import normalize_itinerary
from .line_parser import parse_itinerary_text
from .validator import validate_itinerary

__all__ = [
    "ItineraryParser",
    "get_parser",
    "repair_json_array",
    "normalize_itinerary",
    "parse_itinerary_text",
    "validate_itinerary",
]
