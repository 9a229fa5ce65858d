"""Parsing and repair of AI-generated travel itineraries."""
from .services.parser import (
    ItineraryParser,
    get_parser,
    normalize,
    parse,
    parse_stored_response,
    process_response,
    total_cost,
    validate,
)

__all__ = [
    "ItineraryParser",
    "get_parser",
    "parse",
    "validate",
    "normalize",
    "process_response",
    "parse_stored_response",
    "total_cost",
]
