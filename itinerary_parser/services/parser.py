"""
Itinerary Parser - Orchestrates the parse/repair/fallback pipeline.

parse() never raises on malformed text: JSON extraction, repair and the
line parser are tried in turn, and total failure yields an empty list.
"""
import logging
from datetime import date
from typing import Any, Optional, Sequence, Union

from pydantic import BaseModel

from ..config import settings
from ..errors import ParseFailure
from ..models.itinerary import ItineraryDay, ParseReport, ParseStrategy, ValidationResult
from .json_repair import DEFAULT_BOUNDARIES, BoundaryHeuristic, repair_json_array
from .line_parser import parse_itinerary_text
from .normalizer import build_itinerary, coerce_start_date, normalize_cost, normalize_itinerary
from .preprocessor import extract_json_candidate
from .validator import validate_itinerary

logger = logging.getLogger(__name__)

StartDate = Union[date, str]


class ItineraryParser:
    """Turns raw generator text into a validated list of ItineraryDay."""

    def __init__(
        self,
        max_response_chars: Optional[int] = None,
        boundaries: Sequence[BoundaryHeuristic] = DEFAULT_BOUNDARIES,
    ):
        self.max_response_chars = max_response_chars or settings.max_response_chars
        self.boundaries = tuple(boundaries)

    def parse(self, raw_response: str, start_date: StartDate) -> list[ItineraryDay]:
        """
        Parse a generator response into an itinerary.

        Args:
            raw_response: Text that should be a JSON day array, possibly
                fenced, truncated or plain prose
            start_date: First day of the trip

        Returns:
            List of days; empty when nothing could be recovered

        Raises:
            InvalidStartDateError: if start_date is not a calendar date
        """
        itinerary, _ = self._parse(raw_response, coerce_start_date(start_date))
        return itinerary

    def validate(self, itinerary: Any) -> ValidationResult:
        """Check itinerary shape and required fields."""
        return validate_itinerary(itinerary)

    def normalize(self, itinerary: Any, start_date: StartDate) -> list[ItineraryDay]:
        """Fill defaults and map categories on a day-shaped itinerary."""
        return normalize_itinerary(itinerary, coerce_start_date(start_date))

    def process_response(self, raw_response: str, start_date: StartDate) -> ParseReport:
        """
        Parse, validate, and normalize again if validation fails.

        Mirrors what the trip generator does with a fresh response before
        storing it.
        """
        start = coerce_start_date(start_date)
        itinerary, strategy = self._parse(raw_response, start)
        validation = validate_itinerary(itinerary)

        if itinerary and not validation.is_valid:
            logger.warning(f"Itinerary validation failed: {validation.errors}")
            itinerary = normalize_itinerary(itinerary, start)
            validation = validate_itinerary(itinerary)

        return ParseReport(
            itinerary=itinerary,
            strategy=strategy,
            validation=validation,
            total_cost=total_cost(itinerary),
        )

    def _bounded_text(self, raw_response: Any) -> str:
        if not isinstance(raw_response, str):
            logger.warning(f"Expected text response, got {type(raw_response).__name__}")
            return ""
        if len(raw_response) > self.max_response_chars:
            logger.warning(
                f"Response of {len(raw_response)} chars cut to {self.max_response_chars}"
            )
            return raw_response[:self.max_response_chars]
        return raw_response

    def _parse(self, raw_response: Any, start: date) -> tuple[list[ItineraryDay], ParseStrategy]:
        text = self._bounded_text(raw_response)

        try:
            candidate = extract_json_candidate(text)
            parsed, repaired = repair_json_array(candidate, self.boundaries)
            if not isinstance(parsed, list) or not any(isinstance(day, dict) for day in parsed):
                raise ParseFailure("Parsed data is not an array of day objects")
            strategy = ParseStrategy.REPAIRED if repaired else ParseStrategy.JSON
            return build_itinerary(parsed, start), strategy
        except ParseFailure as e:
            logger.warning(f"JSON parsing failed, trying text parsing: {e}")
            logger.debug(f"Response preview: {text[:500]}")

        itinerary = parse_itinerary_text(text, start)
        if not itinerary:
            logger.warning(f"No itinerary recovered from {len(text)} chars of text")
            return [], ParseStrategy.EMPTY
        return itinerary, ParseStrategy.TEXT


def total_cost(itinerary: Any) -> float:
    """Sum every activity cost; unreadable costs count as 0."""
    if not isinstance(itinerary, list):
        return 0.0

    total = 0.0
    for day in itinerary:
        if isinstance(day, BaseModel):
            day = day.model_dump(mode="json")
        activities = day.get("activities") if isinstance(day, dict) else None
        for activity in activities if isinstance(activities, list) else []:
            if isinstance(activity, BaseModel):
                activity = activity.model_dump(mode="json")
            if isinstance(activity, dict):
                total += normalize_cost(activity.get("cost"))
    return total


def _raw_response_of(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        return record.get("raw_response") or record.get("rawResponse")
    return getattr(record, "raw_response", None)


# Global parser instance
parser: Optional[ItineraryParser] = None


def get_parser() -> ItineraryParser:
    """Get or create the global parser."""
    global parser
    if parser is None:
        parser = ItineraryParser()
    return parser


def parse(raw_response: str, start_date: StartDate) -> list[ItineraryDay]:
    return get_parser().parse(raw_response, start_date)


def validate(itinerary: Any) -> ValidationResult:
    return get_parser().validate(itinerary)


def normalize(itinerary: Any, start_date: StartDate) -> list[ItineraryDay]:
    return get_parser().normalize(itinerary, start_date)


def process_response(raw_response: str, start_date: StartDate) -> ParseReport:
    return get_parser().process_response(raw_response, start_date)


def parse_stored_response(record: Any, start_date: StartDate) -> list[ItineraryDay]:
    """Parse the raw text of a stored generator response record."""
    raw_response = _raw_response_of(record) if record is not None else None
    if not raw_response:
        logger.error("No stored AI response data found")
        return []
    return parse(raw_response, start_date)
