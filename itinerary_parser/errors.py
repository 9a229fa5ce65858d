"""
Exceptions raised inside the parsing pipeline.

Only InvalidStartDateError escapes the public entry points; the parse
failures are recovered by the orchestrator.
"""


class ItineraryParserError(Exception):
    """Base exception for itinerary parsing errors."""

    def __init__(self, detail: str = "Itinerary parsing failed") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class ParseFailure(ItineraryParserError):
    """No parseable JSON itinerary could be read from the text."""


class JSONNotFoundError(ParseFailure):
    """The text holds no '[' ... ']' candidate at all."""

    def __init__(self, detail: str = "No JSON array found in response") -> None:
        super().__init__(detail)


class RepairFailure(ParseFailure):
    """Bracket-balance repair still produced unparseable JSON."""


class InvalidStartDateError(ItineraryParserError, ValueError):
    """The trip start date could not be interpreted as a calendar date."""
