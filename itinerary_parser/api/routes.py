"""
API Routes for the Itinerary Parser.
"""
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..errors import InvalidStartDateError
from ..models.itinerary import ItineraryDay, ParseReport, ValidationResult
from ..services.parser import get_parser


router = APIRouter(prefix="/api/itinerary", tags=["itinerary-parser"])


# Request Models
class ParseRequest(BaseModel):
    raw_response: str
    start_date: str


class ValidateRequest(BaseModel):
    itinerary: Any


class NormalizeRequest(BaseModel):
    itinerary: Any
    start_date: str


# Endpoints

@router.post("/parse", response_model=ParseReport)
async def parse_response(request: ParseRequest):
    """Parse, repair and validate a raw generator response."""
    try:
        return get_parser().process_response(request.raw_response, request.start_date)
    except InvalidStartDateError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/validate", response_model=ValidationResult)
async def validate_itinerary(request: ValidateRequest):
    """Check the structure of an itinerary."""
    return get_parser().validate(request.itinerary)


@router.post("/normalize", response_model=list[ItineraryDay])
async def normalize_itinerary(request: NormalizeRequest):
    """Fill defaults and map categories on a day-shaped itinerary."""
    try:
        return get_parser().normalize(request.itinerary, request.start_date)
    except InvalidStartDateError as e:
        raise HTTPException(status_code=422, detail=str(e))
