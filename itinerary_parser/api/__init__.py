"""API routes for the itinerary parser."""
from .routes import router

__all__ = ["router"]
