"""
FastAPI Application Entry Point.
"""
import logging

from fastapi import FastAPI

from .api import router
from .config import settings


logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Parsing and repair of AI-generated travel itineraries",
    version="1.0.0"
)

# Include API routes
app.include_router(router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "engine": "itinerary-parser"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "itinerary_parser.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
