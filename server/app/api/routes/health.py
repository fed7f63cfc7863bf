"""Health check endpoint"""

from fastapi import APIRouter

from app.config import settings
from app.models.schemas import HealthResponse
from spotcheck import __version__

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="ok",
        version=__version__,
        model=settings.gemini_model,
    )
