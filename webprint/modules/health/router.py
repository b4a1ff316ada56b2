"""Health check routes."""

from fastapi import APIRouter

from webprint import __version__

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok", "version": __version__}
