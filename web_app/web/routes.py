"""Redirect routes."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from shortener.errors import NotFoundError
from shortener.common.validators import is_valid_short_id

router = APIRouter()


@router.get("/health", include_in_schema=False)
def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    health = request.app.state.engine.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{short_id}", include_in_schema=False)
def redirect_to_url(request: Request, short_id: str):
    """Redirect to the original URL."""
    engine = request.app.state.engine

    # Malformed IDs can never be stored, so skip the lookup
    is_valid, _ = is_valid_short_id(short_id)
    if not is_valid:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short ID '{short_id}' not found",
        )

    try:
        original_url = engine.resolve(short_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short ID '{short_id}' not found",
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
