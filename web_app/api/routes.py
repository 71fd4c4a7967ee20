"""API routes implementation."""

import json
from datetime import datetime, timezone

from fastapi import APIRouter, Request, HTTPException, status
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLInfoResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortener import URLShortener, URLMapping
from shortener.errors import InvalidURLError, NotFoundError, GenerationExhaustedError
from shortener.common.url_builder import build_short_url, resolve_path_prefix
from shortener.common.headers import build_base_url

router = APIRouter()


async def _parse_shorten_request(request: Request) -> ShortenRequest:
    """Decode a strict ``{"url": ...}`` JSON body.

    Raises:
        HTTPException: 415 for a non-JSON content type, 400 for anything
            that is not exactly one JSON object with a string ``url`` field
    """
    content_type = request.headers.get("content-type", "")
    if content_type and not content_type.startswith("application/json"):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported content type",
        )

    raw = await request.body()
    try:
        # json.loads rejects trailing data after the first document
        payload = json.loads(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON",
        )

    try:
        return ShortenRequest.model_validate(payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON",
        )


def _create_mapping(engine: URLShortener, url: str) -> URLMapping:
    return engine.get_url_info(engine.create(url))


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or URL"},
        415: {"model": ErrorResponse, "description": "Unsupported content type"},
        500: {"model": ErrorResponse, "description": "Short ID generation failed"},
    },
    summary="Create short URL",
    description="Create a shortened URL. The body must be a JSON object with a single `url` field.",
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    engine = request.app.state.engine
    config = request.app.state.config

    body = await _parse_shorten_request(request)

    try:
        mapping = await run_in_threadpool(_create_mapping, engine, body.url)
    except InvalidURLError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except GenerationExhaustedError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error",
        )

    headers = dict(request.headers)
    base_url = build_base_url(
        headers=headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    short_url = build_short_url(
        short_id=mapping.short_id,
        base_url=base_url,
        path_prefix=resolve_path_prefix(headers, config.path_prefix),
    )

    return ShortenResponse(
        short_id=mapping.short_id,
        short_url=short_url,
        original_url=mapping.original_url,
        created_at=mapping.created_at,
    )


@router.get(
    "/urls/{short_id}",
    response_model=URLInfoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short ID not found"},
    },
    summary="Get URL information",
    description="Get the stored entry for a short ID.",
)
def get_url_info(request: Request, short_id: str):
    """Get information about a shortened URL."""
    engine = request.app.state.engine

    try:
        mapping = engine.get_url_info(short_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short ID '{short_id}' not found",
        )

    return URLInfoResponse(
        short_id=mapping.short_id,
        original_url=mapping.original_url,
        created_at=mapping.created_at,
    )


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
def get_statistics(request: Request):
    """Get service statistics."""
    return StatisticsResponse(**request.app.state.engine.get_statistics())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    health = request.app.state.engine.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        total_urls=health["total_urls"],
        timestamp=datetime.now(timezone.utc),
    )
