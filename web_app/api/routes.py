"""API routes implementation."""

from typing import List, Optional

from fastapi import APIRouter, Request, HTTPException, Query, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    BatchShortenRequest,
    BatchShortenResponse,
    BatchItemResult,
    ClickEventResponse,
    LinkResponse,
    LinkStatsResponse,
    LinkListResponse,
    HealthResponse,
    LogEntryResponse,
    ClearLogsResponse,
    ErrorResponse,
)
from shortlinks.errors import CodeGenerationError, CodeTakenError, ShortLinkError
from shortlinks.models import LinkRecord
from shortlinks.common.logging_config import get_recent_log_handler

router = APIRouter()


def _request_origin(request: Request) -> Optional[str]:
    """Origin the caller used, preferring X-Forwarded-Proto/Host from a proxy."""
    proto = request.headers.get("x-forwarded-proto")
    host = request.headers.get("x-forwarded-host")
    if proto and host:
        return f"{proto}://{host}"

    host = request.headers.get("host")
    if host:
        return f"{request.url.scheme}://{host}"
    return None


def _short_url(request: Request, short_code: str) -> str:
    return request.app.state.store.short_url_for(short_code, _request_origin(request))


def _link_response(request: Request, record: LinkRecord, is_expired: bool) -> LinkResponse:
    return LinkResponse(
        short_code=record.short_code,
        short_url=_short_url(request, record.short_code),
        original_url=record.original_url,
        created_at=record.created_at,
        expires_at=record.expires_at,
        validity_minutes=record.validity_minutes,
        clicks=record.clicks,
        is_expired=is_expired,
    )


def _error_status(error: ShortLinkError) -> int:
    if isinstance(error, CodeTakenError):
        return status.HTTP_409_CONFLICT
    if isinstance(error, CodeGenerationError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_400_BAD_REQUEST


async def _shorten(request: Request, body: ShortenRequest) -> LinkRecord:
    store = request.app.state.store
    config = request.app.state.config
    validity = body.validity_minutes if body.validity_minutes is not None else config.default_validity_minutes
    return await store.shorten(
        original_url=body.url,
        custom_code=body.custom_code,
        validity_minutes=validity,
    )


@router.post(
    "/shorten",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        503: {"model": ErrorResponse, "description": "No free short code available"},
    },
    summary="Create short URL",
    description="Create a shortened URL with an optional custom short code and validity period.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    try:
        record = await _shorten(request, body)
    except ShortLinkError as e:
        raise HTTPException(status_code=_error_status(e), detail=str(e))

    return _link_response(request, record, is_expired=False)


@router.post(
    "/shorten/batch",
    response_model=BatchShortenResponse,
    summary="Create several short URLs",
    description="Shorten up to five URLs; each item succeeds or fails on its own.",
)
async def shorten_batch(request: Request, body: BatchShortenRequest):
    """Create several shortened URLs."""
    results: List[BatchItemResult] = []
    for item in body.items:
        try:
            record = await _shorten(request, item)
        except ShortLinkError as e:
            results.append(BatchItemResult(url=item.url, error=str(e)))
            continue
        results.append(BatchItemResult(url=item.url, link=_link_response(request, record, is_expired=False)))

    return BatchShortenResponse(results=results)


@router.get(
    "/urls",
    response_model=LinkListResponse,
    summary="List short URLs",
    description="List every stored short URL, expired ones included.",
)
async def list_urls(request: Request):
    """List every short URL."""
    store = request.app.state.store

    urls = [_link_response(request, view.record, view.is_expired) for view in store.list_all()]

    return LinkListResponse(count=len(urls), urls=urls)


@router.get(
    "/urls/{short_code}",
    response_model=LinkStatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get URL statistics",
    description="Get a short URL with its click history and hourly/daily click counts.",
)
async def get_url_stats(request: Request, short_code: str):
    """Get statistics for a shortened URL."""
    store = request.app.state.store

    stats = store.stats_for(short_code)

    if stats is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    link = _link_response(request, stats.record, stats.is_expired)
    return LinkStatsResponse(
        **link.model_dump(),
        click_history=[
            ClickEventResponse(**event.to_dict()) for event in stats.record.click_history
        ],
        clicks_by_hour=stats.clicks_by_hour,
        clicks_by_day=stats.clicks_by_day,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the storage backend is usable.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    store = request.app.state.store

    healthy = await store.health_check()

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        storage="healthy" if healthy else "unhealthy",
        total_urls=len(store.table),
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/logs",
    response_model=List[LogEntryResponse],
    summary="Recent logs",
    description="Newest application log records, optionally filtered by level.",
)
async def recent_logs(
    level: Optional[str] = Query(None, description="Only return records at this level"),
    limit: int = Query(50, ge=1, le=1000),
):
    """Return recent log records."""
    handler = get_recent_log_handler()
    if handler is None:
        return []

    return [LogEntryResponse(**entry) for entry in handler.get_logs(level=level, limit=limit)]


@router.delete(
    "/logs",
    response_model=ClearLogsResponse,
    summary="Clear recent logs",
    description="Empty the in-memory recent log buffer.",
)
async def clear_logs():
    """Clear recent log records."""
    handler = get_recent_log_handler()
    if handler is None:
        return ClearLogsResponse(cleared=0)

    cleared = handler.clear()
    return ClearLogsResponse(cleared=cleared)
