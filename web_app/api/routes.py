"""API routes implementation."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Form, Query, Request, HTTPException, status
from fastapi.responses import PlainTextResponse

from .schemas import ShorterArguments, HealthResponse, ErrorResponse
from link_shorter.common.headers import build_base_url
from link_shorter.common.url_builder import build_short_url
from link_shorter.errors import BadInput, StorageFailure, Unauthorized

router = APIRouter()

logger = logging.getLogger("link_shorter.web")

CREATE_RESPONSES = {
    200: {"content": {"text/plain": {}}, "description": "Absolute short URL"},
    400: {"model": ErrorResponse, "description": "Bad host or url"},
    401: {"model": ErrorResponse, "description": "Token not allowed"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


async def _put_shorter_inner(request: Request, args: ShorterArguments) -> PlainTextResponse:
    """Shared body of PUT and POST /api."""
    service = request.app.state.service

    try:
        base_url = build_base_url(
            headers=dict(request.headers),
            request_scheme=request.url.scheme,
        )
        path = await service.create_shorter(
            token=args.token,
            url=args.url,
            path=args.path,
            seconds=args.seconds,
        )
    except BadInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Unauthorized:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    except StorageFailure as e:
        logger.warning(f"Fail to create shorter due to {e!r} (cause: {e.__cause__!r})")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    return PlainTextResponse(build_short_url(path=path, base_url=base_url))


@router.put(
    "",
    response_class=PlainTextResponse,
    responses=CREATE_RESPONSES,
    summary="Create shorter (query string)",
    description="Create or replace a shorter. Parameters come from the query string.",
)
async def put_shorter(
    request: Request,
    token: Optional[str] = Query(None),
    path: Optional[str] = Query(None),
    url: Optional[str] = Query(None),
    seconds: Optional[int] = Query(None),
    ttl: Optional[int] = Query(None),
):
    """Create a shorter from query parameters."""
    args = ShorterArguments(
        token=token,
        path=path,
        url=url,
        seconds=seconds if seconds is not None else ttl,
    )
    return await _put_shorter_inner(request, args)


@router.post(
    "",
    response_class=PlainTextResponse,
    responses=CREATE_RESPONSES,
    summary="Create shorter (form body)",
    description="Create or replace a shorter. Parameters come from a urlencoded form.",
)
async def post_shorter(
    request: Request,
    token: Optional[str] = Form(None),
    path: Optional[str] = Form(None),
    url: Optional[str] = Form(None),
    seconds: Optional[int] = Form(None),
    ttl: Optional[int] = Form(None),
):
    """Create a shorter from form fields."""
    args = ShorterArguments(
        token=token,
        path=path,
        url=url,
        seconds=seconds if seconds is not None else ttl,
    )
    return await _put_shorter_inner(request, args)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
