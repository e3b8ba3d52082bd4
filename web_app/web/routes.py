"""Web interface routes implementation."""

import logging
import os

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from link_shorter.errors import NotFound, StorageFailure

router = APIRouter()

logger = logging.getLogger("link_shorter.web")

template_dir = os.path.join(os.path.dirname(__file__), "..", "ux")

FALLBACK_INDEX = "<h1>Link Shorter</h1><p>PUT or POST /api to create a short link.</p>"


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the static landing page."""
    html_file = os.path.join(template_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            content = f.read()
        return HTMLResponse(content=content)

    return HTMLResponse(content=FALLBACK_INDEX, status_code=200)


@router.get("/{path:path}", include_in_schema=False)
async def redirect_to_url(request: Request, path: str):
    """Redirect to the target URL of a live shorter."""
    service = request.app.state.service

    logger.debug(f"Getting a path: {path}")
    try:
        url = await service.resolve_shorter(path)
    except NotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No such shorter",
        )
    except StorageFailure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
