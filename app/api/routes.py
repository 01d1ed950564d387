"""
FastAPI route definitions for the screenshot service.

- GET /screenshot — capture a URL, return a link (or inline base64) to the image
- GET /health     — liveness probe

Concurrency:
- The blocking Playwright capture and the upload are offloaded to a thread
  pool via run_in_threadpool; each request is independent.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .handler import ScreenshotHandler
from .schemas import CaptureOptions, HealthResponse, ScreenshotResponse
from ..config import Settings, get_settings
from ..util.renderer import capture_screenshot
from ..util.uploader import upload_image

logger = logging.getLogger(__name__)

router = APIRouter()


def get_handler(settings: Annotated[Settings, Depends(get_settings)]) -> ScreenshotHandler:
    return ScreenshotHandler(settings, capture=capture_screenshot, upload=upload_image)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Service health check endpoint."""
    return HealthResponse()


# ---------------------------------------------------------------------------
# Screenshot
# ---------------------------------------------------------------------------

@router.get(
    "/screenshot",
    response_model=ScreenshotResponse,
    tags=["screenshot"],
    responses={400: {"model": ScreenshotResponse}, 401: {"model": ScreenshotResponse}},
)
async def take_screenshot(
    options: Annotated[CaptureOptions, Query()],
    handler: Annotated[ScreenshotHandler, Depends(get_handler)],
    x_api_key: Annotated[Optional[str], Header()] = None,
):
    """
    Capture a web page.

    - Requires the ``x-api-key`` header when the service has API_KEY set.
    - With UPLOAD_URL set the image is pushed to the asset host and the local
      copy removed; otherwise it is served from /images.
    - ``encoding=base64`` returns the image inline instead of a link.
    """
    logger.info("[routes] Screenshot request url=%s type=%s", options.url, options.type)
    status_code, body = await run_in_threadpool(handler.handle, options, x_api_key)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
