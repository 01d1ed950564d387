"""
Playwright screenshot engine.

Renders a web page to image bytes with headless Chromium, Docker-compatible.
PNG and JPEG come straight from Playwright; WebP is re-encoded with Pillow.
"""

import io
import logging
from typing import Optional

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)

IMAGE_TYPES = ("png", "jpeg", "webp")


class ScreenshotError(Exception):
    """Capture failed. ``status`` is set when the page itself answered with an HTTP error."""

    def __init__(self, message: str, status: Optional[int] = None, body=None):
        super().__init__(message)
        self.status = status
        self.body = body


def _to_webp(png_bytes: bytes, quality: int) -> bytes:
    from PIL import Image

    with Image.open(io.BytesIO(png_bytes)) as img:
        buf = io.BytesIO()
        img.save(buf, format="WEBP", quality=quality)
    return buf.getvalue()


def capture_screenshot(
    url: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    quality: Optional[int] = None,
    image_type: str = "png",
    full_page: bool = False,
    settings: Settings | None = None,
) -> bytes:
    """
    Capture a web page as an image.

    Args:
        url: Page to load. A scheme-less URL is loaded over https.
        width: Viewport width in pixels (default from settings).
        height: Viewport height in pixels (default from settings).
        quality: 0-100, used for jpeg and webp only.
        image_type: png | jpeg | webp.
        full_page: Capture the full scrollable page instead of the viewport.

    Returns:
        Encoded image bytes.

    Raises:
        ScreenshotError: on navigation or browser failure.
    """
    if image_type not in IMAGE_TYPES:
        raise ScreenshotError(f"Unsupported image type: {image_type}", status=400)

    try:
        from playwright.sync_api import sync_playwright, Error as PlaywrightError
    except ImportError:
        raise ScreenshotError(
            "playwright not installed. Run: pip install playwright && playwright install chromium"
        )

    settings = settings or get_settings()
    if not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"

    viewport = {
        "width": width or settings.render_default_width,
        "height": height or settings.render_default_height,
    }

    shot_kwargs: dict = {"full_page": full_page, "type": "png"}
    if image_type == "jpeg":
        shot_kwargs["type"] = "jpeg"
        if quality is not None:
            shot_kwargs["quality"] = quality

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=True,
                args=[
                    "--no-sandbox",
                    "--disable-setuid-sandbox",
                    "--disable-dev-shm-usage",
                    "--disable-gpu",
                ],
            )
            try:
                page = browser.new_page(viewport=viewport)
                response = page.goto(url, wait_until="load", timeout=settings.render_timeout_ms)
                if response is not None and response.status >= 400:
                    raise ScreenshotError(
                        f"Page responded with HTTP {response.status}",
                        status=response.status,
                        body=response.status_text,
                    )
                page.wait_for_timeout(settings.render_settle_ms)
                data = page.screenshot(**shot_kwargs)
            finally:
                browser.close()
    except ScreenshotError:
        raise
    except PlaywrightError as e:
        logger.error("[renderer] Capture of %s failed: %s", url, e)
        raise ScreenshotError(f"Screenshot failed: {e}") from e

    if image_type == "webp":
        data = _to_webp(data, quality if quality is not None else settings.render_webp_quality)

    logger.info(
        "[renderer] Captured %s (%dx%d, %s, %d bytes, full_page=%s)",
        url, viewport["width"], viewport["height"], image_type, len(data), full_page,
    )
    return data
