"""
Screenshot request handler.

Sequence per request:
    1. API key check (only when Settings.api_key is set)
    2. URL presence / shape check
    3. capture -> bytes
    4. bytes -> <image_dir>/<id>.<type>
    5. upload (when Settings.upload_url is set) and local cleanup
    6. reply with remote URL, local public URL or inline base64

Collaborators are injected so the handler can run without a browser or network.
"""

import json
import hmac
import logging
from typing import Callable, Optional

from .schemas import AssetId, CaptureOptions, ScreenshotResponse
from ..config import Settings
from ..util.helper import check_url
from ..util.renderer import ScreenshotError
from ..util.storage import delete_image, prune_images, read_base64, save_image
from ..util.uploader import UploadError, UploadResult

logger = logging.getLogger(__name__)

CaptureFn = Callable[..., bytes]
UploadFn = Callable[..., UploadResult]

SUCCESS_MESSAGE = "Here is your shot"


def _error_message(err: Exception) -> str:
    body = getattr(err, "body", None)
    if body is None or body == "":
        return str(err)
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False)


class ScreenshotHandler:
    """Turns one capture request into ``(status_code, ScreenshotResponse)``."""

    def __init__(self, settings: Settings, capture: CaptureFn, upload: UploadFn):
        self.settings = settings
        self.capture = capture
        self.upload = upload

    def authorize(self, api_key: Optional[str]) -> Optional[tuple[int, ScreenshotResponse]]:
        expected = self.settings.api_key
        if not expected:
            return None
        if not api_key:
            return 400, ScreenshotResponse(message="API Key is required")
        if not hmac.compare_digest(api_key.encode("utf-8"), expected.encode("utf-8")):
            return 401, ScreenshotResponse(message="Unauthorized")
        return None

    def handle(self, options: CaptureOptions, api_key: Optional[str] = None) -> tuple[int, ScreenshotResponse]:
        denied = self.authorize(api_key)
        if denied is not None:
            return denied

        if not options.url:
            return 400, ScreenshotResponse(message="URL is required")
        if not check_url(options.url):
            return 400, ScreenshotResponse(message="Invalid URL")

        try:
            data = self.capture(
                options.url,
                width=options.width,
                height=options.height,
                quality=options.quality,
                image_type=options.type,
                full_page=options.full_page,
                settings=self.settings,
            )
        except ScreenshotError as e:
            logger.warning("[handler] Capture of %s failed: %s", options.url, e)
            return e.status or 500, ScreenshotResponse(message=_error_message(e))
        except Exception as e:
            logger.error("[handler] Unexpected capture error for %s: %s", options.url, e, exc_info=True)
            return 500, ScreenshotResponse(message=str(e))

        try:
            path = save_image(data, options.type, self.settings.image_dir)
        except OSError as e:
            logger.error("[handler] Could not save capture of %s: %s", options.url, e, exc_info=True)
            return 500, ScreenshotResponse(message=str(e))

        if options.encoding == "base64":
            try:
                image = read_base64(path)
            except OSError as e:
                logger.error("[handler] Could not read back %s: %s", path, e, exc_info=True)
                return 500, ScreenshotResponse(message=str(e))
            finally:
                delete_image(path)
            return 200, ScreenshotResponse(message=SUCCESS_MESSAGE, image=image)

        if not self.settings.upload_url:
            if self.settings.image_max_age_seconds > 0:
                prune_images(self.settings.image_dir, self.settings.image_max_age_seconds)
            public_url = f"{self.settings.public_base_url.rstrip('/')}/images/{path.name}"
            logger.info("[handler] Serving %s locally at %s", options.url, public_url)
            return 200, ScreenshotResponse(message=SUCCESS_MESSAGE, image=public_url)

        try:
            uploaded = self.upload(path, settings=self.settings)
        except UploadError as e:
            logger.warning("[handler] Upload of %s failed: %s", path, e)
            delete_image(path)
            return e.status or 500, ScreenshotResponse(message=_error_message(e))
        except Exception as e:
            logger.error("[handler] Unexpected upload error for %s: %s", path, e, exc_info=True)
            delete_image(path)
            return 500, ScreenshotResponse(message=str(e))

        delete_image(path)
        logger.info("[handler] Shot of %s uploaded to %s", options.url, uploaded.url)
        return 200, ScreenshotResponse(
            message=SUCCESS_MESSAGE,
            image=uploaded.url,
            id=AssetId(asset=uploaded.asset_id, public=uploaded.public_id),
        )
