"""
Utility functions: Playwright screenshots, image storage/upload and helpers.
"""

from .helper import check_url, debounce, sleep
from .renderer import ScreenshotError, capture_screenshot
from .storage import delete_image, save_image
from .uploader import UploadError, UploadResult, upload_image

__all__ = [
    "check_url",
    "debounce",
    "sleep",
    "ScreenshotError",
    "capture_screenshot",
    "delete_image",
    "save_image",
    "UploadError",
    "UploadResult",
    "upload_image",
]
