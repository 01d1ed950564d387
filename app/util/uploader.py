"""
Image upload to the remote asset host.

Sends the file as a multipart form (``file`` + ``upload_preset``) and reads the
asset URL and identifiers back from the JSON reply.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    url: str
    asset_id: str
    public_id: str


class UploadError(Exception):
    """Upload failed. ``status``/``body`` mirror the asset host's error reply when there was one."""

    def __init__(self, message: str, status: Optional[int] = None, body=None):
        super().__init__(message)
        self.status = status
        self.body = body


def _decode_body(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


def upload_image(
    local_path: str | Path,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> UploadResult:
    """
    Upload an image and return its remote location.

    Args:
        local_path: Local image file path.
        settings: Upload endpoint / preset source (defaults to get_settings()).
        client: Optional pre-built httpx client (tests inject a MockTransport).

    Returns:
        UploadResult with the asset URL and identifiers.

    Raises:
        UploadError: file missing, transport failure or non-2xx reply.
    """
    settings = settings or get_settings()
    path = Path(local_path)
    if not path.exists():
        raise UploadError(f"File not found: {path}")
    if not settings.upload_url:
        raise UploadError("UPLOAD_URL is not configured")

    own_client = client is None
    if own_client:
        client = httpx.Client(
            trust_env=False,
            timeout=httpx.Timeout(settings.upload_timeout, connect=10.0),
        )

    try:
        with path.open("rb") as fh:
            response = client.post(
                settings.upload_url,
                files={"file": (path.name, fh)},
                data={"upload_preset": settings.upload_preset},
            )
    except httpx.HTTPError as e:
        logger.warning("[uploader] Upload of %s failed: %s", path, e)
        raise UploadError(f"Upload failed: {e}") from e
    finally:
        if own_client:
            client.close()

    if response.is_error:
        body = _decode_body(response)
        logger.warning("[uploader] Asset host returned %d for %s: %s", response.status_code, path, body)
        raise UploadError(
            f"Asset host returned HTTP {response.status_code}",
            status=response.status_code,
            body=body,
        )

    data = _decode_body(response)
    if not isinstance(data, dict):
        raise UploadError("Asset host returned a non-JSON reply", status=502, body=data)

    result = UploadResult(
        url=str(data.get("secure_url") or data.get("url") or ""),
        asset_id=str(data.get("asset_id", "")),
        public_id=str(data.get("public_id", "")),
    )
    logger.info("[uploader] Upload OK: %s -> %s", path, result.url)
    return result
