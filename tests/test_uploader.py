"""
Unit tests for the asset-host uploader.

httpx.MockTransport stands in for the asset host; no network access.

Usage:
    pytest tests/test_uploader.py -v
"""

import httpx
import pytest

from app.config import Settings
from app.util.uploader import UploadError, upload_image


UPLOAD_URL = "https://assets.example.com/v1/upload"


def make_settings(**overrides) -> Settings:
    values = {"upload_url": UPLOAD_URL, "upload_preset": "screenshots"}
    values.update(overrides)
    return Settings(**values)


def make_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "abc123.png"
    path.write_bytes(b"\x89PNG fake")
    return path


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------

def test_upload_sends_multipart_file_and_preset(image_file):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.read()
        return httpx.Response(200, json={
            "asset_id": "a-1",
            "public_id": "p-1",
            "url": "http://cdn.example.com/abc123.png",
            "secure_url": "https://cdn.example.com/abc123.png",
        })

    result = upload_image(image_file, settings=make_settings(), client=make_client(handler))

    assert seen["url"] == UPLOAD_URL
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="upload_preset"' in seen["body"]
    assert b"screenshots" in seen["body"]
    assert b'filename="abc123.png"' in seen["body"]
    assert result.url == "https://cdn.example.com/abc123.png"
    assert result.asset_id == "a-1"
    assert result.public_id == "p-1"


def test_upload_falls_back_to_plain_url(image_file):
    def handler(request):
        return httpx.Response(200, json={"asset_id": "a", "public_id": "p", "url": "http://cdn/x.png"})

    result = upload_image(image_file, settings=make_settings(), client=make_client(handler))
    assert result.url == "http://cdn/x.png"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

def test_upstream_error_status_and_body_are_kept(image_file):
    def handler(request):
        return httpx.Response(403, json={"error": {"message": "Invalid upload preset"}})

    with pytest.raises(UploadError) as excinfo:
        upload_image(image_file, settings=make_settings(), client=make_client(handler))

    assert excinfo.value.status == 403
    assert excinfo.value.body == {"error": {"message": "Invalid upload preset"}}


def test_upstream_text_error_body(image_file):
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(UploadError) as excinfo:
        upload_image(image_file, settings=make_settings(), client=make_client(handler))

    assert excinfo.value.status == 502
    assert excinfo.value.body == "bad gateway"


def test_transport_error_has_no_status(image_file):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UploadError) as excinfo:
        upload_image(image_file, settings=make_settings(), client=make_client(handler))

    assert excinfo.value.status is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(UploadError, match="File not found"):
        upload_image(tmp_path / "nope.png", settings=make_settings())


def test_unconfigured_upload_url_raises(image_file):
    with pytest.raises(UploadError, match="UPLOAD_URL"):
        upload_image(image_file, settings=make_settings(upload_url=""))
