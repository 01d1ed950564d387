"""
HTTP-level tests for the screenshot routes.

Usage:
    pytest tests/test_routes.py -v
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.api.handler import ScreenshotHandler
from app.api.routes import get_handler
from app.config import Settings, get_settings
from app.main import app
from app.util.uploader import UploadError, UploadResult


def fake_capture(url, **kwargs):
    return b"fake image"


def fake_upload(path, settings=None):
    return UploadResult(url=f"https://cdn.example.com/{path.name}", asset_id="a", public_id="p")


def failing_upload(path, settings=None):
    raise UploadError("Asset host returned HTTP 429", status=429, body="slow down")


@pytest.fixture
def make_client(tmp_path):
    def _make(upload=fake_upload, **overrides):
        values = {
            "api_key": "secret",
            "upload_url": "https://assets.example.com/upload",
            "image_dir": str(tmp_path),
        }
        values.update(overrides)
        settings = Settings(**values)
        app.dependency_overrides[get_handler] = lambda: ScreenshotHandler(
            settings, capture=fake_capture, upload=upload,
        )
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health():
    with TestClient(app) as client:
        resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "shot-api"}


def test_missing_url(make_client):
    resp = make_client().get("/api/screenshot", headers={"x-api-key": "secret"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "URL is required"}


def test_invalid_url_has_no_image(make_client):
    resp = make_client().get("/api/screenshot", params={"url": "not a url"}, headers={"x-api-key": "secret"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid URL"
    assert body.get("image") is None


def test_bad_api_key(make_client):
    resp = make_client().get("/api/screenshot", params={"url": "example.com"}, headers={"x-api-key": "wrong"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


def test_missing_api_key(make_client):
    resp = make_client().get("/api/screenshot", params={"url": "example.com"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "API Key is required"}


def test_jpeg_success(make_client):
    resp = make_client().get(
        "/api/screenshot",
        params={"url": "https://example.com", "type": "jpeg", "width": 800, "quality": 90},
        headers={"x-api-key": "secret"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Here is your shot"
    assert body["image"].endswith(".jpeg")
    assert body["id"] == {"asset": "a", "public": "p"}


def test_upload_failure_status_passes_through(make_client):
    resp = make_client(upload=failing_upload).get(
        "/api/screenshot", params={"url": "example.com"}, headers={"x-api-key": "secret"},
    )
    assert resp.status_code == 429
    assert resp.json() == {"message": "slow down"}


@pytest.mark.parametrize("params", [
    {"url": "example.com", "type": "gif"},
    {"url": "example.com", "quality": 101},
    {"url": "example.com", "width": 0},
    {"url": "example.com", "height": "tall"},
])
def test_bad_query_parameters_are_400(make_client, params):
    resp = make_client().get("/api/screenshot", params=params, headers={"x-api-key": "secret"})
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Invalid ")


def test_local_image_is_served():
    # /images is mounted on the image dir configured at startup
    image_dir = Path(get_settings().image_dir)
    (image_dir / "sample.png").write_bytes(b"png bytes")
    with TestClient(app) as client:
        resp = client.get("/images/sample.png")
    assert resp.status_code == 200
    assert resp.content == b"png bytes"
