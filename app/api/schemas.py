"""
Pydantic schemas for API request / response models.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Screenshot schemas
# ---------------------------------------------------------------------------

ImageType = Literal["png", "jpeg", "webp"]
Encoding = Literal["url", "base64"]


class CaptureOptions(BaseModel):
    """Query parameters of one capture request."""
    url: Optional[str] = Field(default=None, description="Page to capture")
    width: Optional[int] = Field(default=None, gt=0, description="Viewport width in pixels")
    height: Optional[int] = Field(default=None, gt=0, description="Viewport height in pixels")
    quality: Optional[int] = Field(default=None, ge=0, le=100, description="jpeg/webp quality")
    type: ImageType = Field(default="png", description="Output image format")
    full_page: bool = Field(default=False, description="Capture the full scrollable page")
    encoding: Encoding = Field(default="url", description="'url' for a link, 'base64' for inline data")


class AssetId(BaseModel):
    """Identifiers assigned by the asset host."""
    asset: str
    public: str


class ScreenshotResponse(BaseModel):
    """Result of a capture request."""
    message: str
    image: Optional[str] = Field(default=None, description="Image URL or inline base64 payload")
    id: Optional[AssetId] = None


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    service: str = "shot-api"
