"""
Centralized configuration management

All configuration values are read from environment variables,
with sensible defaults for development.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # --- FastAPI ---
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "info"

    # --- Access ---
    # Empty = endpoint is public (no x-api-key check).
    api_key: str = ""

    # --- Asset upload ---
    # Empty = no remote upload; images are served from image_dir instead.
    upload_url: str = ""
    upload_preset: str = "screenshots"
    upload_timeout: float = 60.0

    # --- Local images ---
    image_dir: str = "public/images"
    public_base_url: str = "http://localhost:8000"
    # Locally served captures are kept until they are older than this.
    # Pruned on each locally served capture; 0 = keep forever.
    image_max_age_seconds: int = 3600

    # --- Renderer ---
    render_default_width: int = 1280
    render_default_height: int = 720
    render_timeout_ms: int = 30000
    render_settle_ms: int = 500
    render_webp_quality: int = 80

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance (singleton)."""
    return Settings()
