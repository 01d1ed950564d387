"""
FastAPI application entry point for the Shot API service.
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import get_settings
from .api.routes import router


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup / shutdown hooks."""
    logging.getLogger(__name__).info(
        "Shot API starting up (upload=%s, protected=%s) ...",
        bool(settings.upload_url), bool(settings.api_key),
    )
    yield
    logging.getLogger(__name__).info("Shot API shutting down ...")


app = FastAPI(
    title="Shot API",
    description="Capture web pages as images with headless Chromium, "
                "optionally uploading them to an asset host.",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed query parameters as 400 with the service's {message} body."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:]) or "request"
    return JSONResponse(
        status_code=400,
        content={"message": f"Invalid {field}: {first.get('msg', 'bad value')}"},
    )


app.include_router(router, prefix="/api")

os.makedirs(settings.image_dir, exist_ok=True)
app.mount("/images", StaticFiles(directory=settings.image_dir), name="images")


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=False,
    )
