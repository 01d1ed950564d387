"""
Transient on-disk image files.
"""

import base64
import logging
import time
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


def save_image(data: bytes, image_type: str, directory: str) -> Path:
    """Write ``data`` to ``<directory>/<random id>.<image_type>`` and return the path."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{uuid.uuid4().hex}.{image_type}"
    path.write_bytes(data)
    logger.debug("[storage] Saved %s (%d bytes)", path, len(data))
    return path


def read_base64(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("utf-8")


def prune_images(directory: str, max_age_seconds: float) -> int:
    """Delete files in ``directory`` older than ``max_age_seconds``; return how many went."""
    out_dir = Path(directory)
    if not out_dir.is_dir():
        return 0
    cutoff = time.time() - max_age_seconds
    removed = 0
    for path in out_dir.iterdir():
        try:
            if path.is_file() and path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning("[storage] Could not prune %s: %s", path, e)
    if removed:
        logger.info("[storage] Pruned %d image(s) older than %ss from %s", removed, max_age_seconds, out_dir)
    return removed


def delete_image(path: Path) -> None:
    """Remove a saved image; a file that is already gone is fine."""
    try:
        path.unlink()
        logger.debug("[storage] Deleted %s", path)
    except FileNotFoundError:
        logger.debug("[storage] Already gone: %s", path)
