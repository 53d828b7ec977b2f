"""
Employee image uploads, stored on disk and served from ``/uploads``.

Stored names look like ``image-<epoch ms>-<9 random digits><ext>``, so
concurrent uploads never collide and no locking is needed.
"""

from __future__ import annotations

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import BadInput

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"
ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def unique_filename(original: str, field: str = "image") -> str:
    suffix = Path(original).suffix.lower()
    return f"{field}-{int(time.time() * 1000)}-{secrets.randbelow(10**9):09d}{suffix}"


async def save_image(file: UploadFile) -> str:
    """Validate and store an uploaded image, returning its public path."""
    filename = file.filename or ""
    extension = Path(filename).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS or file.content_type not in ALLOWED_CONTENT_TYPES:
        raise BadInput("Only image files are allowed!")

    content = await file.read()
    max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(content) > max_size:
        raise BadInput(f"File size too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB}MB.")

    stored = unique_filename(filename)
    (upload_dir() / stored).write_bytes(content)
    logger.info("Stored upload %s (%d bytes)", stored, len(content))
    return f"{PUBLIC_PREFIX}/{stored}"


def remove_image(public_path: str | None) -> None:
    """Delete a previously stored image; failures are only logged."""
    if not public_path:
        return
    target = upload_dir() / Path(public_path).name
    try:
        target.unlink()
        logger.info("Removed upload %s", target.name)
    except OSError as exc:
        logger.warning("Could not remove upload %s: %s", target, exc)
