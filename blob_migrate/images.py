"""Image discovery and content-type resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from filetype import guess

from .models import ImageRecord

logger = logging.getLogger("blob_migrate")

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".ico", ".heic"}
CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".heic": "image/heic",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def detect_image_mime(data: bytes) -> Optional[str]:
    """Detect an image MIME type from the file signature using filetype."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.mime
    return None


def content_type_for(file_name: str, data: Optional[bytes] = None) -> str:
    """Map a file name to the content type sent to the blob store."""
    ext = Path(file_name).suffix.lower()
    if ext in CONTENT_TYPES:
        return CONTENT_TYPES[ext]
    if data:
        detected = detect_image_mime(data)
        if detected:
            logger.debug("Detected %s for %s from file signature", detected, file_name)
            return detected
    return DEFAULT_CONTENT_TYPE


def is_image_name(name: str) -> bool:
    return Path(name).suffix.lower() in IMAGE_EXTENSIONS


def find_images(directory: Path) -> List[ImageRecord]:
    """List image files directly inside ``directory`` (no recursion)."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Images directory does not exist: {directory}")
    images: List[ImageRecord] = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_file() and is_image_name(entry.name):
            images.append(ImageRecord(path=entry, file_name=entry.name))
    return images
