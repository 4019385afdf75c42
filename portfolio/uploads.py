import logging
import os
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from django.core.files.storage import default_storage
from rest_framework import serializers

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


class ImageRejected(serializers.ValidationError):
    pass


@dataclass(frozen=True)
class StoredImage:
    path: str
    url: str


def validate_image(content_type: Optional[str], size: int) -> None:
    """Checks run before the object store is contacted."""
    if not (content_type or "").startswith("image/"):
        raise ImageRejected({"file": ["Please upload an image file"]})
    if size > MAX_IMAGE_BYTES:
        raise ImageRejected({"file": ["Image size must be less than 5MB"]})


def object_name(folder: str, filename: str) -> str:
    """``<folder>/<epoch ms>-<random>.<ext>``; never reuses a caller's filename."""
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower() or "bin"
    return f"{folder.strip('/')}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"


def store_image(upload, folder: str = "images", storage=None) -> StoredImage:
    validate_image(getattr(upload, "content_type", None), upload.size)
    storage = storage or default_storage
    path = storage.save(object_name(folder, upload.name), upload)
    url = storage.url(path)
    logger.info("stored image %s (%d bytes)", path, upload.size)
    return StoredImage(path=path, url=url)


def delete_image(path: str, storage=None) -> None:
    storage = storage or default_storage
    storage.delete(path)
    logger.info("deleted image %s", path)
