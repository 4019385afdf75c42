import logging
import mimetypes
import posixpath
from typing import List, Optional, Tuple

from django.conf import settings
from django.core.files.base import ContentFile, File
from django.core.files.storage import Storage
from django.utils.deconstruct import deconstructible

from .supabase_client import get_service_client, project_url

logger = logging.getLogger(__name__)


@deconstructible
class SupabaseMediaStorage(Storage):
    """Public Supabase Storage bucket holding the admin's uploaded images.

    Objects are written once under generated names and served straight from
    the bucket's public URL.
    """

    def __init__(self, bucket: str = "", cache_control: str = "3600") -> None:
        self.bucket: str = bucket or getattr(settings, "SUPABASE_BUCKET", "") or "portfolio-assets"
        self.cache_control = cache_control
        self.public_base = f"{project_url().rstrip('/')}/storage/v1/object/public/{self.bucket}"

    def _bucket(self):
        return get_service_client().storage.from_(self.bucket)

    @staticmethod
    def _key(name: str) -> str:
        return name.replace("\\", "/").lstrip("/")

    def _entry(self, name: str) -> Optional[dict]:
        folder, basename = posixpath.split(self._key(name))
        listing = self._bucket().list(folder or None, {"search": basename})
        for item in listing:
            item = _as_dict(item)
            if item.get("name") == basename:
                return item
        return None

    def _open(self, name: str, mode: str = "rb") -> File:
        data = self._bucket().download(self._key(name))
        return ContentFile(data, name=name)

    def _save(self, name: str, content: File) -> str:
        key = self._key(name)
        content.seek(0)
        data = content.read()
        content_type = (
            getattr(content, "content_type", None)
            or mimetypes.guess_type(key)[0]
            or "application/octet-stream"
        )
        self._bucket().upload(
            key,
            data,
            file_options={"content-type": content_type, "cache-control": self.cache_control},
        )
        logger.debug("uploaded %s to bucket %s", key, self.bucket)
        return key

    def exists(self, name: str) -> bool:
        return self._entry(name) is not None

    def url(self, name: str) -> str:
        return f"{self.public_base}/{self._key(name)}"

    def delete(self, name: str) -> None:
        self._bucket().remove([self._key(name)])

    def size(self, name: str) -> int:
        entry = self._entry(name)
        if entry is None:
            raise FileNotFoundError(name)
        return int((entry.get("metadata") or {}).get("size") or 0)

    def listdir(self, path: str) -> Tuple[List[str], List[str]]:
        dirs: List[str] = []
        files: List[str] = []
        for item in self._bucket().list(self._key(path) or None):
            item = _as_dict(item)
            # Folders come back without an id
            (files if item.get("id") else dirs).append(item.get("name", ""))
        return dirs, files


def _as_dict(item) -> dict:
    if isinstance(item, dict):
        return item
    return {"name": getattr(item, "name", ""), "id": getattr(item, "id", None), "metadata": getattr(item, "metadata", None)}
