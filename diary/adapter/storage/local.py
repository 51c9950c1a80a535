"""Local filesystem media storage."""

import asyncio
import mimetypes
from pathlib import Path
from uuid import uuid4

import logfire

from diary.adapter.error import StorageError
from diary.domain.service.storage_service import MediaStorage, StoredFile


def _extension(filename: str, content_type: str) -> str:
    suffix = Path(filename).suffix.lower()
    if suffix and len(suffix) <= 10:
        return suffix
    return mimetypes.guess_extension(content_type) or ""


class LocalMediaStorage(MediaStorage):
    """Stores media files under a directory served at a public URL prefix."""

    def __init__(self, media_root: str, public_base_url: str) -> None:
        """Initialize local storage.

        Args:
            media_root: Directory files are written to
            public_base_url: URL prefix under which media_root is served
        """
        self.media_root = Path(media_root)
        self.public_base_url = public_base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        path = (self.media_root / key).resolve()
        if self.media_root.resolve() not in path.parents:
            raise StorageError(f"Invalid storage key: {key}")
        return path

    async def store(self, data: bytes, filename: str, content_type: str) -> StoredFile:
        """Write a file under a random key."""
        key = f"{uuid4().hex}{_extension(filename, content_type)}"
        path = self._path(key)
        try:
            await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            logfire.error("Failed to store media", key=key, error=str(e))
            raise StorageError(f"Failed to store media: {e}")

        logfire.info("Media stored", key=key, size=len(data))
        return StoredFile(key=key, url=f"{self.public_base_url}/{key}", size=len(data))

    async def delete(self, key: str) -> None:
        """Delete a stored file; missing files are ignored."""
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete media: {e}")
        logfire.info("Media deleted", key=key)


class InMemoryMediaStorage(MediaStorage):
    """Media storage keeping files in a dict, for testing."""

    def __init__(self, public_base_url: str = "http://testserver/media") -> None:
        self.public_base_url = public_base_url
        self.files: dict[str, bytes] = {}
        self.fail_deletes = False  # Set to True to simulate storage outages

    async def store(self, data: bytes, filename: str, content_type: str) -> StoredFile:
        key = f"{uuid4().hex}{_extension(filename, content_type)}"
        self.files[key] = data
        return StoredFile(key=key, url=f"{self.public_base_url}/{key}", size=len(data))

    async def delete(self, key: str) -> None:
        if self.fail_deletes:
            raise StorageError("Simulated storage failure")
        self.files.pop(key, None)
