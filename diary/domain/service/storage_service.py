"""Media storage interface."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """Location of a file written to media storage."""

    key: str
    url: str
    size: int


class MediaStorage:
    """Media storage interface (filesystem, object store, ...)."""

    async def store(self, data: bytes, filename: str, content_type: str) -> StoredFile:
        """Store a file.

        Args:
            data: File contents
            filename: Original client filename
            content_type: MIME type

        Returns:
            Key and public URL of the stored file
        """
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        """Delete a stored file by key."""
        raise NotImplementedError
