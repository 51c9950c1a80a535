"""Multipart upload helpers."""

from fastapi import UploadFile

from diary.domain.error import ValidationError
from diary.domain.service import Upload


async def read_upload(file: UploadFile, max_bytes: int) -> Upload:
    """Read an uploaded file into memory.

    Raises:
        ValidationError: If the file is larger than ``max_bytes``
    """
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(
            f"File {file.filename or 'upload'} exceeds the {max_bytes // (1024 * 1024)}MB limit"
        )
    return Upload(
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )


async def read_uploads(files: list[UploadFile] | None, max_bytes: int) -> list[Upload]:
    return [await read_upload(f, max_bytes) for f in files or [] if f.filename]
