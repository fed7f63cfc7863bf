"""Media validation and base64 encoding"""

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Protocol

from spotcheck.exceptions import FileProcessingError, InvalidTypeError, OversizeError
from spotcheck.models import (
    ALLOWED_MIME_TYPES,
    EXTENSION_MIME_TYPES,
    MAX_FILE_SIZE_BYTES,
    MAX_FILE_SIZE_MB,
    MediaItem,
)
from spotcheck.services.preview_store import PreviewStore

logger = logging.getLogger(__name__)


class UploadSource(Protocol):
    """Anything file-like the encoder accepts (fastapi.UploadFile fits)"""

    filename: Optional[str]
    content_type: Optional[str]
    size: Optional[int]

    async def read(self) -> bytes: ...


class LocalFile:
    """Upload source backed by a file on disk"""

    def __init__(self, path: Path, content_type: Optional[str] = None):
        self.path = Path(path)
        self.filename = self.path.name
        self.content_type = content_type or guess_mime_type(self.path)
        self.size: Optional[int] = None
        if self.path.exists():
            self.size = self.path.stat().st_size

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


def guess_mime_type(path: Path) -> str:
    """Guess MIME type from extension"""
    mime_type = EXTENSION_MIME_TYPES.get(path.suffix.lower())
    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or "application/octet-stream"


def validate_type(mime_type: Optional[str], filename: Optional[str] = None) -> str:
    """Check MIME type against the allow-list (exact match)"""
    if mime_type not in ALLOWED_MIME_TYPES:
        raise InvalidTypeError(
            f"{filename or 'file'}: unsupported type '{mime_type}'. "
            "Please upload a valid image (JPG, PNG, WebP) or video (MP4, WebM, MOV).",
            filename=filename,
        )
    return mime_type


def validate_size(size: int, filename: Optional[str] = None) -> int:
    """Check per-file size cap"""
    if size > MAX_FILE_SIZE_BYTES:
        raise OversizeError(
            f"{filename or 'file'}: file size too large. "
            f"Please upload files smaller than {MAX_FILE_SIZE_MB}MB.",
            filename=filename,
        )
    return size


def encode_bytes(data: bytes) -> str:
    """Base64-encode raw bytes (no data-URL prefix)"""
    return base64.b64encode(data).decode("ascii")


def strip_data_url_prefix(encoded: str) -> str:
    """Remove 'data:<mime>;base64,' declaration if present"""
    if encoded.startswith("data:") and "," in encoded:
        return encoded.split(",", 1)[1]
    return encoded


class MediaEncoder:
    """Turns upload sources into MediaItems with preview handles"""

    def __init__(self, preview_store: PreviewStore):
        self.preview_store = preview_store

    async def encode(self, source: UploadSource) -> MediaItem:
        """Validate and encode one file.

        Raises:
            InvalidTypeError: MIME type not allowed
            OversizeError: file larger than the cap
            FileProcessingError: file could not be read or encoded
        """
        filename = source.filename or "file"
        mime_type = validate_type(source.content_type, filename)

        declared_size = getattr(source, "size", None)
        if declared_size is not None:
            validate_size(declared_size, filename)

        try:
            data = await source.read()
        except Exception as e:
            logger.error(f"Failed to process file {filename}: {e}", exc_info=True)
            raise FileProcessingError(
                f"{filename}: failed to process file.", filename=filename
            ) from e

        validate_size(len(data), filename)
        encoded = encode_bytes(data)

        try:
            preview = self.preview_store.create(data, mime_type)
        except OSError as e:
            logger.error(f"Failed to create preview for {filename}: {e}", exc_info=True)
            raise FileProcessingError(
                f"{filename}: failed to process file.", filename=filename
            ) from e

        logger.info(f"Encoded {filename}: mime={mime_type}, size={len(data)}")
        return MediaItem(
            filename=filename,
            mime_type=mime_type,
            data=data,
            base64_data=encoded,
            preview=preview,
        )
