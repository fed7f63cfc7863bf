"""Media entities"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, field_validator

from spotcheck.models.model_config import ALLOWED_MIME_TYPES

if TYPE_CHECKING:
    from spotcheck.services.preview_store import PreviewHandle


class InlineMedia(BaseModel):
    """Inline media part sent to Gemini: MIME type + base64 payload"""

    mime_type: str
    data: str

    @field_validator("mime_type")
    @classmethod
    def mime_type_allowed(cls, v: str) -> str:
        if v not in ALLOWED_MIME_TYPES:
            raise ValueError(f"unsupported mime_type: {v}")
        return v


@dataclass
class MediaItem:
    """One user-supplied image or clip, encoded and ready to submit.

    The item owns its raw bytes and its preview handle. Both are dropped by
    release(), which is safe to call more than once.
    """

    filename: str
    mime_type: str
    data: bytes = field(repr=False)
    base64_data: str = field(repr=False)
    preview: Optional["PreviewHandle"] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")

    @property
    def is_released(self) -> bool:
        return self.preview is None and not self.data

    def to_inline(self) -> InlineMedia:
        return InlineMedia(mime_type=self.mime_type, data=self.base64_data)

    def release(self) -> None:
        """Release preview handle and drop raw content"""
        if self.preview is not None:
            self.preview.release()
            self.preview = None
        self.data = b""
        self.base64_data = ""
