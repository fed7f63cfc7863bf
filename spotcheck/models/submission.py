"""Submission state entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from spotcheck.models.media import MediaItem


class InputMode(str, Enum):
    UPLOAD = "upload"
    VIDEO_LINK = "video_link"


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip user text, blank -> None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class SubmissionState:
    """Pending request the user is composing"""

    mode: InputMode = InputMode.UPLOAD
    media: list[MediaItem] = field(default_factory=list)
    source_link: Optional[str] = None
    video_url: Optional[str] = None
    start_time: Optional[str] = None
    duration_seconds: Optional[str] = None

    @property
    def is_submittable(self) -> bool:
        if self.mode == InputMode.UPLOAD:
            return len(self.media) > 0
        return bool(self.video_url)
