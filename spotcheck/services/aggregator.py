"""Input aggregation - bounded media collection and link fields"""

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from spotcheck.exceptions import MediaError, TooManyFilesError
from spotcheck.models import MAX_FILES, InputMode, MediaItem, SubmissionState, clean_text
from spotcheck.services.media_encoder import MediaEncoder, UploadSource

logger = logging.getLogger(__name__)


@dataclass
class FileRejection:
    filename: str
    reason: str


@dataclass
class BatchOutcome:
    """Result of one add_batch call"""

    admitted: list[MediaItem] = field(default_factory=list)
    rejected: list[FileRejection] = field(default_factory=list)

    @property
    def error_message(self) -> Optional[str]:
        """Single message covering every skipped file"""
        if not self.rejected:
            return None
        return " ".join(r.reason for r in self.rejected)


class InputAggregator:
    """Holds the submission being composed.

    Over-cap batches are refused as a whole. Inside an admitted batch each
    file is validated on its own and invalid ones are skipped.
    """

    def __init__(self, encoder: MediaEncoder, max_files: int = MAX_FILES):
        self.encoder = encoder
        self.max_files = max_files
        self.state = SubmissionState()
        self._batch_lock = asyncio.Lock()
        self._generation = 0

    @property
    def media(self) -> list[MediaItem]:
        return self.state.media

    @property
    def mode(self) -> InputMode:
        return self.state.mode

    async def add_batch(self, files: Sequence[UploadSource]) -> BatchOutcome:
        """Validate, encode and append a batch of files in order.

        Batches run one at a time so the cap holds across concurrent uploads.
        A reset while the batch is encoding drops the rest of the batch.
        """
        async with self._batch_lock:
            if len(self.state.media) + len(files) > self.max_files:
                raise TooManyFilesError(
                    f"You can upload up to {self.max_files} files. "
                    f"{len(self.state.media)} already added, {len(files)} more selected."
                )

            generation = self._generation
            outcome = BatchOutcome()
            for source in files:
                try:
                    item = await self.encoder.encode(source)
                except MediaError as e:
                    logger.warning(f"Skipping file {e.filename}: {e}")
                    outcome.rejected.append(FileRejection(filename=e.filename or "file", reason=str(e)))
                    continue

                if generation != self._generation:
                    item.release()
                    logger.info(f"Input was reset, dropping rest of batch after {item.filename}")
                    break
                self.state.media.append(item)
                outcome.admitted.append(item)

            logger.info(
                f"Batch added: admitted={len(outcome.admitted)}, rejected={len(outcome.rejected)}, "
                f"total={len(self.state.media)}"
            )
            return outcome

    def remove(self, index: int) -> MediaItem:
        """Remove item at zero-based position and release it"""
        if not 0 <= index < len(self.state.media):
            raise IndexError(f"No media at position {index}")
        item = self.state.media.pop(index)
        item.release()
        return item

    def set_source_link(self, source_link: Optional[str]):
        self.state.source_link = clean_text(source_link)

    def set_video_link(
        self,
        video_url: Optional[str],
        start_time: Optional[str] = None,
        duration_seconds: Optional[str] = None,
    ):
        self.state.video_url = clean_text(video_url)
        self.state.start_time = clean_text(start_time)
        self.state.duration_seconds = clean_text(duration_seconds)

    def switch_mode(self, mode: InputMode):
        """Change input mode. Accumulated media is kept."""
        self.state.mode = InputMode(mode)

    def reset(self):
        """Release all media and clear link fields"""
        self._generation += 1
        for item in self.state.media:
            item.release()
        self.state.media.clear()
        self.state.source_link = None
        self.state.video_url = None
        self.state.start_time = None
        self.state.duration_seconds = None

    def snapshot(self) -> SubmissionState:
        """Shallow copy for prompt building"""
        snap = copy.copy(self.state)
        snap.media = list(self.state.media)
        return snap
