"""Local preview files for uploaded media"""

import logging
import mimetypes
import tempfile
from pathlib import Path
from typing import Optional
from uuid import uuid4

logger = logging.getLogger(__name__)


class PreviewHandle:
    """Handle to a locally viewable copy of one media item.

    Only valid on this machine; never sent to Gemini.
    """

    def __init__(self, store: "PreviewStore", key: str, path: Path, mime_type: str):
        self._store = store
        self.key = key
        self.path = path
        self.mime_type = mime_type

    @property
    def released(self) -> bool:
        return not self._store.is_open(self.key)

    def release(self) -> None:
        self._store.release(self.key)

    def __repr__(self) -> str:
        return f"PreviewHandle(key={self.key!r}, path={str(self.path)!r})"


class PreviewStore:
    """Directory of preview files with explicit release"""

    def __init__(self, preview_dir: Optional[Path] = None):
        if preview_dir is None:
            preview_dir = Path(tempfile.gettempdir()) / "spotcheck-previews"
        self.preview_dir = Path(preview_dir)
        self.preview_dir.mkdir(parents=True, exist_ok=True)

        # key -> path
        self._open: dict[str, Path] = {}

    def create(self, data: bytes, mime_type: str) -> PreviewHandle:
        """Write preview file and return its handle"""
        key = uuid4().hex
        suffix = mimetypes.guess_extension(mime_type) or ""
        path = self.preview_dir / f"{key}{suffix}"
        path.write_bytes(data)

        self._open[key] = path

        logger.debug(f"Preview created: {path.name} ({len(data)} bytes)")
        return PreviewHandle(self, key, path, mime_type)

    def is_open(self, key: str) -> bool:
        return key in self._open

    def release(self, key: str) -> bool:
        """Delete preview file. Returns False if the key was not open."""
        path = self._open.pop(key, None)
        if path is None:
            logger.warning(f"Preview {key} already released")
            return False

        path.unlink(missing_ok=True)
        logger.debug(f"Preview released: {path.name}")
        return True

    def clear(self):
        """Release all open previews"""
        for key in list(self._open):
            self.release(key)

    @property
    def open_count(self) -> int:
        return len(self._open)
