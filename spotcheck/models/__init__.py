"""Shared models"""

from spotcheck.models.model_config import (
    DEFAULT_MODEL,
    MAX_FILES,
    MAX_FILE_SIZE_MB,
    MAX_FILE_SIZE_BYTES,
    ALLOWED_MIME_TYPES,
    EXTENSION_MIME_TYPES,
)
from spotcheck.models.media import InlineMedia, MediaItem
from spotcheck.models.submission import InputMode, SubmissionState, clean_text
from spotcheck.models.analysis import (
    Coordinates,
    WebSource,
    MapSource,
    Citation,
    TextSegment,
    DisplayLine,
    AnalysisResult,
)

__all__ = [
    # Config
    "DEFAULT_MODEL",
    "MAX_FILES",
    "MAX_FILE_SIZE_MB",
    "MAX_FILE_SIZE_BYTES",
    "ALLOWED_MIME_TYPES",
    "EXTENSION_MIME_TYPES",
    # Media
    "InlineMedia",
    "MediaItem",
    # Submission
    "InputMode",
    "SubmissionState",
    "clean_text",
    # Analysis
    "Coordinates",
    "WebSource",
    "MapSource",
    "Citation",
    "TextSegment",
    "DisplayLine",
    "AnalysisResult",
]
