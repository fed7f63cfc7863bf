"""SpotCheck - locate skate and snowboard spots from media with Gemini"""

from spotcheck.exceptions import (
    AppError,
    ServiceError,
    InferenceError,
    MediaError,
    InvalidTypeError,
    OversizeError,
    FileProcessingError,
    TooManyFilesError,
    SubmissionError,
    EmptySubmissionError,
    AnalysisInProgressError,
)
from spotcheck.agent_core import (
    SYSTEM_INSTRUCTION,
    BuiltPrompt,
    build_prompt,
    build_upload_prompt,
    build_video_link_prompt,
)
from spotcheck.models import (
    InputMode,
    MediaItem,
    SubmissionState,
    AnalysisResult,
    Coordinates,
    WebSource,
    MapSource,
)

__version__ = "1.0.0"

__all__ = [
    # Exceptions
    "AppError",
    "ServiceError",
    "InferenceError",
    "MediaError",
    "InvalidTypeError",
    "OversizeError",
    "FileProcessingError",
    "TooManyFilesError",
    "SubmissionError",
    "EmptySubmissionError",
    "AnalysisInProgressError",
    # Agent core
    "SYSTEM_INSTRUCTION",
    "BuiltPrompt",
    "build_prompt",
    "build_upload_prompt",
    "build_video_link_prompt",
    # Models
    "InputMode",
    "MediaItem",
    "SubmissionState",
    "AnalysisResult",
    "Coordinates",
    "WebSource",
    "MapSource",
]
