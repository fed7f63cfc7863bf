"""SpotCheck services"""

from spotcheck.services.preview_store import PreviewHandle, PreviewStore
from spotcheck.services.media_encoder import LocalFile, MediaEncoder
from spotcheck.services.aggregator import BatchOutcome, FileRejection, InputAggregator
from spotcheck.services.gemini_client import GeminiClient, InferenceResponse
from spotcheck.services.result_interpreter import interpret, render_lines
from spotcheck.services.session import SpotCheckSession

__all__ = [
    "PreviewHandle",
    "PreviewStore",
    "LocalFile",
    "MediaEncoder",
    "BatchOutcome",
    "FileRejection",
    "InputAggregator",
    "GeminiClient",
    "InferenceResponse",
    "interpret",
    "render_lines",
    "SpotCheckSession",
]
