"""Custom exceptions"""

from typing import Optional


class AppError(Exception):
    """Base application error"""

    pass


class ServiceError(AppError):
    """Service layer error"""

    pass


class InferenceError(ServiceError):
    """Gemini call failed (network, quota, malformed response)"""

    pass


class MediaError(AppError):
    """Media validation or encoding error"""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


class InvalidTypeError(MediaError):
    """MIME type is not in the allow-list"""

    pass


class OversizeError(MediaError):
    """File exceeds the per-file size cap"""

    pass


class FileProcessingError(MediaError):
    """File could not be read or encoded"""

    pass


class TooManyFilesError(MediaError):
    """Admitting the batch would exceed the item cap"""

    pass


class SubmissionError(AppError):
    """Submission cannot be analyzed in its current state"""

    pass


class EmptySubmissionError(SubmissionError):
    """Nothing to analyze for the selected mode"""

    pass


class AnalysisInProgressError(SubmissionError):
    """Another analysis is already running for this session"""

    pass
