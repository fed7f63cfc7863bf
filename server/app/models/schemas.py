"""API request/response schemas"""

from typing import Optional

from pydantic import BaseModel, Field

from spotcheck.models import (
    AnalysisResult,
    Citation,
    Coordinates,
    DisplayLine,
    InputMode,
    MapSource,
    MediaItem,
    WebSource,
)
from spotcheck.services import SpotCheckSession, render_lines


# === Request Schemas ===


class SourceLinkRequest(BaseModel):
    """Page where the uploaded media was found"""

    source_link: Optional[str] = None


class VideoLinkRequest(BaseModel):
    """Video URL with optional clip window hints"""

    video_url: Optional[str] = None
    start_time: Optional[str] = None
    duration_seconds: Optional[str] = None


class SwitchModeRequest(BaseModel):
    mode: InputMode


# === Response Schemas ===


class MediaItemResponse(BaseModel):
    """Uploaded media summary (no payload)"""

    index: int
    filename: str
    mime_type: str
    size_bytes: int
    is_video: bool
    preview_path: Optional[str] = None

    @classmethod
    def from_item(cls, index: int, item: MediaItem) -> "MediaItemResponse":
        return cls(
            index=index,
            filename=item.filename,
            mime_type=item.mime_type,
            size_bytes=item.size_bytes,
            is_video=item.is_video,
            preview_path=str(item.preview.path) if item.preview else None,
        )


class AnalysisResponse(BaseModel):
    """Interpreted analysis with display lines and bucketed sources"""

    text: str
    lines: list[DisplayLine] = Field(default_factory=list)
    coordinates: Optional[Coordinates] = None
    citations: list[Citation] = Field(default_factory=list)
    web_sources: list[WebSource] = Field(default_factory=list)
    map_sources: list[MapSource] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls(
            text=result.text,
            lines=render_lines(result.text),
            coordinates=result.coordinates,
            citations=result.citations,
            web_sources=result.web_sources,
            map_sources=result.map_sources,
        )


class SessionResponse(BaseModel):
    """Current session state"""

    id: str
    mode: InputMode
    media: list[MediaItemResponse] = Field(default_factory=list)
    source_link: Optional[str] = None
    video_url: Optional[str] = None
    start_time: Optional[str] = None
    duration_seconds: Optional[str] = None
    is_analyzing: bool = False
    can_submit: bool = False
    error: Optional[str] = None
    result: Optional[AnalysisResponse] = None

    @classmethod
    def from_session(cls, session: SpotCheckSession) -> "SessionResponse":
        state = session.aggregator.state
        return cls(
            id=session.id,
            mode=state.mode,
            media=[MediaItemResponse.from_item(i, item) for i, item in enumerate(state.media)],
            source_link=state.source_link,
            video_url=state.video_url,
            start_time=state.start_time,
            duration_seconds=state.duration_seconds,
            is_analyzing=session.is_analyzing,
            can_submit=session.can_submit,
            error=session.error,
            result=AnalysisResponse.from_result(session.result) if session.result else None,
        )


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    version: str
    model: str


class FileRejectionResponse(BaseModel):
    filename: str
    reason: str


class BatchResponse(BaseModel):
    """Result of adding a batch of files"""

    admitted: int
    rejected: list[FileRejectionResponse] = Field(default_factory=list)
    message: Optional[str] = None
    session: SessionResponse
