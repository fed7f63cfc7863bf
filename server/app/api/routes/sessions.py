"""Analysis sessions API routes"""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.api.dependencies import get_session_store
from app.models.schemas import (
    AnalysisResponse,
    BatchResponse,
    FileRejectionResponse,
    SessionResponse,
    SourceLinkRequest,
    SwitchModeRequest,
    VideoLinkRequest,
)
from spotcheck.exceptions import (
    AnalysisInProgressError,
    EmptySubmissionError,
    InferenceError,
    TooManyFilesError,
)
from spotcheck.services import SpotCheckSession

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_session(session_id: str) -> SpotCheckSession:
    session = get_session_store().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("", response_model=SessionResponse)
async def create_session():
    """Create new analysis session"""
    session = get_session_store().create()
    return SessionResponse.from_session(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    """Get current session state"""
    return SessionResponse.from_session(_get_session(session_id))


@router.delete("/{session_id}")
async def close_session(session_id: str):
    """Close session and release its media"""
    if not get_session_store().close(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "closed"}


@router.post("/{session_id}/media", response_model=BatchResponse)
async def add_media(session_id: str, files: list[UploadFile] = File(...)):
    """Add a batch of images/videos.

    An over-limit batch is refused entirely (400). Inside an accepted batch,
    invalid files are skipped and reported in `message`.
    """
    session = _get_session(session_id)
    try:
        outcome = await session.add_files(files)
    except TooManyFilesError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BatchResponse(
        admitted=len(outcome.admitted),
        rejected=[
            FileRejectionResponse(filename=r.filename, reason=r.reason) for r in outcome.rejected
        ],
        message=outcome.error_message,
        session=SessionResponse.from_session(session),
    )


@router.delete("/{session_id}/media/{index}", response_model=SessionResponse)
async def remove_media(session_id: str, index: int):
    """Remove media at zero-based position"""
    session = _get_session(session_id)
    try:
        session.remove_file(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SessionResponse.from_session(session)


@router.put("/{session_id}/source-link", response_model=SessionResponse)
async def set_source_link(session_id: str, request: SourceLinkRequest):
    session = _get_session(session_id)
    session.set_source_link(request.source_link)
    return SessionResponse.from_session(session)


@router.put("/{session_id}/video-link", response_model=SessionResponse)
async def set_video_link(session_id: str, request: VideoLinkRequest):
    session = _get_session(session_id)
    session.set_video_link(
        request.video_url,
        start_time=request.start_time,
        duration_seconds=request.duration_seconds,
    )
    return SessionResponse.from_session(session)


@router.put("/{session_id}/mode", response_model=SessionResponse)
async def switch_mode(session_id: str, request: SwitchModeRequest):
    """Switch input mode (clears result and error)"""
    session = _get_session(session_id)
    session.switch_mode(request.mode)
    return SessionResponse.from_session(session)


@router.post("/{session_id}/clear", response_model=SessionResponse)
async def clear_session(session_id: str):
    """Release media and clear all inputs"""
    session = _get_session(session_id)
    session.clear()
    return SessionResponse.from_session(session)


@router.post("/{session_id}/analyze", response_model=AnalysisResponse)
async def analyze(session_id: str):
    """Run location analysis for the current input"""
    session = _get_session(session_id)
    try:
        result = await session.analyze()
    except AnalysisInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except EmptySubmissionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InferenceError:
        raise HTTPException(status_code=502, detail=session.error)

    return AnalysisResponse.from_result(result)
