"""Dependency injection for API routes"""

from typing import Optional

from app.config import settings
from app.services.session_store import SessionStore
from spotcheck.services import GeminiClient, PreviewStore

# Singleton instances
_gemini_client: Optional[GeminiClient] = None
_preview_store: Optional[PreviewStore] = None
_session_store: Optional[SessionStore] = None


def get_gemini_client() -> GeminiClient:
    """Get Gemini client instance (API key read once from settings)"""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
        )
    return _gemini_client


def get_preview_store() -> PreviewStore:
    global _preview_store
    if _preview_store is None:
        _preview_store = PreviewStore(settings.preview_dir)
    return _preview_store


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(
            gemini=get_gemini_client(),
            preview_store=get_preview_store(),
            max_sessions=settings.max_sessions,
        )
    return _session_store


def reset_clients():
    """Close sessions, release previews and drop singletons"""
    global _gemini_client, _preview_store, _session_store
    if _session_store is not None:
        _session_store.close_all()
    if _preview_store is not None:
        _preview_store.clear()
    _gemini_client = None
    _preview_store = None
    _session_store = None
