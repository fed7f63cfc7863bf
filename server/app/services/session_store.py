"""In-memory registry of analysis sessions"""

import logging
from collections import OrderedDict
from typing import Optional

from spotcheck.services import GeminiClient, PreviewStore, SpotCheckSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Sessions live only for the lifetime of the process.

    At most max_sessions are kept; creating one more closes the least
    recently used session and releases its media.
    """

    def __init__(self, gemini: GeminiClient, preview_store: PreviewStore, max_sessions: int = 100):
        self.gemini = gemini
        self.preview_store = preview_store
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, SpotCheckSession] = OrderedDict()

    def create(self) -> SpotCheckSession:
        while self._sessions and len(self._sessions) >= self.max_sessions:
            oldest_id = next(iter(self._sessions))
            logger.info(f"Session limit {self.max_sessions} reached, evicting {oldest_id}")
            self.close(oldest_id)

        session = SpotCheckSession(self.gemini, self.preview_store)
        self._sessions[session.id] = session
        logger.info(f"Session created: {session.id}")
        return session

    def get(self, session_id: str) -> Optional[SpotCheckSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def close(self, session_id: str) -> bool:
        """Close session and release its media"""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info(f"Session closed: {session_id}")
        return True

    def close_all(self):
        for session_id in list(self._sessions):
            self.close(session_id)

    def count(self) -> int:
        return len(self._sessions)
