"""Analysis session - composes input, runs one analysis at a time"""

import logging
from typing import Optional, Sequence
from uuid import uuid4

from spotcheck.agent_core import build_prompt
from spotcheck.exceptions import (
    AnalysisInProgressError,
    EmptySubmissionError,
    InferenceError,
    TooManyFilesError,
)
from spotcheck.models import AnalysisResult, InputMode
from spotcheck.services.aggregator import BatchOutcome, InputAggregator
from spotcheck.services.gemini_client import GeminiClient
from spotcheck.services.media_encoder import MediaEncoder, UploadSource
from spotcheck.services.preview_store import PreviewStore
from spotcheck.services.result_interpreter import interpret

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "An error occurred while analyzing the location. Please try again."


class SpotCheckSession:
    """State behind one user's form: input, last result, last error.

    Validation errors leave accumulated media alone; inference errors only
    drop the pending result so the user can retry without re-entering data.
    """

    def __init__(self, gemini: GeminiClient, preview_store: PreviewStore):
        self.id = uuid4().hex
        self.gemini = gemini
        self.aggregator = InputAggregator(MediaEncoder(preview_store))
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.is_analyzing = False

    @property
    def mode(self) -> InputMode:
        return self.aggregator.mode

    @property
    def can_submit(self) -> bool:
        return not self.is_analyzing and self.aggregator.state.is_submittable

    def _clear_output(self):
        self.result = None
        self.error = None

    async def add_files(self, files: Sequence[UploadSource]) -> BatchOutcome:
        self._clear_output()
        try:
            outcome = await self.aggregator.add_batch(files)
        except TooManyFilesError as e:
            self.error = str(e)
            raise
        self.error = outcome.error_message
        return outcome

    def remove_file(self, index: int):
        self.aggregator.remove(index)
        self._clear_output()

    def set_source_link(self, source_link: Optional[str]):
        self.aggregator.set_source_link(source_link)
        self._clear_output()

    def set_video_link(
        self,
        video_url: Optional[str],
        start_time: Optional[str] = None,
        duration_seconds: Optional[str] = None,
    ):
        self.aggregator.set_video_link(video_url, start_time, duration_seconds)
        self._clear_output()

    def switch_mode(self, mode: InputMode):
        """Switch tab. Clears result and error, keeps uploaded media."""
        self.aggregator.switch_mode(mode)
        self._clear_output()

    def clear(self):
        """Release media and clear every input field"""
        self.aggregator.reset()
        self._clear_output()

    def close(self):
        """Teardown: release everything the session owns"""
        self.aggregator.reset()
        self.result = None

    async def analyze(self) -> AnalysisResult:
        """Run one analysis for the current input.

        Raises:
            AnalysisInProgressError: an analysis is already running
            EmptySubmissionError: nothing to submit in the current mode
            InferenceError: Gemini call failed
        """
        if self.is_analyzing:
            raise AnalysisInProgressError("An analysis is already running.")
        if not self.aggregator.state.is_submittable:
            if self.mode == InputMode.UPLOAD:
                raise EmptySubmissionError("Add at least one image or video first.")
            raise EmptySubmissionError("Enter a video URL first.")

        self.is_analyzing = True
        self._clear_output()
        try:
            state = self.aggregator.snapshot()
            prompt = build_prompt(state)
            media = [item.to_inline() for item in state.media] if state.mode == InputMode.UPLOAD else []

            logger.info(f"Session {self.id}: analyzing mode={state.mode.value}, media={len(media)}")
            response = await self.gemini.analyze(prompt, media)

            self.result = interpret(response.text, response.grounding_chunks)
            return self.result

        except InferenceError:
            logger.error(f"Session {self.id}: analysis failed", exc_info=True)
            self.error = ANALYSIS_FAILED_MESSAGE
            raise
        finally:
            self.is_analyzing = False
