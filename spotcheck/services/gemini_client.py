"""Gemini API client - native async"""

import base64
import logging
from typing import Optional, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from spotcheck.agent_core import BuiltPrompt
from spotcheck.exceptions import InferenceError
from spotcheck.models import DEFAULT_MODEL, InlineMedia
from spotcheck.services.media_encoder import strip_data_url_prefix

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_TEXT = "No detailed analysis could be generated."


class InferenceResponse(BaseModel):
    """Raw model text plus grounding chunks as plain dicts"""

    text: str
    grounding_chunks: list[dict] = Field(default_factory=list)


class GeminiClient:
    """Async Gemini client with Search and Maps grounding.

    Issues exactly one request per call; retries are left to the caller.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL):
        self.api_key = api_key
        self.model = model
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        """Lazy init Gemini client"""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @staticmethod
    def build_parts(text: str, media: Sequence[InlineMedia] = ()) -> list[types.Part]:
        """Text part first, then one inline-data part per media item"""
        parts = [types.Part(text=text)]
        for item in media:
            parts.append(
                types.Part(
                    inline_data=types.Blob(
                        mime_type=item.mime_type,
                        data=base64.b64decode(strip_data_url_prefix(item.data)),
                    )
                )
            )
        return parts

    @staticmethod
    def build_config(system_instruction: str) -> types.GenerateContentConfig:
        # No retrieval lat/lng: search is global
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            tools=[
                types.Tool(google_search=types.GoogleSearch()),
                types.Tool(google_maps=types.GoogleMaps()),
            ],
        )

    async def analyze(
        self,
        prompt: BuiltPrompt,
        media: Sequence[InlineMedia] = (),
    ) -> InferenceResponse:
        """Send prompt and inline media, return text and grounding chunks"""
        try:
            client = self._get_client()
            parts = self.build_parts(prompt.text, media)
            config = self.build_config(prompt.system_instruction)
            model_id = self.model.removeprefix("models/")

            logger.info(f"analyze: model={model_id}, media={len(media)}")

            response = await client.aio.models.generate_content(
                model=model_id,
                contents=[types.Content(role="user", parts=parts)],
                config=config,
            )

            text = getattr(response, "text", None) or EMPTY_RESPONSE_TEXT
            chunks = self._extract_grounding_chunks(response)
            logger.info(f"Response received: {len(text)} chars, {len(chunks)} grounding chunks")

            return InferenceResponse(text=text, grounding_chunks=chunks)

        except Exception as e:
            logger.error(f"Gemini API error: {e}", exc_info=True)
            raise InferenceError(f"Failed to analyze media: {e}") from e

    @staticmethod
    def _extract_grounding_chunks(response) -> list[dict]:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        metadata = getattr(candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        result = []
        for chunk in chunks:
            if isinstance(chunk, dict):
                result.append(chunk)
            elif hasattr(chunk, "model_dump"):
                result.append(chunk.model_dump(exclude_none=True))
        return result
