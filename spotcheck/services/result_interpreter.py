"""Interpretation of Gemini output - coordinates, display lines, citations"""

import logging
import re
from typing import Any, Iterable, Optional

from spotcheck.agent_core import COORDINATES_PREFIX
from spotcheck.models import (
    AnalysisResult,
    Citation,
    Coordinates,
    DisplayLine,
    MapSource,
    TextSegment,
    WebSource,
)

logger = logging.getLogger(__name__)

COORDINATES_PATTERN = re.compile(
    re.escape(COORDINATES_PREFIX) + r"\s*([+-]?\d+(?:\.\d+)?)\s*,\s*([+-]?\d+(?:\.\d+)?)"
)
BOLD_PATTERN = re.compile(r"(\*\*.*?\*\*)")
LIST_PREFIXES = ("* ", "- ")


def extract_coordinates(text: str) -> tuple[str, Optional[Coordinates]]:
    """Pull the first COORDINATES marker out of the text.

    Returns display text without the marker and the parsed pair. Without a
    marker the text comes back unchanged.
    """
    match = COORDINATES_PATTERN.search(text)
    if match is None:
        return text, None

    coordinates = Coordinates(latitude=float(match.group(1)), longitude=float(match.group(2)))

    before = text[: match.start()].rstrip()
    after = text[match.end() :].lstrip()
    display = f"{before}\n{after}" if before and after else before or after
    return display, coordinates


def _split_bold(line: str) -> list[TextSegment]:
    segments = []
    for part in BOLD_PATTERN.split(line):
        if not part:
            continue
        if len(part) >= 4 and part.startswith("**") and part.endswith("**"):
            segments.append(TextSegment(text=part[2:-2], bold=True))
        else:
            segments.append(TextSegment(text=part))
    return segments


def render_lines(text: str) -> list[DisplayLine]:
    """Split text into display lines: list items, bold spans, no blanks"""
    lines = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        is_list_item = line.startswith(LIST_PREFIXES)
        if is_list_item:
            line = line[2:].lstrip()
        lines.append(DisplayLine(is_list_item=is_list_item, segments=_split_bold(line)))
    return lines


def _first(data: dict, *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _review_snippet_uris(maps: dict) -> list[str]:
    sources = _first(maps, "place_answer_sources", "placeAnswerSources")
    if sources is None:
        return []
    if isinstance(sources, dict):
        sources = [sources]

    uris = []
    for source in sources:
        if not isinstance(source, dict):
            continue
        for snippet in _first(source, "review_snippets", "reviewSnippets") or []:
            if not isinstance(snippet, dict):
                continue
            uri = _first(snippet, "source_uri", "sourceUri", "google_maps_uri", "googleMapsUri")
            if uri:
                uris.append(uri)
    return uris


def parse_citation(chunk: Any) -> Optional[Citation]:
    """Route one grounding chunk to a web or maps citation, None if neither"""
    if not isinstance(chunk, dict):
        return None

    web = chunk.get("web")
    if isinstance(web, dict) and web.get("uri"):
        return WebSource(uri=web["uri"], title=web.get("title") or web["uri"])

    maps = chunk.get("maps")
    if isinstance(maps, dict) and maps.get("uri"):
        return MapSource(
            uri=maps["uri"],
            title=maps.get("title") or maps["uri"],
            review_snippet_uris=_review_snippet_uris(maps),
        )

    return None


def parse_citations(chunks: Optional[Iterable[Any]]) -> list[Citation]:
    citations = []
    for chunk in chunks or []:
        citation = parse_citation(chunk)
        if citation is None:
            logger.debug(f"Ignoring grounding chunk: {chunk!r}")
            continue
        citations.append(citation)
    return citations


def interpret(text: str, grounding_chunks: Optional[Iterable[Any]] = None) -> AnalysisResult:
    """Build AnalysisResult from raw response text and grounding chunks"""
    display, coordinates = extract_coordinates(text)
    citations = parse_citations(grounding_chunks)
    if coordinates:
        logger.info(f"Coordinates found: {coordinates.latitude},{coordinates.longitude}")
    return AnalysisResult(text=display, coordinates=coordinates, citations=citations)
