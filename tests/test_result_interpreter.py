"""Test result interpretation"""
import pytest

from spotcheck.models import MapSource, WebSource
from spotcheck.services.result_interpreter import (
    extract_coordinates,
    interpret,
    parse_citation,
    parse_citations,
    render_lines,
)

SAMPLE = """*   **Spot Name**: Pershing Square Ledges
*   **Location**: 532 S Olive St, Los Angeles, CA
*   **Confidence**: Exact Match

COORDINATES: 34.052235,-118.243683"""


class TestExtractCoordinates:
    def test_well_formed_marker(self):
        display, coords = extract_coordinates(SAMPLE)

        assert coords.latitude == pytest.approx(34.052235)
        assert coords.longitude == pytest.approx(-118.243683)
        assert "COORDINATES:" not in display
        assert display.endswith("Exact Match")

    def test_no_marker(self):
        text = "**Spot Name**: Unknown Street Spot\n\n- Somewhere in Barcelona  "
        display, coords = extract_coordinates(text)

        assert coords is None
        assert display == text

    def test_marker_mid_text(self):
        display, coords = extract_coordinates("Before\n  COORDINATES: 1,2  \nAfter")

        assert (coords.latitude, coords.longitude) == (1.0, 2.0)
        assert display == "Before\nAfter"

    def test_first_match_wins(self):
        display, coords = extract_coordinates(
            "COORDINATES: 10.5,20.5\nCOORDINATES: -1.0,-2.0"
        )

        assert (coords.latitude, coords.longitude) == (10.5, 20.5)
        assert display == "COORDINATES: -1.0,-2.0"

    def test_malformed_marker_skipped(self):
        display, coords = extract_coordinates(
            "COORDINATES: unknown\nCOORDINATES: +41.38 , 2.17"
        )

        assert (coords.latitude, coords.longitude) == (41.38, 2.17)
        assert display == "COORDINATES: unknown"

    def test_only_malformed(self):
        text = "COORDINATES: Latitude,Longitude"
        assert extract_coordinates(text) == (text, None)


class TestRenderLines:
    def test_list_items_and_bold(self):
        lines = render_lines("* **Spot Name**: Hubba Hideout\n- plain item\n\nFree text")

        assert len(lines) == 3
        assert lines[0].is_list_item
        assert lines[0].segments[0].text == "Spot Name"
        assert lines[0].segments[0].bold
        assert lines[0].segments[1].text == ": Hubba Hideout"
        assert not lines[0].segments[1].bold
        assert lines[1].is_list_item
        assert lines[1].plain_text == "plain item"
        assert not lines[2].is_list_item
        assert lines[2].plain_text == "Free text"

    def test_blank_lines_dropped(self):
        assert render_lines("\n   \n\t\n") == []

    def test_indented_list_item(self):
        lines = render_lines("    *   **Confidence**: Approximate Area")

        assert lines[0].is_list_item
        assert lines[0].plain_text == "Confidence: Approximate Area"

    def test_star_without_space_is_not_list(self):
        lines = render_lines("**Bold** start")

        assert not lines[0].is_list_item
        assert lines[0].segments[0].bold


class TestCitations:
    def test_web_and_maps(self):
        chunks = [
            {"web": {"uri": "https://skatespot.example/pershing", "title": "Pershing Square"}},
            {
                "maps": {
                    "uri": "https://maps.google.com/?cid=1",
                    "title": "Pershing Square",
                    "place_answer_sources": {
                        "review_snippets": [
                            {"google_maps_uri": "https://maps.google.com/review/1"},
                            {"review_id": "no-uri"},
                        ]
                    },
                }
            },
        ]

        citations = parse_citations(chunks)

        assert isinstance(citations[0], WebSource)
        assert citations[0].title == "Pershing Square"
        assert isinstance(citations[1], MapSource)
        assert citations[1].review_snippet_uris == ["https://maps.google.com/review/1"]

    def test_camel_case_maps(self):
        chunk = {
            "maps": {
                "uri": "https://maps.google.com/?cid=2",
                "title": "MACBA",
                "placeAnswerSources": [{"reviewSnippets": [{"sourceUri": "https://r/2"}]}],
            }
        }

        citation = parse_citation(chunk)

        assert citation.review_snippet_uris == ["https://r/2"]

    def test_unknown_shapes_dropped(self):
        chunks = [{"retrievedContext": {"uri": "x"}}, {}, None, "junk", {"web": {"title": "no uri"}}]

        assert parse_citations(chunks) == []

    def test_missing_title_falls_back_to_uri(self):
        citation = parse_citation({"web": {"uri": "https://example.com"}})
        assert citation.title == "https://example.com"

    def test_none_chunks(self):
        assert parse_citations(None) == []


class TestInterpret:
    def test_full_result(self):
        result = interpret(
            "**Spot Name**: Example Park\nCOORDINATES: 1.0,2.0",
            [
                {"web": {"uri": "https://a", "title": "A"}},
                {"maps": {"uri": "https://m", "title": "M"}},
                {"other": {}},
            ],
        )

        assert result.latitude == 1.0
        assert result.longitude == 2.0
        assert result.text == "**Spot Name**: Example Park"
        assert [c.uri for c in result.web_sources] == ["https://a"]
        assert [c.uri for c in result.map_sources] == ["https://m"]
        assert len(result.citations) == 2

    def test_without_coordinates(self):
        result = interpret("General Region: Barcelona")

        assert result.coordinates is None
        assert result.latitude is None
        assert result.text == "General Region: Barcelona"
        assert result.citations == []
