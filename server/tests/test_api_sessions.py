"""Test sessions API"""
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="spotcheck-logs-"))

from fastapi.testclient import TestClient  # noqa: E402

from app.api import dependencies  # noqa: E402
from app.main import app  # noqa: E402
from spotcheck.exceptions import InferenceError  # noqa: E402
from spotcheck.services import GeminiClient, InferenceResponse, PreviewStore  # noqa: E402

RESPONSE_TEXT = "*   **Spot Name**: Example Park\nCOORDINATES: 1.0,2.0"
CHUNKS = [
    {"web": {"uri": "https://example.com/park", "title": "Example Park"}},
    {"maps": {"uri": "https://maps.google.com/?cid=7", "title": "Example Park"}},
    {"unknown": {}},
]


@pytest.fixture
def gemini():
    client = MagicMock(spec=GeminiClient)
    client.analyze = AsyncMock(return_value=InferenceResponse(text=RESPONSE_TEXT, grounding_chunks=CHUNKS))
    return client


@pytest.fixture
def preview_store(tmp_path):
    return PreviewStore(tmp_path / "previews")


@pytest.fixture
def client(gemini, preview_store):
    """TestClient with mocked Gemini and temp previews"""
    dependencies.reset_clients()
    dependencies._gemini_client = gemini
    dependencies._preview_store = preview_store
    with TestClient(app) as test_client:
        yield test_client
    dependencies.reset_clients()


@pytest.fixture
def session_id(client):
    response = client.post("/api/v1/sessions")
    assert response.status_code == 200
    return response.json()["id"]


def jpeg_part(name: str, data: bytes = b"\xff\xd8jpeg"):
    return ("files", (name, data, "image/jpeg"))


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestSessions:
    def test_create_session(self, client):
        data = client.post("/api/v1/sessions").json()

        assert data["mode"] == "upload"
        assert data["media"] == []
        assert data["can_submit"] is False

    def test_unknown_session(self, client):
        assert client.get("/api/v1/sessions/missing").status_code == 404

    def test_upload_and_remove(self, client, session_id, preview_store):
        response = client.post(
            f"/api/v1/sessions/{session_id}/media",
            files=[jpeg_part("a.jpg"), ("files", ("doc.pdf", b"%PDF", "application/pdf")), jpeg_part("b.jpg")],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["admitted"] == 2
        assert [r["filename"] for r in data["rejected"]] == ["doc.pdf"]
        assert "doc.pdf" in data["message"]
        assert [m["filename"] for m in data["session"]["media"]] == ["a.jpg", "b.jpg"]
        assert preview_store.open_count == 2

        response = client.delete(f"/api/v1/sessions/{session_id}/media/0")

        assert response.status_code == 200
        assert [m["filename"] for m in response.json()["media"]] == ["b.jpg"]
        assert preview_store.open_count == 1

    def test_remove_out_of_range(self, client, session_id):
        assert client.delete(f"/api/v1/sessions/{session_id}/media/3").status_code == 404

    def test_too_many_files(self, client, session_id):
        client.post(
            f"/api/v1/sessions/{session_id}/media",
            files=[jpeg_part(f"{i}.jpg") for i in range(3)],
        )

        response = client.post(
            f"/api/v1/sessions/{session_id}/media",
            files=[jpeg_part(f"x{i}.jpg") for i in range(3)],
        )

        assert response.status_code == 400
        assert "up to 5 files" in response.json()["detail"]
        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert len(state["media"]) == 3

    def test_close_session(self, client, session_id, preview_store):
        client.post(f"/api/v1/sessions/{session_id}/media", files=[jpeg_part("a.jpg")])

        assert client.delete(f"/api/v1/sessions/{session_id}").status_code == 200
        assert preview_store.open_count == 0
        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404


class TestAnalyze:
    def test_upload_analysis(self, client, session_id, gemini):
        client.post(
            f"/api/v1/sessions/{session_id}/media",
            files=[jpeg_part("a.jpg"), jpeg_part("b.jpg")],
        )
        client.put(
            f"/api/v1/sessions/{session_id}/source-link",
            json={"source_link": "https://youtube.com/watch?v=part"},
        )

        response = client.post(f"/api/v1/sessions/{session_id}/analyze")

        assert response.status_code == 200
        data = response.json()
        assert data["coordinates"] == {"latitude": 1.0, "longitude": 2.0}
        assert data["text"] == "*   **Spot Name**: Example Park"
        assert data["lines"][0]["is_list_item"] is True
        assert data["lines"][0]["segments"][0] == {"text": "Spot Name", "bold": True}
        assert [s["uri"] for s in data["web_sources"]] == ["https://example.com/park"]
        assert [s["uri"] for s in data["map_sources"]] == ["https://maps.google.com/?cid=7"]
        assert len(data["citations"]) == 2

        prompt, media = gemini.analyze.call_args.args
        assert "https://youtube.com/watch?v=part" in prompt.text
        assert len(media) == 2

        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["result"]["coordinates"]["latitude"] == 1.0

    def test_video_link_analysis(self, client, session_id, gemini):
        client.put(f"/api/v1/sessions/{session_id}/mode", json={"mode": "video_link"})
        client.put(
            f"/api/v1/sessions/{session_id}/video-link",
            json={"video_url": "https://youtu.be/abc", "start_time": "1:05", "duration_seconds": "12"},
        )

        response = client.post(f"/api/v1/sessions/{session_id}/analyze")

        assert response.status_code == 200
        prompt, media = gemini.analyze.call_args.args
        assert "https://youtu.be/abc" in prompt.text
        assert "starting at 1:05 and lasting about 12 seconds" in prompt.text
        assert media == []

    def test_nothing_to_analyze(self, client, session_id, gemini):
        response = client.post(f"/api/v1/sessions/{session_id}/analyze")

        assert response.status_code == 400
        gemini.analyze.assert_not_awaited()

    def test_inference_failure(self, client, session_id, gemini):
        client.post(f"/api/v1/sessions/{session_id}/media", files=[jpeg_part("a.jpg")])
        gemini.analyze.side_effect = InferenceError("quota")

        response = client.post(f"/api/v1/sessions/{session_id}/analyze")

        assert response.status_code == 502
        assert "Please try again" in response.json()["detail"]
        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["result"] is None
        assert len(state["media"]) == 1

    def test_mode_switch_clears_result(self, client, session_id):
        client.post(f"/api/v1/sessions/{session_id}/media", files=[jpeg_part("a.jpg")])
        client.post(f"/api/v1/sessions/{session_id}/analyze")

        state = client.put(f"/api/v1/sessions/{session_id}/mode", json={"mode": "video_link"}).json()

        assert state["result"] is None
        assert state["error"] is None
        assert len(state["media"]) == 1

    def test_clear(self, client, session_id, preview_store):
        client.post(f"/api/v1/sessions/{session_id}/media", files=[jpeg_part("a.jpg")])

        state = client.post(f"/api/v1/sessions/{session_id}/clear").json()

        assert state["media"] == []
        assert preview_store.open_count == 0
