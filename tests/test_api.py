"""
Tests for the FastAPI application.
"""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi.testclient import TestClient

from vid2blog.api.app import app
from vid2blog.api.routes import get_ai_generator
from vid2blog.core.article_generator import generate_article
from vid2blog.utils.error_handling import Vid2BlogError


@pytest.fixture
def client():
    """Fixture to create a test client."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def transcript_payload(ml_transcript):
    """Return the machine learning transcript as request JSON."""
    return ml_transcript.model_dump(mode="json", by_alias=True)


@pytest.fixture
def metadata_payload(video_metadata):
    """Return the video metadata as request JSON."""
    return video_metadata.model_dump(mode="json", by_alias=True)


def test_root(client):
    """Test the root endpoint."""
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["name"] == "Vid2Blog"
    assert "X-Process-Time" in response.headers


def test_health(client):
    """Test the health check."""
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "aiGenerationAvailable" in response.json()


def test_templates(client):
    """Test the template listing."""
    response = client.get("/api/v1/templates")

    assert response.status_code == 200
    templates = response.json()
    assert len(templates) == 5
    assert templates[0]["name"] == "Tutorial Guide"
    assert templates[0]["defaultTone"] == "professional"
    assert templates[0]["structure"][2]["includeTimestamps"] is True


def test_process_transcript(client):
    """Test transcript cleaning."""
    payload = {
        "transcript": {
            "segments": [
                {"text": "Um, hello there.", "startTime": 0, "endTime": 2},
                {"text": "[Music]", "startTime": 2, "endTime": 4},
            ],
            "duration": 4,
        },
    }
    response = client.post("/api/v1/transcript/process", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert [s["text"] for s in data["segments"]] == ["hello there."]
    assert data["processingStats"]["fillerWordsRemoved"] == 1
    assert data["processedSegmentCount"] == 1


def test_process_transcript_rejects_invalid_segments(client):
    """Test that structurally invalid segments are rejected."""
    payload = {
        "transcript": {"segments": [{"text": "Oops", "startTime": 5, "endTime": 1}], "duration": 5},
    }
    response = client.post("/api/v1/transcript/process", json=payload)

    assert response.status_code == 422


def test_segment_transcript(client, transcript_payload):
    """Test re-segmentation."""
    response = client.post(
        "/api/v1/transcript/segment",
        json={"transcript": transcript_payload, "maxWords": 20, "pauseThreshold": 3},
    )

    assert response.status_code == 200
    chunks = response.json()
    assert len(chunks) == 2
    assert chunks[0]["startTime"] == 0
    assert chunks[-1]["endTime"] == 20


def test_analyze_content(client, transcript_payload):
    """Test content analysis."""
    response = client.post("/api/v1/content/analyze", json={"transcript": transcript_payload})

    assert response.status_code == 200
    data = response.json()
    assert data["topics"][0]["name"] == "Machine learning"
    assert data["sentiment"] == "neutral"
    assert data["suggestedStructure"][0]["heading"] == "Introduction"


def test_generate_article(client, transcript_payload, metadata_payload, ml_analysis):
    """Test template article generation."""
    payload = {
        "analysis": ml_analysis.model_dump(mode="json", by_alias=True),
        "videoMetadata": metadata_payload,
        "transcript": transcript_payload,
        "options": {"tone": "casual", "useAi": False},
    }
    response = client.post("/api/v1/content/generate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Intro to Machine Learning"
    assert data["introduction"].startswith("This post")
    assert data["metadata"]["readingTime"] >= 1


def test_generate_article_with_ai(client, transcript_payload, metadata_payload, ml_analysis, ml_transcript, video_metadata):
    """Test that the language model generator is used when requested."""
    article = generate_article(ml_analysis, video_metadata, ml_transcript)
    mock_generator = MagicMock()
    mock_generator.generate_article = AsyncMock(return_value=article)
    app.dependency_overrides[get_ai_generator] = lambda: mock_generator

    payload = {
        "analysis": ml_analysis.model_dump(mode="json", by_alias=True),
        "videoMetadata": metadata_payload,
        "transcript": transcript_payload,
        "options": {"useAi": True},
    }
    response = client.post("/api/v1/content/generate", json=payload)

    assert response.status_code == 200
    assert response.json()["title"] == article.title
    mock_generator.generate_article.assert_awaited_once()


def test_process_pipeline(client, transcript_payload, metadata_payload):
    """Test the full pipeline route."""
    payload = {
        "transcript": transcript_payload,
        "videoMetadata": metadata_payload,
        "generationOptions": {"length": "short", "useAi": False},
    }
    response = client.post("/api/v1/process", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["article"]["title"] == "Intro to Machine Learning"
    assert set(data["stageTimings"]) == {"processing", "analysis", "generation"}


def test_export(client, ml_analysis, ml_transcript, video_metadata):
    """Test article export."""
    article = generate_article(ml_analysis, video_metadata, ml_transcript)
    response = client.post(
        "/api/v1/export",
        json={"article": article.model_dump(mode="json", by_alias=True), "format": "html"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["mimeType"] == "text/html"
    assert data["filename"] == "intro-to-machine-learning.html"
    assert data["content"].startswith("<!DOCTYPE html>")


def test_pipeline_errors_map_to_bad_request(client, transcript_payload):
    """Test that pipeline errors become 400 responses."""
    with patch("vid2blog.api.routes.analyze_content", side_effect=Vid2BlogError("bad input")):
        response = client.post("/api/v1/content/analyze", json={"transcript": transcript_payload})

    assert response.status_code == 400
    assert response.json()["detail"] == "bad input"


def test_unexpected_errors_map_to_server_error(transcript_payload):
    """Test the global exception handler."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        with patch("vid2blog.api.routes.analyze_content", side_effect=RuntimeError("boom")):
            response = test_client.post("/api/v1/content/analyze", json={"transcript": transcript_payload})

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]
