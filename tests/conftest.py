"""
Configuration for pytest tests.
"""

import os
import shutil
import pytest
from pathlib import Path

TEST_DATA_DIR = Path("test_data").absolute()

# Settings are read when vid2blog.config is first imported
os.environ["DATA_DIR"] = str(TEST_DATA_DIR)
os.environ["ARTICLES_DIR"] = str(TEST_DATA_DIR / "articles")
os.environ["USE_AI_GENERATION"] = "false"
os.environ["ENVIRONMENT"] = "development"

from vid2blog.core.content_analyzer import analyze_content  # noqa: E402
from vid2blog.models.schemas import Transcript, TranscriptSegment, VideoMetadata  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Setup test environment variables and directories."""
    TEST_DATA_DIR.mkdir(exist_ok=True)
    os.environ["GROQ_API_KEY"] = os.environ.get("GROQ_API_KEY", "test_api_key")

    yield

    shutil.rmtree(TEST_DATA_DIR, ignore_errors=True)


def make_transcript(rows, duration=None):
    """Build a transcript from ``(text, start, end)`` rows."""
    segments = [
        TranscriptSegment(text=text, start_time=start, end_time=end, confidence=0.9)
        for text, start, end in rows
    ]
    if duration is None:
        duration = max((segment.end_time for segment in segments), default=0.0)
    return Transcript(segments=segments, language="en", confidence=0.9, duration=duration)


@pytest.fixture
def transcript_factory():
    """Return the transcript builder."""
    return make_transcript


@pytest.fixture
def ml_transcript():
    """Return a short transcript about machine learning."""
    return make_transcript([
        ("Welcome to this tutorial about machine learning algorithms", 0, 5),
        ("Machine learning is a powerful technology for data analysis", 5, 10),
        ("Today we will discuss neural networks and deep learning", 10, 15),
        ("Neural networks are fundamental to modern artificial intelligence", 15, 20),
    ])


@pytest.fixture
def messy_transcript():
    """Return a transcript full of fillers and annotations."""
    return make_transcript([
        ("Um, hello everyone, uh, welcome to this video.", 0, 5),
        ("So, like, today we are going to talk about, you know, JavaScript.", 5, 10),
        ("Actually, it's a really interesting topic.", 10, 15),
        ("[Music] Well, let's get started.", 15, 20),
    ])


@pytest.fixture
def empty_transcript():
    """Return a transcript without segments."""
    return Transcript(segments=[], language="en", confidence=0.0, duration=0.0)


@pytest.fixture
def video_metadata():
    """Return metadata for the machine learning video."""
    return VideoMetadata(
        id="abc123",
        title="Intro to Machine Learning",
        description="A short introduction to machine learning.",
        duration=1200,
        thumbnail_url="https://img.youtube.com/vi/abc123/default.jpg",
        channel_name="Tech Talks Daily",
        publish_date="2024-03-01T12:00:00Z",
        view_count=1500,
    )


@pytest.fixture
def ml_analysis(ml_transcript):
    """Return the content analysis of the machine learning transcript."""
    return analyze_content(ml_transcript)
