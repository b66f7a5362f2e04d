"""
Tests for the data models.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from vid2blog.core.article_generator import generate_article
from vid2blog.models.schemas import (
    Article,
    ArticleSection,
    ContentAnalysis,
    Transcript,
    TranscriptSegment,
    VideoMetadata,
    walk_sections,
)


def test_segment_validation():
    """Test structural validation of segments."""
    segment = TranscriptSegment(text="Hello", start_time=1.0, end_time=2.5)
    assert segment.duration == 1.5
    assert segment.confidence == 1.0

    with pytest.raises(ValidationError):
        TranscriptSegment(text="Backwards", start_time=5, end_time=4)
    with pytest.raises(ValidationError):
        TranscriptSegment(text="Negative", start_time=-1, end_time=4)
    with pytest.raises(ValidationError):
        TranscriptSegment(text="Too sure", start_time=0, end_time=1, confidence=1.5)


def test_models_are_immutable():
    """Test that pipeline models cannot be changed in place."""
    segment = TranscriptSegment(text="Hello", start_time=0, end_time=1)

    with pytest.raises(ValidationError):
        segment.text = "Changed"


def test_camel_case_json():
    """Test the camelCase JSON shape."""
    transcript = Transcript.model_validate({
        "segments": [{"text": "Hi", "startTime": 0, "endTime": 1, "speaker": "Ana"}],
        "language": "en",
        "confidence": 0.8,
        "duration": 1,
    })

    assert transcript.segments[0].start_time == 0
    dumped = transcript.model_dump(by_alias=True)
    assert dumped["segments"][0]["endTime"] == 1
    assert transcript.full_text == "Hi"


def test_content_analysis_round_trip(ml_analysis):
    """Test that an analysis survives JSON without loss."""
    restored = ContentAnalysis.model_validate_json(ml_analysis.model_dump_json(by_alias=True))

    assert restored == ml_analysis
    assert "keyPoints" in ml_analysis.model_dump(by_alias=True)


def test_article_round_trip(ml_analysis, ml_transcript, video_metadata):
    """Test that an article survives JSON, publish date included."""
    article = generate_article(ml_analysis, video_metadata, ml_transcript)
    restored = Article.model_validate_json(article.model_dump_json(by_alias=True))

    assert restored == article
    assert restored.metadata.source_video.publish_date == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)


def test_video_metadata_publish_date_is_iso_string(video_metadata):
    """Test that the publish date crosses JSON as an ISO-8601 string."""
    data = video_metadata.model_dump(mode="json", by_alias=True)

    assert data["publishDate"].startswith("2024-03-01T12:00:00")
    assert VideoMetadata.model_validate(data) == video_metadata


def test_section_depth_is_bounded():
    """Test that section trees deeper than two levels are rejected."""
    leaf = ArticleSection(heading="Leaf", content="c")
    ArticleSection(heading="Parent", content="b", subsections=[leaf])

    with pytest.raises(ValidationError):
        ArticleSection(
            heading="Root",
            content="a",
            subsections=[ArticleSection(heading="Parent", content="b", subsections=[leaf])],
        )


def test_walk_sections_order():
    """Test that the walk yields sections in document order with depths."""
    sections = [
        ArticleSection(
            heading="A",
            content="",
            subsections=[
                ArticleSection(heading="A1", content=""),
                ArticleSection(heading="A2", content=""),
            ],
        ),
        ArticleSection(heading="B", content=""),
    ]

    assert [(depth, s.heading) for depth, s in walk_sections(sections)] == [
        (0, "A"), (1, "A1"), (1, "A2"), (0, "B"),
    ]
    assert list(walk_sections([])) == []
