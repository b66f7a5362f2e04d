"""
Tests for the transcript processor module.
"""

import pytest

from vid2blog.core.transcript_processor import (
    clean_formatting,
    format_duration,
    format_timestamp,
    merge_short_segments,
    normalize_whitespace,
    parse_timestamp,
    process_transcript,
    remove_filler_words,
    segment_transcript,
)
from vid2blog.models.schemas import TranscriptProcessingOptions, TranscriptSegment
from vid2blog.utils.error_handling import TimestampParseError, Vid2BlogError


def test_remove_filler_words():
    """Test that hesitation sounds are removed."""
    text, removed = remove_filler_words("Um, hello everyone, uh, welcome")

    assert "um" not in text.lower()
    assert "uh" not in text.lower()
    assert text == "hello everyone, welcome"
    assert removed == 2


def test_remove_filler_words_keeps_content_words():
    """Test that discourse markers are only removed in their comma-delimited use."""
    text, removed = remove_filler_words("I like this approach so much")

    assert text == "I like this approach so much"
    assert removed == 0


def test_remove_filler_words_takes_spaced_comma():
    """Test that a comma set off after a filler goes with it."""
    text, removed = remove_filler_words("We did so uh , then moved on")

    assert text == "We did so then moved on"
    assert removed == 1


def test_clean_formatting_strips_brackets():
    """Test that bracketed annotations are removed."""
    cleaned = clean_formatting("[Music] Well, let's get started.")

    assert "[Music]" not in cleaned
    assert cleaned == "Well, let's get started."


def test_clean_formatting_strips_artifacts():
    """Test that tags, parentheticals, music notes and leaked timestamps are removed."""
    cleaned = normalize_whitespace(clean_formatting("<i>Hello</i> (laughs) world ♪ 01:23 -- again!!!"))

    assert cleaned == "Hello world again!"


def test_process_transcript(messy_transcript):
    """Test cleaning with the default options."""
    result = process_transcript(messy_transcript)

    assert result.original_segment_count == 4
    assert result.processed_segment_count == 4
    assert [s.text for s in result.segments] == [
        "hello everyone, welcome to this video.",
        "today we are going to talk about, JavaScript.",
        "it's a really interesting topic.",
        "let's get started.",
    ]
    assert result.processing_stats.filler_words_removed == 8
    assert result.processing_stats.formatting_cleaned == 1
    assert result.processing_stats.segments_merged == 0
    assert result.cleaned_text.startswith("hello everyone, welcome")
    assert result.duration == messy_transcript.duration


@pytest.mark.parametrize("rows", [
    None,
    [("We did so uh , then moved on", 0, 5)],
    [("Um, we did so , then moved on", 0, 5)],
    [("Okay you know , actually I mean , it works", 0, 5)],
])
def test_process_transcript_is_idempotent(rows, messy_transcript, transcript_factory):
    """Test that a second pass over cleaned output changes nothing."""
    transcript = messy_transcript if rows is None else transcript_factory(rows)
    first = process_transcript(transcript)
    second = process_transcript(first.as_transcript())

    assert second.processing_stats.filler_words_removed == 0
    assert second.processing_stats.formatting_cleaned == 0
    assert second.processing_stats.segments_merged == 0
    assert [s.text for s in second.segments] == [s.text for s in first.segments]


def test_process_transcript_respects_disabled_options(messy_transcript):
    """Test that disabled steps leave the text alone."""
    options = TranscriptProcessingOptions(remove_filler_words=False, clean_formatting=False)
    result = process_transcript(messy_transcript, options)

    assert result.segments[0].text.startswith("Um, hello")
    assert result.segments[3].text.startswith("[Music]")
    assert result.processing_stats.filler_words_removed == 0
    assert result.processing_stats.formatting_cleaned == 0


def test_process_empty_transcript(empty_transcript):
    """Test that an empty transcript gives an empty result, not an error."""
    result = process_transcript(empty_transcript)

    assert result.segments == []
    assert result.cleaned_text == ""
    assert result.processed_segment_count == 0


def test_process_transcript_drops_empty_segments(transcript_factory):
    """Test that segments with nothing left after cleaning are dropped."""
    transcript = transcript_factory([
        ("Hello there.", 0, 2),
        ("[Applause]", 2, 4),
        ("Um, uh,", 4, 5),
        ("Good to see you.", 5, 7),
    ])
    result = process_transcript(transcript)

    assert [s.text for s in result.segments] == ["Hello there.", "Good to see you."]
    assert result.original_segment_count == 4
    assert result.processed_segment_count == 2


def test_process_transcript_sorts_chronologically(transcript_factory):
    """Test that output segments are ordered by start time."""
    transcript = transcript_factory([
        ("Third part.", 10, 15),
        ("First part.", 0, 5),
        ("Second part.", 5, 10),
    ])
    result = process_transcript(transcript)

    starts = [s.start_time for s in result.segments]
    assert starts == sorted(starts)
    assert result.segments[0].text == "First part."


def test_merge_short_segments(transcript_factory):
    """Test that very short segments are merged."""
    transcript = transcript_factory([
        ("Hi", 0, 0.5),
        ("there", 0.5, 1.0),
        ("friend", 1.0, 1.4),
    ])
    options = TranscriptProcessingOptions(min_segment_duration=1.0)
    result = process_transcript(transcript, options)

    assert result.processed_segment_count == 1
    assert result.segments[0].text == "Hi there friend"
    assert result.segments[0].start_time == 0
    assert result.segments[0].end_time == 1.4
    assert result.processing_stats.segments_merged == 2


def test_merge_respects_max_duration():
    """Test that merging never produces a segment longer than the cap."""
    segments = [
        TranscriptSegment(text="A", start_time=0, end_time=1),
        TranscriptSegment(text="B", start_time=1, end_time=2),
        TranscriptSegment(text="C", start_time=2, end_time=10),
    ]

    merged, count = merge_short_segments(segments, min_duration=2, max_duration=2.5)
    assert [s.text for s in merged] == ["A B", "C"]
    assert count == 1

    merged, count = merge_short_segments(segments, min_duration=2, max_duration=1.5)
    assert [s.text for s in merged] == ["A", "B", "C"]
    assert count == 0


def test_merge_keeps_earlier_speaker():
    """Test that the earlier speaker wins and a missing speaker is filled in."""
    segments = [
        TranscriptSegment(text="Hello", start_time=0, end_time=0.5, speaker="Alice"),
        TranscriptSegment(text="world", start_time=0.5, end_time=3, speaker="Bob"),
    ]
    merged, _ = merge_short_segments(segments, min_duration=1)
    assert merged[0].speaker == "Alice"

    segments[0] = segments[0].model_copy(update={"speaker": None})
    merged, _ = merge_short_segments(segments, min_duration=1)
    assert merged[0].speaker == "Bob"


def test_merge_disabled_without_threshold():
    """Test that merging needs a minimum duration."""
    segments = [
        TranscriptSegment(text="A", start_time=0, end_time=0.1),
        TranscriptSegment(text="B", start_time=0.1, end_time=0.2),
    ]
    merged, count = merge_short_segments(segments, min_duration=None)

    assert merged == segments
    assert count == 0


def test_segment_transcript_word_limit(transcript_factory):
    """Test that an oversized segment is kept whole while others respect the cap."""
    long_text = " ".join(f"word{i}" for i in range(30))
    transcript = transcript_factory([
        ("one two three four five", 0, 2),
        ("six seven eight nine ten", 2, 4),
        (long_text, 4, 20),
        ("alpha beta gamma", 20, 22),
    ])

    chunks = segment_transcript(transcript, max_words=10, pause_threshold=3.0)
    word_counts = [len(chunk.text.split()) for chunk in chunks]

    assert word_counts == [10, 30, 3]
    assert chunks[1].text == long_text


def test_segment_transcript_splits_on_pause(transcript_factory):
    """Test that a long pause starts a new chunk."""
    transcript = transcript_factory([
        ("First thought here.", 0, 3),
        ("Still the first thought.", 3, 6),
        ("After a long pause.", 12, 15),
    ], duration=16)

    chunks = segment_transcript(transcript, max_words=300, pause_threshold=3.0)

    assert len(chunks) == 2
    assert chunks[0].text == "First thought here. Still the first thought."
    assert chunks[0].start_time == 0
    assert chunks[-1].end_time == 16
    starts = [c.start_time for c in chunks]
    assert starts == sorted(starts)


def test_segment_transcript_never_shortens_last_chunk(transcript_factory):
    """Test that a missing or short duration does not cut the last chunk."""
    transcript = transcript_factory([("hello there friend", 0, 5)], duration=0)

    chunks = segment_transcript(transcript)

    assert len(chunks) == 1
    assert chunks[0].start_time == 0
    assert chunks[0].end_time == 5


def test_segment_empty_transcript(empty_transcript):
    """Test that segmenting nothing gives nothing."""
    assert segment_transcript(empty_transcript) == []


@pytest.mark.parametrize("value,expected", [
    ("90", 90.0),
    ("12.5", 12.5),
    ("1:30", 90.0),
    ("2:15.5", 135.5),
    ("01:02:03", 3723.0),
    ("0:00:00", 0.0),
])
def test_parse_timestamp(value, expected):
    """Test the accepted timestamp shapes."""
    assert parse_timestamp(value) == expected


@pytest.mark.parametrize("value", ["1:2:3:4", "abc", "", "1:xx", "1::2", None])
def test_parse_timestamp_rejects_other_shapes(value):
    """Test that any other shape raises a parse error."""
    with pytest.raises(TimestampParseError) as exc_info:
        parse_timestamp(value)

    assert isinstance(exc_info.value, Vid2BlogError)
    assert isinstance(exc_info.value, ValueError)


def test_format_timestamp():
    """Test minute and hour formatting."""
    assert format_timestamp(65) == "1:05"
    assert format_timestamp(59.9) == "0:59"
    assert format_timestamp(3661) == "1:01:01"
    assert format_timestamp(5, force_hours=True) == "0:00:05"
    assert format_timestamp(-3) == "0:00"


def test_timestamp_round_trip():
    """Test that every second of a day survives format and parse."""
    for seconds in range(0, 86400):
        assert parse_timestamp(format_timestamp(seconds, force_hours=True)) == seconds


def test_format_duration():
    """Test human readable durations."""
    assert format_duration(30) == "less than a minute"
    assert format_duration(60) == "1 minute"
    assert format_duration(125) == "2 minutes"
    assert format_duration(3720) == "1 hour and 2 minutes"
    assert format_duration(7260) == "2 hours and 1 minute"
