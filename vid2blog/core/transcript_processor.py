"""
Module for cleaning, merging and re-segmenting transcripts.
"""

import re
from typing import List, Optional, Tuple

from vid2blog.models.schemas import (
    ProcessedTranscript,
    ProcessingStats,
    Transcript,
    TranscriptProcessingOptions,
    TranscriptSegment,
)
from vid2blog.utils.error_handling import TimestampParseError
from vid2blog.utils.logger import logging


# Hesitation sounds are always noise
FILLER_SOUNDS = ("um", "umm", "uh", "uhh", "uhm", "ah", "er", "erm", "hmm", "mm")

# Removed wherever they occur
FILLER_PHRASES = ("you know", "i mean")

# Only removed in their comma-delimited discourse use ("So, like, today...")
DISCOURSE_MARKERS = (
    "sort of", "kind of", "like", "so", "actually", "basically", "literally",
    "obviously", "well", "okay", "right", "yeah",
)


def _alternation(words) -> str:
    return "|".join(r"\s+".join(re.escape(part) for part in word.split()) for word in words)


_SOUND_PATTERN = re.compile(rf"\b(?:{_alternation(FILLER_SOUNDS)})\b(?:[ \t]*,)?", re.IGNORECASE)
_PHRASE_PATTERN = re.compile(rf"\b(?:{_alternation(FILLER_PHRASES)})\b(?:[ \t]*,)?", re.IGNORECASE)
_MARKER_PATTERN = re.compile(rf"\b(?:{_alternation(DISCOURSE_MARKERS)})\b,", re.IGNORECASE)

_HTML_TAG = re.compile(r"<[^>]*>")
_BRACKETED = re.compile(r"\[[^\]]*\]")
_PARENTHETICAL = re.compile(r"\([^)]*\)")
_MUSIC_NOTES = re.compile(r"[♪♫♬]+")
_LEAKED_TIMESTAMP = re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?\b")
_DASH_RUN = re.compile(r"-{2,}")
_STRAY_DASH = re.compile(r"\s+-+\s+|^\s*-+\s*|\s*-+\s*$")

_TIMESTAMP = re.compile(r"(?:(?:(\d+):)?(\d+):(\d+(?:\.\d+)?)|(\d+(?:\.\d+)?))")


def clean_formatting(text: str) -> str:
    """
    Strip transcription artifacts from a piece of text.

    Removes HTML tags, bracketed and parenthetical annotations such as
    ``[Music]`` or ``(laughs)``, music notes, leaked timestamps and stray
    dashes, and collapses repeated punctuation.

    Args:
        text: Raw segment text

    Returns:
        Cleaned text
    """
    text = _HTML_TAG.sub("", text)
    text = re.sub(r"\.{3,}", "...", text)
    text = re.sub(r"!{2,}", "!", text)
    text = re.sub(r"\?{2,}", "?", text)
    text = _BRACKETED.sub("", text)
    text = _PARENTHETICAL.sub("", text)
    text = _MUSIC_NOTES.sub("", text)
    text = _LEAKED_TIMESTAMP.sub("", text)
    text = _DASH_RUN.sub(" ", text)
    text = _STRAY_DASH.sub(" ", text)
    return text.strip()


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to a single space and trim."""
    return re.sub(r"\s+", " ", text).strip()


def remove_filler_words(text: str) -> Tuple[str, int]:
    """
    Remove filler words and phrases from text.

    Tidying the gaps can attach a comma to a discourse marker, so removal
    repeats until a pass finds nothing. The result is then a fixed point.

    Args:
        text: Segment text

    Returns:
        Tuple of the cleaned text and the number of words removed
    """
    removed = 0

    def _drop(match):
        nonlocal removed
        removed += len(match.group(0).replace(",", " ").split())
        return " "

    while True:
        before = removed
        text = _PHRASE_PATTERN.sub(_drop, text)
        text = _MARKER_PATTERN.sub(_drop, text)
        text = _SOUND_PATTERN.sub(_drop, text)
        if removed == before:
            break

        # Tidy the gaps left behind
        text = re.sub(r"[ \t]+([,.!?;:])", r"\1", text)
        text = re.sub(r",(?:\s*,)+", ",", text)
        text = re.sub(r"^[\s,;:]+", "", text)
        text = re.sub(r"[ \t]{2,}", " ", text).strip()

    return text, removed


def _merge_pair(first: TranscriptSegment, second: TranscriptSegment) -> TranscriptSegment:
    # The earlier segment's speaker wins
    return TranscriptSegment(
        text=f"{first.text} {second.text}".strip(),
        start_time=first.start_time,
        end_time=max(first.end_time, second.end_time),
        confidence=min(first.confidence, second.confidence),
        speaker=first.speaker if first.speaker is not None else second.speaker,
    )


def merge_short_segments(
    segments: List[TranscriptSegment],
    min_duration: Optional[float],
    max_duration: Optional[float] = None,
) -> Tuple[List[TranscriptSegment], int]:
    """
    Merge segments shorter than ``min_duration`` into their neighbours.

    A short segment absorbs the segments that follow it until it is long
    enough, as long as the merged span stays within ``max_duration``. A short
    final segment is folded into the one before it under the same cap.

    Args:
        segments: Chronologically ordered segments
        min_duration: Segments shorter than this are merged; None disables merging
        max_duration: Upper bound on a merged segment's span; None means no bound

    Returns:
        Tuple of the merged segments and the number of merges performed
    """
    if not segments or min_duration is None:
        return list(segments), 0

    limit = max_duration if max_duration is not None else float("inf")
    merged: List[TranscriptSegment] = []
    merge_count = 0
    current = segments[0]

    for following in segments[1:]:
        if current.duration < min_duration and following.end_time - current.start_time <= limit:
            current = _merge_pair(current, following)
            merge_count += 1
        else:
            merged.append(current)
            current = following

    if (
        merged
        and current.duration < min_duration
        and current.end_time - merged[-1].start_time <= limit
    ):
        merged[-1] = _merge_pair(merged[-1], current)
        merge_count += 1
    else:
        merged.append(current)

    return merged, merge_count


def process_transcript(
    transcript: Transcript,
    options: Optional[TranscriptProcessingOptions] = None,
) -> ProcessedTranscript:
    """
    Clean a transcript segment by segment.

    Args:
        transcript: Raw transcript
        options: Cleaning options (defaults enable every cleaning step and
            leave merge thresholds unset)

    Returns:
        ProcessedTranscript with the cleaned segments and processing stats
    """
    options = options or TranscriptProcessingOptions()

    filler_words_removed = 0
    formatting_cleaned = 0
    cleaned_segments: List[TranscriptSegment] = []

    for segment in sorted(transcript.segments, key=lambda s: s.start_time):
        text = segment.text

        if options.clean_formatting:
            formatted = clean_formatting(text)
            if formatted != text:
                formatting_cleaned += 1
            text = formatted

        if options.normalize_whitespace:
            text = normalize_whitespace(text)

        if options.remove_filler_words:
            text, removed = remove_filler_words(text)
            filler_words_removed += removed

        if not text.strip():
            continue

        if text != segment.text:
            segment = segment.model_copy(update={"text": text})
        cleaned_segments.append(segment)

    segments_merged = 0
    if options.merge_similar_segments:
        cleaned_segments, segments_merged = merge_short_segments(
            cleaned_segments,
            options.min_segment_duration,
            options.max_segment_duration,
        )

    cleaned_text = " ".join(segment.text for segment in cleaned_segments).strip()

    logging.debug(
        f"Processed transcript: {len(transcript.segments)} -> {len(cleaned_segments)} segments, "
        f"{filler_words_removed} filler words, {segments_merged} merges, "
        f"{formatting_cleaned} segments reformatted"
    )

    return ProcessedTranscript(
        segments=cleaned_segments,
        language=transcript.language,
        confidence=transcript.confidence,
        duration=transcript.duration,
        cleaned_text=cleaned_text,
        original_segment_count=len(transcript.segments),
        processed_segment_count=len(cleaned_segments),
        processing_stats=ProcessingStats(
            filler_words_removed=filler_words_removed,
            segments_merged=segments_merged,
            formatting_cleaned=formatting_cleaned,
        ),
    )


def segment_transcript(
    transcript: Transcript,
    max_words: int = 300,
    pause_threshold: float = 3.0,
) -> List[TranscriptSegment]:
    """
    Re-chunk a transcript by pauses and word count.

    A new chunk starts after a pause longer than ``pause_threshold`` or when
    adding the next segment would push the chunk past ``max_words``. A single
    segment longer than ``max_words`` becomes its own chunk and is never cut.

    Args:
        transcript: Transcript to segment
        max_words: Word budget per chunk
        pause_threshold: Pause in seconds that forces a new chunk

    Returns:
        List of chunks in chronological order
    """
    chunks: List[TranscriptSegment] = []
    current: Optional[TranscriptSegment] = None
    word_count = 0

    for segment in sorted(transcript.segments, key=lambda s: s.start_time):
        words = len(segment.text.split())

        if current is None:
            current, word_count = segment, words
            continue

        gap = segment.start_time - current.end_time
        if gap > pause_threshold or word_count + words > max_words:
            chunks.append(current)
            current, word_count = segment, words
        else:
            current = _merge_pair(current, segment)
            word_count += words

    if current is not None:
        # The last chunk runs to the end of the video, never short of its own end
        end_time = max(current.end_time, transcript.duration)
        if end_time != current.end_time:
            current = current.model_copy(update={"end_time": end_time})
        chunks.append(current)

    return chunks


def parse_timestamp(value: str) -> float:
    """
    Parse ``SS``, ``MM:SS`` or ``HH:MM:SS`` (each with optional fraction) into seconds.

    Raises:
        TimestampParseError: If the value has any other shape
    """
    if not isinstance(value, str):
        raise TimestampParseError(str(value))

    match = _TIMESTAMP.fullmatch(value.strip())
    if not match:
        raise TimestampParseError(value)

    hours, minutes, seconds, plain = match.groups()
    if plain is not None:
        return float(plain)
    return int(hours or 0) * 3600 + int(minutes) * 60 + float(seconds)


def format_timestamp(seconds: float, force_hours: bool = False) -> str:
    """
    Format seconds as ``M:SS``, or ``H:MM:SS`` when forced or at least an hour.
    """
    total = int(max(0.0, seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    if force_hours or hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: float) -> str:
    """Format a duration in words, e.g. ``"1 hour and 5 minutes"``."""
    total = int(max(0.0, seconds))
    if total < 60:
        return "less than a minute"

    hours, remainder = divmod(total, 3600)
    minutes = remainder // 60
    minute_text = f"{minutes} minute{'s' if minutes != 1 else ''}"

    if hours > 0:
        return f"{hours} hour{'s' if hours > 1 else ''} and {minute_text}"
    return minute_text
