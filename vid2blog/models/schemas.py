"""
Data models for the Vid2Blog application.

Every model serializes to the camelCase JSON shape shared with the web
client (``startTime``, ``keyPoints``...) while keeping snake_case attributes
in Python. Transcript, analysis and article models are frozen: pipeline
stages build new objects instead of mutating their input.
"""

from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


MAX_SECTION_DEPTH = 2


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenModel(CamelModel):
    """Immutable camelCase model."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Sentiment(str, Enum):
    """Overall sentiment of a transcript."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class TemplateType(str, Enum):
    """Kinds of article templates."""
    TUTORIAL = "tutorial"
    INTERVIEW = "interview"
    PRESENTATION = "presentation"
    DISCUSSION = "discussion"
    GENERAL = "general"


class ContentType(str, Enum):
    """How a template section gets its content."""
    INTRODUCTION = "introduction"
    MAIN_CONTENT = "main_content"
    KEY_POINTS = "key_points"
    SUMMARY = "summary"
    CONCLUSION = "conclusion"
    CUSTOM = "custom"


class ArticleTone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    TECHNICAL = "technical"


class ArticleLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class ExportFormat(str, Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    PLAIN = "plain"


# Transcript models

class TranscriptSegment(FrozenModel):
    """A contiguous span of transcript text with its timing."""
    text: str
    start_time: float = Field(ge=0)
    end_time: float = Field(ge=0)
    confidence: float = Field(default=1.0, ge=0, le=1)
    speaker: Optional[str] = None

    @model_validator(mode="after")
    def check_time_order(self):
        if self.end_time < self.start_time:
            raise ValueError(
                f"Segment ends ({self.end_time}) before it starts ({self.start_time})"
            )
        return self

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class Transcript(FrozenModel):
    """A time-stamped transcript as delivered by a transcript provider."""
    segments: List[TranscriptSegment] = Field(default_factory=list)
    language: str = "en"
    confidence: float = Field(default=0.0, ge=0, le=1)
    duration: float = Field(default=0.0, ge=0)

    @property
    def full_text(self) -> str:
        return " ".join(segment.text for segment in self.segments)


class ProcessingStats(FrozenModel):
    filler_words_removed: int = 0
    segments_merged: int = 0
    formatting_cleaned: int = 0


class ProcessedTranscript(Transcript):
    """Transcript after cleaning, with bookkeeping about what changed."""
    cleaned_text: str = ""
    original_segment_count: int = 0
    processed_segment_count: int = 0
    processing_stats: ProcessingStats = Field(default_factory=ProcessingStats)

    def as_transcript(self) -> Transcript:
        """Drop the processing bookkeeping and return a plain transcript."""
        return Transcript(
            segments=self.segments,
            language=self.language,
            confidence=self.confidence,
            duration=self.duration,
        )


class TranscriptProcessingOptions(CamelModel):
    """Configuration for transcript cleaning."""
    remove_filler_words: bool = True
    clean_formatting: bool = True
    normalize_whitespace: bool = True
    merge_similar_segments: bool = True
    min_segment_duration: Optional[float] = Field(default=None, ge=0)
    max_segment_duration: Optional[float] = Field(default=None, gt=0)


# Analysis models

class WordFrequency(FrozenModel):
    word: str
    frequency: int
    positions: List[float] = Field(default_factory=list)


class TimeRange(FrozenModel):
    start: float
    end: float


class Topic(FrozenModel):
    name: str
    relevance: float
    time_ranges: List[TimeRange] = Field(default_factory=list)


class KeyPoint(FrozenModel):
    text: str
    importance: float = Field(ge=0)
    timestamp: float
    category: str = "General"


class ArticleSection(FrozenModel):
    """A heading with content and optional nested subsections."""
    heading: str
    content: str
    subsections: Optional[List["ArticleSection"]] = None

    @model_validator(mode="after")
    def check_depth(self):
        if self.height() > MAX_SECTION_DEPTH:
            raise ValueError(
                f"Section '{self.heading}' nests deeper than {MAX_SECTION_DEPTH} levels"
            )
        return self

    def height(self) -> int:
        if not self.subsections:
            return 1
        return 1 + max(sub.height() for sub in self.subsections)


def walk_sections(sections: List[ArticleSection]) -> Iterator[Tuple[int, ArticleSection]]:
    """
    Walk a section tree in document order.

    Args:
        sections: Top-level sections

    Yields:
        ``(depth, section)`` pairs, depth 0 for top-level sections
    """
    stack = [(0, section) for section in reversed(sections)]
    while stack:
        depth, section = stack.pop()
        yield depth, section
        if section.subsections:
            stack.extend((depth + 1, sub) for sub in reversed(section.subsections))


class ContentAnalysis(FrozenModel):
    """Everything the article generators need to know about a transcript."""
    topics: List[Topic] = Field(default_factory=list)
    key_points: List[KeyPoint] = Field(default_factory=list)
    summary: str = ""
    suggested_structure: List[ArticleSection] = Field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL


class ContentAnalysisOptions(CamelModel):
    """Configuration for content analysis."""
    max_keywords: int = Field(default=20, ge=1)
    max_topics: int = Field(default=8, ge=0)
    max_key_points: int = Field(default=10, ge=0)
    min_keyword_frequency: int = Field(default=1, ge=1)
    min_topic_relevance: float = Field(default=0.05, ge=0)
    summary_length: int = Field(default=3, ge=0)
    include_timestamps: bool = True


# Article models

class VideoMetadata(FrozenModel):
    """Video details as returned by the metadata provider."""
    id: str
    title: str
    description: str = ""
    duration: float = Field(default=0.0, ge=0)
    thumbnail_url: str = ""
    channel_name: str = ""
    publish_date: Optional[datetime] = None
    view_count: int = 0


class ArticleMetadata(FrozenModel):
    word_count: int
    reading_time: int
    seo_title: str
    meta_description: str
    source_video: VideoMetadata


class Article(FrozenModel):
    title: str
    introduction: str
    sections: List[ArticleSection] = Field(default_factory=list)
    conclusion: str
    metadata: ArticleMetadata
    tags: List[str] = Field(default_factory=list)


class TemplateSection(FrozenModel):
    heading: str
    content_type: ContentType
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    include_timestamps: bool = False
    keyword_focus: List[str] = Field(default_factory=list)


class ArticleTemplate(FrozenModel):
    name: str
    type: TemplateType
    default_tone: ArticleTone = ArticleTone.PROFESSIONAL
    estimated_length: ArticleLength = ArticleLength.MEDIUM
    structure: List[TemplateSection]


class GenerationOptions(CamelModel):
    """
    Configuration for article generation.

    ``length`` and ``tone`` fall back to the selected template's
    ``estimated_length`` and ``default_tone`` when left unset.
    """
    length: Optional[ArticleLength] = None
    tone: Optional[ArticleTone] = None
    format: ExportFormat = ExportFormat.MARKDOWN
    include_timestamps: Optional[bool] = None
    custom_template: Optional[str] = None
    use_ai: Optional[bool] = None


class ExportResult(FrozenModel):
    content: str
    filename: str
    mime_type: str
