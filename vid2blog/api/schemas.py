from typing import Optional

from pydantic import Field

from vid2blog.models.schemas import (
    Article,
    CamelModel,
    ContentAnalysis,
    ContentAnalysisOptions,
    ExportFormat,
    GenerationOptions,
    Transcript,
    TranscriptProcessingOptions,
    VideoMetadata,
)


class ProcessTranscriptRequest(CamelModel):
    """Model for transcript cleaning requests."""
    transcript: Transcript
    options: Optional[TranscriptProcessingOptions] = None


class SegmentTranscriptRequest(CamelModel):
    """Model for transcript re-segmentation requests."""
    transcript: Transcript
    max_words: int = Field(default=300, gt=0)
    pause_threshold: float = Field(default=3.0, ge=0)


class AnalyzeContentRequest(CamelModel):
    """Model for content analysis requests."""
    transcript: Transcript
    options: Optional[ContentAnalysisOptions] = None


class GenerateArticleRequest(CamelModel):
    """Model for article generation requests."""
    analysis: ContentAnalysis
    video_metadata: VideoMetadata
    transcript: Transcript
    options: Optional[GenerationOptions] = None


class PipelineRequest(CamelModel):
    """Model for full pipeline requests."""
    transcript: Transcript
    video_metadata: VideoMetadata
    processing_options: Optional[TranscriptProcessingOptions] = None
    analysis_options: Optional[ContentAnalysisOptions] = None
    generation_options: Optional[GenerationOptions] = None


class ExportRequest(CamelModel):
    """Model for article export requests."""
    article: Article
    format: ExportFormat = ExportFormat.MARKDOWN
    include_metadata: bool = True


class HealthResponse(CamelModel):
    """Model for health check responses."""
    status: str
    version: str
    ai_generation_available: bool
