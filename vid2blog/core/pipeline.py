"""
Module for running the full transcript-to-article pipeline.
"""

import time
from typing import Dict, Optional

from pydantic import Field, ValidationError

from vid2blog.config import config
from vid2blog.core.ai_generator import AIArticleGenerator
from vid2blog.core.article_generator import generate_article
from vid2blog.core.content_analyzer import analyze_content
from vid2blog.core.transcript_processor import process_transcript
from vid2blog.models.schemas import (
    Article,
    CamelModel,
    ContentAnalysis,
    ContentAnalysisOptions,
    GenerationOptions,
    ProcessedTranscript,
    Transcript,
    TranscriptProcessingOptions,
    VideoMetadata,
)
from vid2blog.utils.error_handling import Vid2BlogError, log_diagnostic_info
from vid2blog.utils.logger import logging


class PipelineResult(CamelModel):
    """Outcome of a pipeline run, with whatever stages completed."""
    success: bool
    processed_transcript: Optional[ProcessedTranscript] = None
    analysis: Optional[ContentAnalysis] = None
    article: Optional[Article] = None
    error: Optional[str] = None
    processing_time: float = 0.0
    stage_timings: Dict[str, float] = Field(default_factory=dict)


def should_use_ai(options: GenerationOptions) -> bool:
    """The explicit option wins, otherwise the ``USE_AI_GENERATION`` setting."""
    if options.use_ai is not None:
        return options.use_ai
    return config.USE_AI_GENERATION


async def run_pipeline(
    transcript: Transcript,
    video_metadata: VideoMetadata,
    processing_options: Optional[TranscriptProcessingOptions] = None,
    analysis_options: Optional[ContentAnalysisOptions] = None,
    generation_options: Optional[GenerationOptions] = None,
    ai_generator: Optional[AIArticleGenerator] = None,
) -> PipelineResult:
    """
    Clean, analyze and turn a transcript into an article.

    Args:
        transcript: Raw transcript of the video
        video_metadata: Metadata of the video
        processing_options: Transcript cleaning options
        analysis_options: Content analysis options
        generation_options: Article generation options
        ai_generator: Generator for the language model path (created on demand)

    Returns:
        PipelineResult; ``success`` is False when a stage raised a pipeline or
        validation error
    """
    generation_options = generation_options or GenerationOptions()
    timings: Dict[str, float] = {}
    started = time.perf_counter()

    processed = None
    analysis = None
    stage = "processing"

    logging.info(f"Starting pipeline for video {video_metadata.id} ({len(transcript.segments)} segments)")

    try:
        stage_start = time.perf_counter()
        processed = process_transcript(transcript, processing_options)
        timings["processing"] = time.perf_counter() - stage_start

        stage = "analysis"
        stage_start = time.perf_counter()
        analysis = analyze_content(processed.as_transcript(), analysis_options)
        timings["analysis"] = time.perf_counter() - stage_start

        stage = "generation"
        stage_start = time.perf_counter()
        if should_use_ai(generation_options):
            generator = ai_generator or AIArticleGenerator()
            article = await generator.generate_article(
                analysis, video_metadata, processed, generation_options
            )
        else:
            article = generate_article(analysis, video_metadata, processed, generation_options)
        timings["generation"] = time.perf_counter() - stage_start

    except (Vid2BlogError, ValidationError) as e:
        logging.error(f"Pipeline failed during {stage}: {str(e)}", exc_info=True)
        log_diagnostic_info({"video_id": video_metadata.id, "stage": stage, "error": str(e)})
        return PipelineResult(
            success=False,
            processed_transcript=processed,
            analysis=analysis,
            error=str(e),
            processing_time=time.perf_counter() - started,
            stage_timings=timings,
        )

    total = time.perf_counter() - started
    logging.info(f"Pipeline finished for video {video_metadata.id} in {total:.3f}s")

    return PipelineResult(
        success=True,
        processed_transcript=processed,
        analysis=analysis,
        article=article,
        processing_time=total,
        stage_timings=timings,
    )
