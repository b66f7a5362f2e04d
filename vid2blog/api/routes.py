"""
API routes for the Vid2Blog application.
"""

from typing import List

from fastapi import APIRouter, Depends

from vid2blog.config import config
from vid2blog.api.schemas import (
    AnalyzeContentRequest,
    ExportRequest,
    GenerateArticleRequest,
    HealthResponse,
    PipelineRequest,
    ProcessTranscriptRequest,
    SegmentTranscriptRequest,
)
from vid2blog.core.ai_generator import AIArticleGenerator
from vid2blog.core.article_generator import generate_article, get_available_templates
from vid2blog.core.content_analyzer import analyze_content
from vid2blog.core.pipeline import PipelineResult, run_pipeline, should_use_ai
from vid2blog.core.transcript_processor import process_transcript, segment_transcript
from vid2blog.models.schemas import (
    Article,
    ArticleTemplate,
    ContentAnalysis,
    ExportResult,
    GenerationOptions,
    ProcessedTranscript,
    TranscriptSegment,
)
from vid2blog.utils.export import export_article
from vid2blog.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["vid2blog"])


def get_ai_generator() -> AIArticleGenerator:
    """Dependency providing the language model article generator."""
    return AIArticleGenerator()


@router.post("/transcript/process", response_model=ProcessedTranscript)
async def process_transcript_route(request: ProcessTranscriptRequest):
    """Clean a raw transcript."""
    return process_transcript(request.transcript, request.options)


@router.post("/transcript/segment", response_model=List[TranscriptSegment])
async def segment_transcript_route(request: SegmentTranscriptRequest):
    """Re-chunk a transcript by pauses and word count."""
    return segment_transcript(request.transcript, request.max_words, request.pause_threshold)


@router.post("/content/analyze", response_model=ContentAnalysis)
async def analyze_content_route(request: AnalyzeContentRequest):
    """Extract topics, key points, summary, outline and sentiment from a transcript."""
    analysis = analyze_content(request.transcript, request.options)
    logging.info(
        f"Analyzed transcript: {len(analysis.topics)} topics, {len(analysis.key_points)} key points"
    )
    return analysis


@router.post("/content/generate", response_model=Article)
async def generate_article_route(
    request: GenerateArticleRequest,
    ai_generator: AIArticleGenerator = Depends(get_ai_generator),
):
    """
    Generate an article from a content analysis.

    - Uses the language model when ``useAi`` is set (or enabled by configuration)
    - Falls back to the template generator if the model fails
    """
    options = request.options or GenerationOptions()
    if should_use_ai(options):
        return await ai_generator.generate_article(
            request.analysis, request.video_metadata, request.transcript, options
        )
    return generate_article(request.analysis, request.video_metadata, request.transcript, options)


@router.post("/process", response_model=PipelineResult)
async def process_video_route(
    request: PipelineRequest,
    ai_generator: AIArticleGenerator = Depends(get_ai_generator),
):
    """Run the whole pipeline: clean, analyze and generate."""
    return await run_pipeline(
        request.transcript,
        request.video_metadata,
        processing_options=request.processing_options,
        analysis_options=request.analysis_options,
        generation_options=request.generation_options,
        ai_generator=ai_generator,
    )


@router.post("/export", response_model=ExportResult)
async def export_article_route(request: ExportRequest):
    """Render an article as Markdown, HTML or plain text."""
    return export_article(request.article, request.format, request.include_metadata)


@router.get("/templates", response_model=List[ArticleTemplate])
async def list_templates():
    """List the available article templates."""
    return get_available_templates()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=config.APP_VERSION,
        ai_generation_available=bool(config.LLM_API_KEY),
    )
