"""
Main entry point for the Vid2Blog application.
"""

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from vid2blog.config import config
from vid2blog.core.pipeline import PipelineResult, run_pipeline
from vid2blog.models.schemas import (
    Article,
    ArticleLength,
    ArticleTone,
    ContentAnalysisOptions,
    ExportFormat,
    GenerationOptions,
    Transcript,
    TranscriptProcessingOptions,
    VideoMetadata,
)
from vid2blog.utils.export import export_article
from vid2blog.utils.helpers import ensure_dir, load_json, save_json, slugify
from vid2blog.utils.logger import logging


def save_article(
    article: Article,
    output_file: Optional[str] = None,
    export_format: Optional[ExportFormat] = None,
) -> Path:
    """
    Save an article as JSON, or rendered when an export format is given.

    Args:
        article: Article to save
        output_file: Target path (defaults to a file in ``ARTICLES_DIR``)
        export_format: Markdown, HTML or plain text instead of JSON

    Returns:
        Path of the written file
    """
    exported = export_article(article, export_format) if export_format is not None else None
    default_name = exported.filename if exported else f"{slugify(article.title) or 'article'}.json"

    if output_file is None:
        ensure_dir(config.ARTICLES_DIR)
        output_file = Path(config.ARTICLES_DIR) / default_name
    else:
        output_file = Path(output_file)

    if exported:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(exported.content)
    else:
        save_json(article.model_dump(mode="json", by_alias=True), str(output_file))

    logging.info(f"Article saved to: {output_file}")
    return output_file


def convert_transcript_to_article(
    transcript: Transcript,
    video_metadata: VideoMetadata,
    processing_options: Optional[TranscriptProcessingOptions] = None,
    analysis_options: Optional[ContentAnalysisOptions] = None,
    generation_options: Optional[GenerationOptions] = None,
) -> PipelineResult:
    """
    Run the pipeline synchronously.

    Args:
        transcript: Raw transcript of the video
        video_metadata: Metadata of the video
        processing_options: Transcript cleaning options
        analysis_options: Content analysis options
        generation_options: Article generation options

    Returns:
        PipelineResult
    """
    return asyncio.run(run_pipeline(
        transcript,
        video_metadata,
        processing_options=processing_options,
        analysis_options=analysis_options,
        generation_options=generation_options,
    ))


def load_inputs(transcript_path: str, metadata_path: Optional[str] = None):
    """Load a transcript JSON file and, if given, a video metadata JSON file."""
    transcript = Transcript.model_validate(load_json(transcript_path))

    if metadata_path:
        video_metadata = VideoMetadata.model_validate(load_json(metadata_path))
    else:
        stem = Path(transcript_path).stem
        video_metadata = VideoMetadata(
            id=stem,
            title=stem.replace("_", " ").replace("-", " ").title(),
            duration=transcript.duration,
        )
    return transcript, video_metadata


def main():
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="Turn a video transcript into a blog article")
    parser.add_argument("transcript", help="Transcript JSON file")
    parser.add_argument("--metadata", help="Video metadata JSON file")
    parser.add_argument("--output", help="Output file path for the article")
    parser.add_argument("--format", choices=[f.value for f in ExportFormat],
                        help="Save the rendered article instead of JSON")
    parser.add_argument("--tone", choices=[t.value for t in ArticleTone])
    parser.add_argument("--length", choices=[length.value for length in ArticleLength])
    parser.add_argument("--template", help="Template name or type to use")
    parser.add_argument("--ai", action="store_true", help="Generate the article with the language model")
    parser.add_argument("--no-timestamps", action="store_true", help="Leave out timestamp markers")

    args = parser.parse_args()

    transcript, video_metadata = load_inputs(args.transcript, args.metadata)
    export_format = ExportFormat(args.format) if args.format else None

    generation_options = GenerationOptions(
        tone=args.tone,
        length=args.length,
        format=export_format or ExportFormat.MARKDOWN,
        custom_template=args.template,
        include_timestamps=False if args.no_timestamps else None,
        use_ai=True if args.ai else None,
    )

    result = convert_transcript_to_article(transcript, video_metadata, generation_options=generation_options)
    if not result.success:
        logging.error(f"Conversion failed: {result.error}")
        raise SystemExit(1)

    output_file = save_article(result.article, args.output, export_format)

    print("\n" + "=" * 80)
    print(result.article.title)
    print("=" * 80)
    print(result.article.introduction)
    print("=" * 80)
    print(f"Saved to {output_file} ({result.article.metadata.word_count} words, "
          f"{result.processing_time:.2f}s)")


if __name__ == "__main__":
    main()
