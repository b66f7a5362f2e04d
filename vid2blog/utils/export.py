"""
Render articles as Markdown, HTML or plain text.
"""

import html
from typing import List

from vid2blog.models.schemas import Article, ExportFormat, ExportResult, walk_sections
from vid2blog.utils.helpers import slugify


EXTENSIONS = {
    ExportFormat.MARKDOWN: ("md", "text/markdown"),
    ExportFormat.HTML: ("html", "text/html"),
    ExportFormat.PLAIN: ("txt", "text/plain"),
}

HTML_STYLE = (
    "body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; max-width: 800px; margin: 0 auto; padding: 20px; }\n"
    "        h1 { color: #333; border-bottom: 2px solid #eee; padding-bottom: 10px; }\n"
    "        .metadata { background: #f5f5f5; padding: 15px; border-radius: 5px; margin: 20px 0; }\n"
    "        .tag { background: #e3f2fd; color: #1976d2; padding: 2px 8px; border-radius: 12px; "
    "font-size: 0.8em; margin-right: 5px; }"
)


def to_markdown(article: Article, include_metadata: bool = True) -> str:
    """Render an article as Markdown, subsections one heading level below their parent."""
    lines: List[str] = [f"# {article.title}", ""]

    if include_metadata:
        source = article.metadata.source_video
        lines.extend([
            f"**Source:** {source.title}  ",
            f"**Channel:** {source.channel_name}  ",
            f"**Word Count:** {article.metadata.word_count}  ",
            f"**Reading Time:** {article.metadata.reading_time} minutes  ",
            f"**Tags:** {', '.join(article.tags)}",
            "",
            "---",
            "",
        ])

    lines.extend(["## Introduction", "", article.introduction, ""])

    for depth, section in walk_sections(article.sections):
        lines.extend([f"{'#' * (depth + 2)} {section.heading}", "", section.content, ""])

    lines.extend(["## Conclusion", "", article.conclusion, ""])
    return "\n".join(lines)


def _paragraphs(text: str, indent: str) -> List[str]:
    return [f"{indent}<p>{html.escape(line)}</p>" for line in text.split("\n") if line.strip()]


def to_html(article: Article, include_metadata: bool = True) -> str:
    """Render an article as a standalone, escaped HTML document."""
    title = html.escape(article.title)
    indent = "    "
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        f'{indent}<meta charset="UTF-8">',
        f'{indent}<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"{indent}<title>{title}</title>",
        f'{indent}<meta name="description" content="{html.escape(article.metadata.meta_description)}">',
        f"{indent}<style>",
        f"        {HTML_STYLE}",
        f"{indent}</style>",
        "</head>",
        "<body>",
        f"{indent}<h1>{title}</h1>",
    ]

    if include_metadata:
        source = article.metadata.source_video
        tags = " ".join(f'<span class="tag">{html.escape(tag)}</span>' for tag in article.tags)
        lines.extend([
            f'{indent}<div class="metadata">',
            f"{indent * 2}<strong>Source:</strong> {html.escape(source.title)}<br>",
            f"{indent * 2}<strong>Channel:</strong> {html.escape(source.channel_name)}<br>",
            f"{indent * 2}<strong>Word Count:</strong> {article.metadata.word_count}<br>",
            f"{indent * 2}<strong>Reading Time:</strong> {article.metadata.reading_time} minutes",
            f'{indent * 2}<div class="tags"><strong>Tags:</strong> {tags}</div>',
            f"{indent}</div>",
        ])

    lines.append(f"{indent}<h2>Introduction</h2>")
    lines.extend(_paragraphs(article.introduction, indent))

    for depth, section in walk_sections(article.sections):
        level = depth + 2
        lines.append(f"{indent}<h{level}>{html.escape(section.heading)}</h{level}>")
        lines.extend(_paragraphs(section.content, indent))

    lines.append(f"{indent}<h2>Conclusion</h2>")
    lines.extend(_paragraphs(article.conclusion, indent))
    lines.extend(["</body>", "</html>", ""])
    return "\n".join(lines)


def to_plain_text(article: Article, include_metadata: bool = True) -> str:
    """Render an article as plain text with underlined headings."""
    lines = [article.title.upper(), "=" * len(article.title), ""]

    if include_metadata:
        source = article.metadata.source_video
        lines.extend([
            f"Source: {source.title}",
            f"Channel: {source.channel_name}",
            f"Word Count: {article.metadata.word_count}",
            f"Reading Time: {article.metadata.reading_time} minutes",
            f"Tags: {', '.join(article.tags)}",
            "",
        ])

    lines.extend(["INTRODUCTION", "", article.introduction, ""])

    for depth, section in walk_sections(article.sections):
        heading = section.heading.upper() if depth == 0 else section.heading
        underline = "-" * len(heading) if depth > 0 else ""
        lines.append(heading)
        if underline:
            lines.append(underline)
        lines.extend(["", section.content, ""])

    lines.extend(["CONCLUSION", "", article.conclusion, ""])
    return "\n".join(lines)


RENDERERS = {
    ExportFormat.MARKDOWN: to_markdown,
    ExportFormat.HTML: to_html,
    ExportFormat.PLAIN: to_plain_text,
}


def export_article(
    article: Article,
    export_format: ExportFormat = ExportFormat.MARKDOWN,
    include_metadata: bool = True,
) -> ExportResult:
    """
    Export an article in the given format.

    Args:
        article: Article to export
        export_format: Target format
        include_metadata: Whether to include source, word count and tags

    Returns:
        ExportResult with the rendered content, a filename and its MIME type
    """
    export_format = ExportFormat(export_format)
    extension, mime_type = EXTENSIONS[export_format]
    content = RENDERERS[export_format](article, include_metadata)
    filename = f"{slugify(article.title) or 'article'}.{extension}"
    return ExportResult(content=content, filename=filename, mime_type=mime_type)
