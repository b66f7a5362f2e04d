"""
Article templates and the word lists used to pick between them.
"""

from typing import Dict, Tuple

from vid2blog.models.schemas import (
    ArticleLength,
    ArticleTemplate,
    ArticleTone,
    ContentType,
    TemplateSection,
    TemplateType,
)


def _section(heading, content_type, min_length, max_length, include_timestamps=False):
    return TemplateSection(
        heading=heading,
        content_type=content_type,
        min_length=min_length,
        max_length=max_length,
        include_timestamps=include_timestamps,
    )


PREDEFINED_TEMPLATES: Tuple[ArticleTemplate, ...] = (
    ArticleTemplate(
        name="Tutorial Guide",
        type=TemplateType.TUTORIAL,
        default_tone=ArticleTone.PROFESSIONAL,
        estimated_length=ArticleLength.LONG,
        structure=[
            _section("Introduction", ContentType.INTRODUCTION, 50, 150),
            _section("Overview", ContentType.SUMMARY, 100, 200),
            _section("Step-by-Step Guide", ContentType.MAIN_CONTENT, 300, 800, include_timestamps=True),
            _section("Key Takeaways", ContentType.KEY_POINTS, 100, 300),
            _section("Conclusion", ContentType.CONCLUSION, 50, 150),
        ],
    ),
    ArticleTemplate(
        name="Interview Summary",
        type=TemplateType.INTERVIEW,
        default_tone=ArticleTone.PROFESSIONAL,
        estimated_length=ArticleLength.MEDIUM,
        structure=[
            _section("Introduction", ContentType.INTRODUCTION, 50, 100),
            _section("Key Discussion Points", ContentType.KEY_POINTS, 200, 400, include_timestamps=True),
            _section("Main Insights", ContentType.MAIN_CONTENT, 200, 500),
            _section("Summary", ContentType.CONCLUSION, 100, 200),
        ],
    ),
    ArticleTemplate(
        name="Presentation Notes",
        type=TemplateType.PRESENTATION,
        default_tone=ArticleTone.TECHNICAL,
        estimated_length=ArticleLength.MEDIUM,
        structure=[
            _section("Overview", ContentType.INTRODUCTION, 50, 150),
            _section("Main Topics", ContentType.MAIN_CONTENT, 300, 600, include_timestamps=True),
            _section("Key Points", ContentType.KEY_POINTS, 150, 300),
            _section("Conclusion", ContentType.CONCLUSION, 50, 150),
        ],
    ),
    ArticleTemplate(
        name="Discussion Summary",
        type=TemplateType.DISCUSSION,
        default_tone=ArticleTone.CASUAL,
        estimated_length=ArticleLength.SHORT,
        structure=[
            _section("Introduction", ContentType.INTRODUCTION, 30, 100),
            _section("Main Discussion", ContentType.MAIN_CONTENT, 200, 400),
            _section("Key Takeaways", ContentType.KEY_POINTS, 100, 200),
        ],
    ),
    ArticleTemplate(
        name="General Article",
        type=TemplateType.GENERAL,
        default_tone=ArticleTone.PROFESSIONAL,
        estimated_length=ArticleLength.MEDIUM,
        structure=[
            _section("Introduction", ContentType.INTRODUCTION, 50, 150),
            _section("Main Content", ContentType.MAIN_CONTENT, 250, 500),
            _section("Key Points", ContentType.KEY_POINTS, 100, 250),
            _section("Conclusion", ContentType.CONCLUSION, 50, 150),
        ],
    ),
)

# Indicator words per template type, matched as whole words in topic names and key points
TEMPLATE_SIGNATURES: Dict[TemplateType, Tuple[str, ...]] = {
    TemplateType.TUTORIAL: (
        "step", "guide", "tutorial", "how", "method", "process", "learn", "lesson",
        "setup", "install",
    ),
    TemplateType.INTERVIEW: (
        "interview", "discussion", "conversation", "question", "answer", "guest", "podcast",
    ),
    TemplateType.PRESENTATION: (
        "presentation", "slide", "technical", "system", "architecture", "talk",
        "conference", "keynote",
    ),
    TemplateType.DISCUSSION: (
        "debate", "opinion", "perspective", "panel", "viewpoint", "argue", "roundtable",
    ),
}

# Target word band, and the key points per section and topics in main content
# that bias how much of the analysis fills it, by article length
LENGTH_PROFILES: Dict[ArticleLength, Dict[str, int]] = {
    ArticleLength.SHORT: {"min_words": 300, "max_words": 500, "key_points": 3, "topics": 2},
    ArticleLength.MEDIUM: {"min_words": 600, "max_words": 1000, "key_points": 5, "topics": 4},
    ArticleLength.LONG: {"min_words": 1000, "max_words": 1500, "key_points": 8, "topics": 5},
}

DEFAULT_TEMPLATE_TYPE = TemplateType.GENERAL
