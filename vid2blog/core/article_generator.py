"""
Module for rendering articles from content analysis with fixed templates.
"""

import math
import re
from typing import Dict, List, Optional, Sequence, Tuple

from vid2blog.core.content_analyzer import key_point_in_topic
from vid2blog.core.templates import (
    DEFAULT_TEMPLATE_TYPE,
    LENGTH_PROFILES,
    PREDEFINED_TEMPLATES,
    TEMPLATE_SIGNATURES,
)
from vid2blog.core.transcript_processor import format_duration, format_timestamp
from vid2blog.core.vocabulary import tokenize
from vid2blog.models.schemas import (
    Article,
    ArticleLength,
    ArticleMetadata,
    ArticleSection,
    ArticleTemplate,
    ArticleTone,
    ContentAnalysis,
    ContentType,
    GenerationOptions,
    KeyPoint,
    Sentiment,
    TemplateSection,
    TemplateType,
    Transcript,
    VideoMetadata,
    walk_sections,
)
from vid2blog.utils.helpers import slugify, truncate_text
from vid2blog.utils.logger import logging


WORDS_PER_MINUTE = 200
SEO_TITLE_LIMIT = 60
META_DESCRIPTION_LIMIT = 160
MAX_TITLE_TOPICS = 2
MAX_INTRO_TOPICS = 3
MAX_TAG_TOPICS = 5
TEMPLATE_TAG_LIMIT = 10

CASUAL_REPLACEMENTS = (
    (r"This article", "This post"),
    (r"in conclusion", "to wrap up"),
    (r"furthermore", "also"),
    (r"moreover", "plus"),
    (r"therefore", "so"),
)

TECHNICAL_REPLACEMENTS = (
    (r"show", "demonstrate"),
    (r"talk about", "discuss"),
    (r"way", "method"),
    (r"thing", "component"),
    (r"summarizes", "demonstrates"),
    (r"provide", "deliver"),
)


def _replace_words(text: str, replacements: Sequence[Tuple[str, str]], ignore_case: bool = True) -> str:
    for source, target in replacements:
        def _swap(match, target=target):
            if match.group(0)[0].isupper():
                return target[0].upper() + target[1:]
            return target

        flags = re.IGNORECASE if ignore_case else 0
        text = re.sub(rf"\b{source}\b", _swap, text, flags=flags)
    return text


def apply_tone(text: str, tone: ArticleTone) -> str:
    """
    Apply the lexical substitutions for a tone.

    Args:
        text: Text to rewrite
        tone: Target tone; ``professional`` leaves the text unchanged

    Returns:
        Rewritten text
    """
    if tone == ArticleTone.CASUAL:
        # "This article" only matches with its capital, the connectives in any case
        text = _replace_words(text, CASUAL_REPLACEMENTS[:1], ignore_case=False)
        return _replace_words(text, CASUAL_REPLACEMENTS[1:])
    if tone == ArticleTone.TECHNICAL:
        return _replace_words(text, TECHNICAL_REPLACEMENTS)
    return text


def build_metadata(
    title: str,
    introduction: str,
    sections: List[ArticleSection],
    conclusion: str,
    video_metadata: VideoMetadata,
) -> ArticleMetadata:
    """
    Compute word count, reading time and SEO fields for an article.

    Args:
        title: Article title
        introduction: Introduction text
        sections: Section tree
        conclusion: Conclusion text
        video_metadata: Metadata of the source video

    Returns:
        ArticleMetadata
    """
    parts = [title, introduction]
    for _, section in walk_sections(sections):
        parts.extend((section.heading, section.content))
    parts.append(conclusion)

    word_count = len(" ".join(parts).split())
    return ArticleMetadata(
        word_count=word_count,
        reading_time=math.ceil(word_count / WORDS_PER_MINUTE),
        seo_title=truncate_text(title, SEO_TITLE_LIMIT),
        meta_description=truncate_text(introduction, META_DESCRIPTION_LIMIT),
        source_video=video_metadata,
    )


def build_tags(
    analysis: ContentAnalysis,
    video_metadata: VideoMetadata,
    provenance: str,
    limit: int,
) -> List[str]:
    """
    Derive article tags from topics, key-point categories and the channel.

    Args:
        analysis: Content analysis
        video_metadata: Metadata of the source video
        provenance: Tag naming the generation path, e.g. ``content-analysis``
        limit: Maximum number of tags

    Returns:
        Deduplicated tags in order of derivation
    """
    tags = [topic.name.lower() for topic in analysis.topics[:MAX_TAG_TOPICS]]
    tags.extend(kp.category.lower() for kp in analysis.key_points)

    channel_tag = slugify(video_metadata.channel_name)
    if channel_tag:
        tags.append(channel_tag)

    tags.extend(("video-summary", provenance))

    unique = list(dict.fromkeys(tag for tag in tags if tag))
    return unique[:limit]


class ArticleGenerator:
    """Class to render articles from a content analysis using fixed templates."""

    def __init__(
        self,
        templates: Sequence[ArticleTemplate] = PREDEFINED_TEMPLATES,
        signatures: Optional[Dict[TemplateType, Sequence[str]]] = None,
    ):
        """
        Initialize the generator.

        Args:
            templates: Templates to choose from
            signatures: Indicator words per template type
        """
        self.templates = tuple(templates)
        self.signatures = signatures if signatures is not None else TEMPLATE_SIGNATURES

    def get_available_templates(self) -> List[ArticleTemplate]:
        return list(self.templates)

    def get_template(self, name: str) -> Optional[ArticleTemplate]:
        """Find a template by name or type, ignoring case."""
        wanted = name.strip().lower()
        for template in self.templates:
            if template.name.lower() == wanted or template.type.value == wanted:
                return template
        return None

    def _default_template(self) -> ArticleTemplate:
        for template in self.templates:
            if template.type == DEFAULT_TEMPLATE_TYPE:
                return template
        return self.templates[0]

    def select_template(self, analysis: ContentAnalysis, options: GenerationOptions) -> ArticleTemplate:
        """
        Pick the template for an analysis.

        A known ``custom_template`` wins. Otherwise every template with a
        signature scores the number of distinct signature words found as
        whole words (or their plurals) in topic names and key points, and
        the unique highest positive score wins. Ties and no match give the
        general template.
        """
        if options.custom_template:
            template = self.get_template(options.custom_template)
            if template:
                return template
            logging.warning(f"Unknown template '{options.custom_template}', selecting automatically")

        corpus = " ".join(
            [topic.name for topic in analysis.topics] + [kp.text for kp in analysis.key_points]
        )
        tokens = set(tokenize(corpus))

        scores = []
        for template in self.templates:
            words = self.signatures.get(template.type, ())
            score = sum(
                1 for word in words
                if word in tokens or f"{word}s" in tokens or f"{word}es" in tokens
            )
            scores.append((score, template))

        best = max((score for score, _ in scores), default=0)
        winners = [template for score, template in scores if score == best]
        if best > 0 and len(winners) == 1:
            return winners[0]
        return self._default_template()

    def generate_article(
        self,
        analysis: ContentAnalysis,
        video_metadata: VideoMetadata,
        transcript: Transcript,
        options: Optional[GenerationOptions] = None,
    ) -> Article:
        """
        Render an article.

        Args:
            analysis: Content analysis of the transcript
            video_metadata: Metadata of the source video
            transcript: The analyzed transcript
            options: Generation options

        Returns:
            Article
        """
        options = options or GenerationOptions()
        template = self.select_template(analysis, options)
        tone = options.tone or template.default_tone
        length = options.length or template.estimated_length

        logging.info(f"Generating article with template '{template.name}' ({tone.value}, {length.value})")

        sections = []
        for template_section in template.structure:
            if template_section.content_type in (ContentType.INTRODUCTION, ContentType.CONCLUSION):
                continue
            sections.append(self._build_section(template_section, analysis, options, tone, length))

        title = self._generate_title(video_metadata, analysis)
        introduction = apply_tone(self._generate_introduction(video_metadata, analysis), tone)
        conclusion = apply_tone(self._generate_conclusion(analysis), tone)

        metadata = build_metadata(title, introduction, sections, conclusion, video_metadata)
        tags = build_tags(analysis, video_metadata, "content-analysis", TEMPLATE_TAG_LIMIT)

        logging.debug(
            f"Article '{title}': {len(sections)} sections, {metadata.word_count} words, "
            f"{len(transcript.segments)} source segments"
        )

        return Article(
            title=title,
            introduction=introduction,
            sections=sections,
            conclusion=conclusion,
            metadata=metadata,
            tags=tags,
        )

    # Sections

    def _build_section(
        self,
        template_section: TemplateSection,
        analysis: ContentAnalysis,
        options: GenerationOptions,
        tone: ArticleTone,
        length: ArticleLength,
    ) -> ArticleSection:
        profile = LENGTH_PROFILES[length]
        include_timestamps = (
            options.include_timestamps
            if options.include_timestamps is not None
            else template_section.include_timestamps
        )
        content_type = template_section.content_type

        if content_type == ContentType.SUMMARY:
            summary = analysis.summary.strip()
            if not summary.strip(". "):
                summary = "The video does not contain enough spoken content for a summary."
            return ArticleSection(heading=template_section.heading, content=apply_tone(summary, tone))

        if content_type == ContentType.MAIN_CONTENT:
            return self._main_content(template_section, analysis, profile, include_timestamps)

        ranked = _by_importance(analysis.key_points)

        if content_type == ContentType.KEY_POINTS:
            chosen = _fill_budget(ranked, profile["key_points"], template_section.max_length)
            if not chosen:
                content = "No key points identified from the content."
            else:
                content = "\n".join(
                    f"{index}. {_sentence(kp, include_timestamps)}"
                    for index, kp in enumerate(chosen, start=1)
                )
            return ArticleSection(heading=template_section.heading, content=content)

        # Custom sections take key points overlapping the heading or its focus keywords
        focus = set(tokenize(template_section.heading))
        focus.update(word.lower() for word in template_section.keyword_focus)
        matching = [
            kp for kp in ranked
            if kp.category.lower() in focus or focus.intersection(tokenize(kp.text))
        ]
        chosen = _fill_budget(matching, profile["key_points"], template_section.max_length)
        if chosen:
            content = " ".join(_sentence(kp, include_timestamps) for kp in chosen)
        else:
            content = f"The video touches on {template_section.heading.lower()} only briefly."
        return ArticleSection(heading=template_section.heading, content=content)

    def _main_content(
        self,
        template_section: TemplateSection,
        analysis: ContentAnalysis,
        profile: Dict[str, int],
        include_timestamps: bool,
    ) -> ArticleSection:
        topics = sorted(analysis.topics, key=lambda topic: -topic.relevance)[:profile["topics"]]
        ranked = _by_importance(analysis.key_points)

        if not topics:
            chosen = _fill_budget(ranked, profile["key_points"], template_section.max_length)
            if chosen:
                content = " ".join(_sentence(kp, include_timestamps) for kp in chosen)
            else:
                content = "The video does not break down into distinct topics."
            return ArticleSection(heading=template_section.heading, content=content)

        # Share the section's word budget between its topics
        topic_budget = None
        if template_section.max_length is not None:
            topic_budget = max(1, template_section.max_length // len(topics))

        subsections = []
        for topic in topics:
            located = [kp for kp in ranked if key_point_in_topic(kp, topic)]
            chosen = _fill_budget(located, profile["key_points"], topic_budget)
            if chosen:
                content = " ".join(_sentence(kp, include_timestamps) for kp in chosen)
            else:
                content = f"This part of the video discusses {topic.name.lower()} and related concepts."
            subsections.append(ArticleSection(heading=topic.name, content=content))

        names = ", ".join(topic.name for topic in topics)
        return ArticleSection(
            heading=template_section.heading,
            content=f"The video covers {len(topics)} main topic{'s' if len(topics) != 1 else ''}: {names}.",
            subsections=subsections,
        )

    # Prose

    @staticmethod
    def _generate_title(video_metadata: VideoMetadata, analysis: ContentAnalysis) -> str:
        title = video_metadata.title.strip()
        if 10 < len(title) < 80:
            if analysis.topics:
                main_topic = analysis.topics[0].name
                if main_topic.lower() not in title.lower():
                    return f"{title}: A Guide to {main_topic}"
            return title

        top_topics = analysis.topics[:MAX_TITLE_TOPICS]
        if top_topics:
            names = " and ".join(topic.name for topic in top_topics)
            return f"Understanding {names}: Key Insights and Analysis"

        return "Video Content Analysis and Key Insights"

    @staticmethod
    def _generate_introduction(video_metadata: VideoMetadata, analysis: ContentAnalysis) -> str:
        intro = "This article summarizes the key insights from a video"
        if video_metadata.duration > 0:
            intro += f" lasting {format_duration(video_metadata.duration)}"
        if video_metadata.channel_name:
            intro += f" by {video_metadata.channel_name}"

        topic_names = ", ".join(topic.name for topic in analysis.topics[:MAX_INTRO_TOPICS])
        if topic_names:
            intro += f" covering topics including {topic_names}"

        intro += (
            ". The content has been analyzed and structured to provide you with "
            "the most important takeaways and actionable insights."
        )
        return intro

    @staticmethod
    def _generate_conclusion(analysis: ContentAnalysis) -> str:
        topic_count = len(analysis.topics)
        key_point_count = len(analysis.key_points)

        conclusion = (
            f"In conclusion, this analysis covered {topic_count} main topic{'s' if topic_count != 1 else ''} "
            f"and identified {key_point_count} key insight{'s' if key_point_count != 1 else ''}. "
        )
        if analysis.sentiment == Sentiment.POSITIVE:
            conclusion += "The overall tone of the content was positive and informative. "
        elif analysis.sentiment == Sentiment.NEGATIVE:
            conclusion += "The content addressed some challenges and areas for improvement. "

        conclusion += (
            "These insights can serve as a valuable reference for understanding "
            "the discussed concepts and applying them in relevant contexts."
        )
        return conclusion


def _by_importance(key_points: List[KeyPoint]) -> List[KeyPoint]:
    return sorted(key_points, key=lambda kp: -kp.importance)


def _fill_budget(key_points: List[KeyPoint], limit: int, max_words: Optional[int]) -> List[KeyPoint]:
    # Take key points while under the word budget, always at least one
    chosen: List[KeyPoint] = []
    words = 0
    for kp in key_points[:limit]:
        if chosen and max_words is not None and words >= max_words:
            break
        chosen.append(kp)
        words += len(kp.text.split())
    return chosen


def _sentence(key_point: KeyPoint, include_timestamp: bool) -> str:
    text = key_point.text.rstrip(".!? ")
    if include_timestamp:
        text += f" (at {format_timestamp(key_point.timestamp)})"
    return f"{text}."


_default_generator = ArticleGenerator()


def generate_article(
    analysis: ContentAnalysis,
    video_metadata: VideoMetadata,
    transcript: Transcript,
    options: Optional[GenerationOptions] = None,
) -> Article:
    """Render an article with the predefined templates."""
    return _default_generator.generate_article(analysis, video_metadata, transcript, options)


def get_available_templates() -> List[ArticleTemplate]:
    return _default_generator.get_available_templates()


def get_template(name: str) -> Optional[ArticleTemplate]:
    return _default_generator.get_template(name)
