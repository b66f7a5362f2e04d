"""
Module for generating articles with a language model.

The language model path is opportunistic: any failure (no API key, timeout,
provider error, unusable response) is logged and the article is produced by
the template generator instead.
"""

import asyncio
import re
from typing import List, Optional

from langchain.chat_models import init_chat_model
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field, ValidationError

from vid2blog.config import config
from vid2blog.core.article_generator import ArticleGenerator, build_metadata, build_tags
from vid2blog.core.prompts import (
    LENGTH_INSTRUCTIONS,
    MAX_TOKENS_BY_LENGTH,
    TONE_INSTRUCTIONS,
    article_human_template,
    article_system_template,
)
from vid2blog.models.schemas import (
    Article,
    ArticleLength,
    ArticleSection,
    ArticleTone,
    ContentAnalysis,
    GenerationOptions,
    Transcript,
    VideoMetadata,
)
from vid2blog.utils.error_handling import ArticleGenerationError
from vid2blog.utils.logger import logging


AI_TAG_LIMIT = 8
MAX_PROMPT_TOPICS = 5
MAX_PROMPT_KEY_POINTS = 10

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class GeneratedSection(BaseModel):
    heading: str = Field(min_length=1)
    content: str = Field(min_length=1)


class GeneratedArticle(BaseModel):
    """Article fields the language model is asked to return."""
    title: str = Field(min_length=1)
    introduction: str = Field(min_length=1)
    sections: List[GeneratedSection] = Field(min_length=1)
    conclusion: str = Field(min_length=1)
    tags: Optional[List[str]] = None


class AIArticleGenerator:
    """Class to generate articles with a chat model, falling back to templates."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        timeout: Optional[float] = None,
        fallback: Optional[ArticleGenerator] = None,
    ):
        """
        Initialize the generator.

        Args:
            api_key: Provider API key (if None, taken from the configuration)
            model: Chat model name
            provider: langchain model provider, ``groq`` by default
            timeout: Seconds to wait for the model before falling back
            fallback: Template generator used when the model path fails
        """
        self.api_key = api_key or config.LLM_API_KEY
        self.model = model or config.DEFAULT_ARTICLE_MODEL
        self.provider = provider or config.LLM_PROVIDER
        self.timeout = timeout if timeout is not None else config.LLM_TIMEOUT_SECONDS
        self.fallback = fallback or ArticleGenerator()

        self.prompt = ChatPromptTemplate.from_messages([
            ("system", article_system_template),
            ("human", article_human_template),
        ])

    async def generate_article(
        self,
        analysis: ContentAnalysis,
        video_metadata: VideoMetadata,
        transcript: Transcript,
        options: Optional[GenerationOptions] = None,
    ) -> Article:
        """
        Generate an article with the chat model.

        Args:
            analysis: Content analysis of the transcript
            video_metadata: Metadata of the source video
            transcript: The analyzed transcript
            options: Generation options

        Returns:
            The generated article, or the template article if generation failed
        """
        options = options or GenerationOptions()

        try:
            response_text = await self._call_model(analysis, video_metadata, options)
            article = self.parse_response(response_text, analysis, video_metadata)
            logging.info(f"Generated article '{article.title}' with {self.provider}/{self.model}")
            return article
        except Exception as e:
            logging.warning(f"AI article generation failed, using template generator: {str(e)}")

        return self.fallback.generate_article(analysis, video_metadata, transcript, options)

    def build_messages(
        self,
        analysis: ContentAnalysis,
        video_metadata: VideoMetadata,
        options: GenerationOptions,
    ):
        """Fill the article prompt for an analysis."""
        length = options.length or ArticleLength.MEDIUM
        tone = options.tone or ArticleTone.PROFESSIONAL

        topics = ", ".join(topic.name for topic in analysis.topics[:MAX_PROMPT_TOPICS])
        key_points = "\n".join(
            f"- {kp.category}: {kp.text}" for kp in analysis.key_points[:MAX_PROMPT_KEY_POINTS]
        )

        return self.prompt.format_messages(
            title=video_metadata.title,
            summary=analysis.summary,
            topics=topics or "None identified",
            key_points=key_points or "- None identified",
            length_instruction=LENGTH_INSTRUCTIONS[length.value],
            tone_instruction=TONE_INSTRUCTIONS[tone.value],
        )

    async def _call_model(
        self,
        analysis: ContentAnalysis,
        video_metadata: VideoMetadata,
        options: GenerationOptions,
    ) -> str:
        if not self.api_key:
            raise ArticleGenerationError("No API key configured for AI article generation")

        length = options.length or ArticleLength.MEDIUM
        llm = init_chat_model(
            model=self.model,
            model_provider=self.provider,
            temperature=config.LLM_TEMPERATURE,
            max_tokens=MAX_TOKENS_BY_LENGTH[length.value],
            api_key=self.api_key,
        )

        messages = self.build_messages(analysis, video_metadata, options)
        try:
            response = await asyncio.wait_for(llm.ainvoke(messages), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ArticleGenerationError(f"Model did not respond within {self.timeout} seconds")

        content = response.content
        if not isinstance(content, str):
            raise ArticleGenerationError("Model returned no text content")
        return content

    @staticmethod
    def parse_response(
        response_text: str,
        analysis: ContentAnalysis,
        video_metadata: VideoMetadata,
    ) -> Article:
        """
        Turn the model's JSON answer into an article.

        Args:
            response_text: Raw model output, possibly with prose around the JSON
            analysis: Content analysis, used for tags when the model gives none
            video_metadata: Metadata of the source video

        Returns:
            Article

        Raises:
            ArticleGenerationError: If no valid article JSON can be found
        """
        match = _JSON_OBJECT.search(response_text)
        if not match:
            raise ArticleGenerationError("No JSON object found in model response")

        try:
            generated = GeneratedArticle.model_validate_json(match.group(0))
        except ValidationError as e:
            raise ArticleGenerationError(f"Model response is not a valid article: {str(e)}")

        sections = [
            ArticleSection(heading=section.heading, content=section.content)
            for section in generated.sections
        ]
        metadata = build_metadata(
            generated.title,
            generated.introduction,
            sections,
            generated.conclusion,
            video_metadata,
        )

        tags = [tag.strip().lower() for tag in generated.tags or [] if tag.strip()]
        if tags:
            tags = list(dict.fromkeys(tags))[:AI_TAG_LIMIT]
        else:
            tags = build_tags(analysis, video_metadata, "ai-generated", AI_TAG_LIMIT)

        return Article(
            title=generated.title,
            introduction=generated.introduction,
            sections=sections,
            conclusion=generated.conclusion,
            metadata=metadata,
            tags=tags,
        )
