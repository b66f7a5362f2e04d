"""
Prompt templates for language model article generation.
"""

from vid2blog.core.templates import LENGTH_PROFILES

article_system_template = """
    You are an experienced blog writer who turns YouTube video content into
    well-structured articles. You only use the information you are given
    about the video and never invent facts, quotes or numbers.
    """

# Literal braces in the response contract are doubled for ChatPromptTemplate
article_human_template = """Create a blog article about: {title}

Video Summary: {summary}

Main Topics: {topics}

Key Points:
{key_points}

Instructions: {length_instruction}. {tone_instruction}.

Please respond with ONLY a JSON object in this exact format:
{{
  "title": "Your article title here",
  "introduction": "Introduction paragraph",
  "sections": [
    {{"heading": "Section 1", "content": "Content for section 1"}},
    {{"heading": "Section 2", "content": "Content for section 2"}}
  ],
  "conclusion": "Conclusion paragraph",
  "tags": ["tag1", "tag2", "tag3"]
}}"""

LENGTH_STYLES = {
    "short": "a concise",
    "medium": "a comprehensive",
    "long": "a detailed, in-depth",
}

LENGTH_INSTRUCTIONS = {
    length.value: (
        f"Write {LENGTH_STYLES[length.value]} article "
        f"({profile['min_words']}-{profile['max_words']} words)"
    )
    for length, profile in LENGTH_PROFILES.items()
}

TONE_INSTRUCTIONS = {
    "professional": "Use a professional, informative tone suitable for business or educational content",
    "casual": "Use a conversational, friendly tone that feels approachable and easy to read",
    "technical": "Use precise, technical language appropriate for expert audiences",
}

MAX_TOKENS_BY_LENGTH = {
    "short": 800,
    "medium": 1000,
    "long": 1500,
}
