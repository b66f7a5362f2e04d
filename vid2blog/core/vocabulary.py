"""
Word lists used by the content analyzer, and the tokenizer they apply to.

The lists are plain read-only data. ``ContentAnalyzer`` receives them as an
``AnalysisVocabulary`` so tests and callers can substitute their own.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Tuple

_PUNCTUATION = re.compile(r"[^\w\s]")

MIN_WORD_LENGTH = 3

STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "from", "up", "about", "into", "through", "during", "before", "after",
    "above", "below", "between", "among", "over", "under", "is", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
    "my", "your", "his", "its", "our", "their", "myself", "yourself",
    "himself", "herself", "itself", "ourselves", "yourselves", "themselves",
    "what", "which", "who", "whom", "whose", "where", "when", "why", "how",
    "all", "any", "both", "each", "few", "more", "most", "other", "some", "such",
    "no", "nor", "not", "only", "own", "same", "so", "than", "too", "very",
])

POSITIVE_WORDS = frozenset([
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "awesome",
    "love", "like", "enjoy", "happy", "pleased", "satisfied", "success", "win",
    "benefit", "advantage", "improve", "better", "best", "perfect", "outstanding",
])

NEGATIVE_WORDS = frozenset([
    "bad", "terrible", "awful", "horrible", "hate", "dislike", "sad", "angry",
    "frustrated", "disappointed", "fail", "failure", "problem", "issue", "wrong",
    "difficult", "hard", "challenge", "struggle", "worst", "poor", "negative",
])

TECHNICAL_WORDS = frozenset([
    "system", "technology", "software", "code", "data", "algorithm", "implementation",
    "performance", "memory", "complexity", "structure",
])

BUSINESS_WORDS = frozenset([
    "market", "business", "strategy", "customer", "revenue", "growth", "quarterly",
    "satisfaction", "results",
])

PROCESS_WORDS = frozenset([
    "process", "method", "approach", "step", "procedure", "workflow",
])

COMPOUND_TOPICS = (
    ("machine", "learning"),
    ("artificial", "intelligence"),
    ("data", "science"),
    ("web", "development"),
    ("software", "engineering"),
    ("project", "management"),
)


@dataclass(frozen=True)
class AnalysisVocabulary:
    """Read-only word tables consulted during analysis."""
    stop_words: FrozenSet[str] = STOP_WORDS
    positive_words: FrozenSet[str] = POSITIVE_WORDS
    negative_words: FrozenSet[str] = NEGATIVE_WORDS
    technical_words: FrozenSet[str] = TECHNICAL_WORDS
    business_words: FrozenSet[str] = BUSINESS_WORDS
    process_words: FrozenSet[str] = PROCESS_WORDS
    compound_topics: Tuple[Tuple[str, str], ...] = field(default=COMPOUND_TOPICS)

    def category_lists(self) -> List[Tuple[str, FrozenSet[str]]]:
        """Category word lists in the order they are checked."""
        return [
            ("Technical", self.technical_words),
            ("Business", self.business_words),
            ("Process", self.process_words),
        ]


DEFAULT_VOCABULARY = AnalysisVocabulary()


def tokenize(text: str) -> List[str]:
    """Lowercase ``text``, turn punctuation into spaces and split on whitespace."""
    return _PUNCTUATION.sub(" ", text.lower()).split()


def content_words(tokens: List[str], vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY) -> List[str]:
    """Drop short tokens and stop words."""
    return [
        token for token in tokens
        if len(token) >= MIN_WORD_LENGTH and token not in vocabulary.stop_words
    ]
