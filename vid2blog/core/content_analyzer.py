"""
Module for analyzing transcript content.

The analysis is a chain of frequency heuristics: word frequencies feed topic
clustering and sentence scoring, sentence scores feed key points and the
extractive summary, and topics plus key points feed the suggested outline.
Every step iterates ordered containers only, so identical input always gives
an identical analysis.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vid2blog.core.vocabulary import (
    DEFAULT_VOCABULARY,
    AnalysisVocabulary,
    content_words,
    tokenize,
)
from vid2blog.models.schemas import (
    ArticleSection,
    ContentAnalysis,
    ContentAnalysisOptions,
    KeyPoint,
    Sentiment,
    TimeRange,
    Topic,
    Transcript,
    WordFrequency,
)
from vid2blog.utils.logger import logging


RELATED_WORD_WINDOW = 30.0  # seconds
MAX_TOPIC_WORDS = 5
TIME_RANGE_GAP = 60.0  # seconds
FALLBACK_TOPIC_COUNT = 3

MIN_SENTENCE_CHARS = 10
SENTENCE_LENGTH_BONUS = 0.2
KEYWORD_VARIETY_BONUS = 0.1
SUMMARY_MIN_GAP = 30.0  # seconds

POSITIVE_THRESHOLD = 0.6
NEGATIVE_THRESHOLD = 0.4


@dataclass
class Sentence:
    text: str
    timestamp: float


@dataclass
class ScoredSentence:
    text: str
    timestamp: float
    score: float
    keywords: List[str] = field(default_factory=list)


class ContentAnalyzer:
    """Class to extract topics, key points and a summary from a transcript."""

    def __init__(self, vocabulary: AnalysisVocabulary = DEFAULT_VOCABULARY):
        """
        Initialize the analyzer with its word tables.

        Args:
            vocabulary: Stop words, sentiment and category lists to analyze with
        """
        self.vocabulary = vocabulary

    def analyze(
        self,
        transcript: Transcript,
        options: Optional[ContentAnalysisOptions] = None,
    ) -> ContentAnalysis:
        """
        Analyze a transcript.

        Args:
            transcript: Transcript to analyze, ideally normalized first
            options: Analysis options

        Returns:
            ContentAnalysis with topics, key points, summary, outline and sentiment
        """
        options = options or ContentAnalysisOptions()

        word_frequencies = self.extract_word_frequencies(transcript, options)
        topics = self.identify_topics(word_frequencies, options)

        scored = self.score_sentences(self.extract_sentences(transcript), word_frequencies)
        key_points = self.extract_key_points(scored, options.max_key_points)
        summary = self.generate_summary(scored, options.summary_length)

        structure = self.suggest_structure(topics, key_points)
        sentiment = self.analyze_sentiment(transcript.full_text)

        logging.debug(
            f"Analysis found {len(word_frequencies)} keywords, {len(topics)} topics, "
            f"{len(key_points)} key points, sentiment {sentiment.value}"
        )

        return ContentAnalysis(
            topics=topics,
            key_points=key_points,
            summary=summary,
            suggested_structure=structure,
            sentiment=sentiment,
        )

    # Keywords

    def extract_word_frequencies(
        self,
        transcript: Transcript,
        options: ContentAnalysisOptions,
    ) -> List[WordFrequency]:
        """Count content words per segment, remembering each occurrence's segment start."""
        positions: Dict[str, List[float]] = {}
        for segment in transcript.segments:
            for word in content_words(tokenize(segment.text), self.vocabulary):
                positions.setdefault(word, []).append(segment.start_time)

        frequencies = [
            WordFrequency(word=word, frequency=len(times), positions=times)
            for word, times in positions.items()
            if len(times) >= options.min_keyword_frequency
        ]
        # sorted() is stable, ties keep first-occurrence order
        frequencies = sorted(frequencies, key=lambda wf: -wf.frequency)
        return frequencies[:options.max_keywords]

    def extract_keywords(self, text: str, max_keywords: int = 10, min_frequency: int = 2) -> List[Dict]:
        """
        Extract the most frequent content words from plain text.

        Args:
            text: Text to scan
            max_keywords: Maximum number of keywords to return
            min_frequency: Minimum number of occurrences

        Returns:
            List of ``{"word", "frequency"}`` dicts, most frequent first
        """
        counts: Dict[str, int] = {}
        for word in content_words(tokenize(text), self.vocabulary):
            counts[word] = counts.get(word, 0) + 1

        keywords = [
            {"word": word, "frequency": count}
            for word, count in counts.items()
            if count >= min_frequency
        ]
        keywords.sort(key=lambda kw: -kw["frequency"])
        return keywords[:max_keywords]

    # Topics

    def identify_topics(
        self,
        word_frequencies: List[WordFrequency],
        options: ContentAnalysisOptions,
    ) -> List[Topic]:
        """
        Cluster keywords that occur close together in time into topics.

        Each unused keyword, most frequent first, seeds a cluster with the
        other unused keywords spoken within ``RELATED_WORD_WINDOW`` seconds
        of it. Clusters whose share of all keyword occurrences reaches
        ``min_topic_relevance`` become topics.
        """
        if not word_frequencies:
            return []

        total_frequency = sum(wf.frequency for wf in word_frequencies)
        topics: List[Topic] = []
        used = set()

        for seed in word_frequencies:
            if len(topics) >= options.max_topics:
                break
            if seed.word in used:
                continue

            cluster = self._find_related_words(seed, word_frequencies, used)
            relevance = sum(wf.frequency for wf in cluster) / total_frequency
            if relevance < options.min_topic_relevance:
                continue

            positions = sorted(pos for wf in cluster for pos in wf.positions)
            topics.append(Topic(
                name=self._topic_name(cluster),
                relevance=relevance,
                time_ranges=self._time_ranges(positions),
            ))
            used.update(wf.word for wf in cluster)

        if not topics:
            logging.debug("No keyword clusters qualified, falling back to single-word topics")
            top_frequency = word_frequencies[0].frequency
            for wf in word_frequencies[:min(FALLBACK_TOPIC_COUNT, options.max_topics)]:
                topics.append(Topic(
                    name=wf.word.capitalize(),
                    relevance=wf.frequency / top_frequency,
                    time_ranges=self._time_ranges(sorted(wf.positions)),
                ))

        return sorted(topics, key=lambda topic: -topic.relevance)

    def _find_related_words(
        self,
        seed: WordFrequency,
        word_frequencies: List[WordFrequency],
        used: set,
    ) -> List[WordFrequency]:
        related = [seed]
        for candidate in word_frequencies:
            if len(related) >= MAX_TOPIC_WORDS:
                break
            if candidate.word == seed.word or candidate.word in used:
                continue
            close = any(
                abs(seed_pos - pos) <= RELATED_WORD_WINDOW
                for seed_pos in seed.positions
                for pos in candidate.positions
            )
            if close:
                related.append(candidate)
        return related

    def _topic_name(self, cluster: List[WordFrequency]) -> str:
        primary = cluster[0].word
        if len(cluster) > 1:
            secondary = cluster[1].word
            for first, second in self.vocabulary.compound_topics:
                if {primary, secondary} == {first, second}:
                    return f"{first.capitalize()} {second}"
        return primary.capitalize()

    @staticmethod
    def _time_ranges(positions: List[float]) -> List[TimeRange]:
        if not positions:
            return []

        ranges = []
        start = end = positions[0]
        for pos in positions[1:]:
            if pos - end <= TIME_RANGE_GAP:
                end = pos
            else:
                ranges.append(TimeRange(start=start, end=end))
                start = end = pos
        ranges.append(TimeRange(start=start, end=end))
        return ranges

    # Sentences

    @staticmethod
    def extract_sentences(transcript: Transcript) -> List[Sentence]:
        """Split every segment on ``.!?`` and keep fragments longer than 10 characters."""
        sentences = []
        for segment in transcript.segments:
            for fragment in _split_sentences(segment.text):
                if len(fragment) > MIN_SENTENCE_CHARS:
                    sentences.append(Sentence(text=fragment, timestamp=segment.start_time))
        return sentences

    def score_sentences(
        self,
        sentences: List[Sentence],
        word_frequencies: List[WordFrequency],
    ) -> List[ScoredSentence]:
        """
        Score sentences by the keywords they contain.

        A sentence earns the normalized frequency of every keyword occurrence,
        a flat bonus when it is 8 to 25 words long, and a bonus per distinct
        keyword.
        """
        frequency_of = {wf.word: wf.frequency for wf in word_frequencies}
        max_frequency = max(frequency_of.values(), default=0)

        scored = []
        for sentence in sentences:
            words = tokenize(sentence.text)
            score = 0.0
            keywords: List[str] = []

            for word in words:
                if word in frequency_of:
                    score += frequency_of[word] / max_frequency
                    if word not in keywords:
                        keywords.append(word)

            if 8 <= len(words) <= 25:
                score += SENTENCE_LENGTH_BONUS
            score += KEYWORD_VARIETY_BONUS * len(keywords)

            scored.append(ScoredSentence(
                text=sentence.text,
                timestamp=sentence.timestamp,
                score=score,
                keywords=keywords,
            ))
        return scored

    def extract_key_points(self, scored: List[ScoredSentence], max_key_points: int) -> List[KeyPoint]:
        """Take the highest scoring sentences as key points."""
        ranked = sorted(scored, key=lambda s: -s.score)[:max_key_points]
        return [
            KeyPoint(
                text=sentence.text,
                importance=sentence.score,
                timestamp=sentence.timestamp,
                category=self.categorize(sentence.keywords),
            )
            for sentence in ranked
        ]

    def categorize(self, keywords: List[str]) -> str:
        """Categorize a key point by the first category list its keywords hit."""
        for category, words in self.vocabulary.category_lists():
            if any(keyword in words for keyword in keywords):
                return category
        return "General"

    # Summary

    def generate_summary(self, scored: List[ScoredSentence], summary_length: int) -> str:
        """
        Build an extractive summary from the best sentences spread over the video.

        Sentences are taken by descending score while keeping at least
        ``SUMMARY_MIN_GAP`` seconds between them; if that leaves the summary
        short, the best remaining sentences fill it regardless of proximity.
        The selection is then put back in spoken order.
        """
        selected = self._select_diverse(scored, summary_length)
        selected = sorted(selected, key=lambda s: s.timestamp)
        return ". ".join(s.text for s in selected) + "."

    @staticmethod
    def _select_diverse(scored: List[ScoredSentence], count: int) -> List[ScoredSentence]:
        if len(scored) <= count:
            return list(scored)

        ranked = sorted(scored, key=lambda s: -s.score)
        selected: List[ScoredSentence] = []

        for sentence in ranked:
            if len(selected) >= count:
                break
            if all(abs(s.timestamp - sentence.timestamp) >= SUMMARY_MIN_GAP for s in selected):
                selected.append(sentence)

        for sentence in ranked:
            if len(selected) >= count:
                break
            if not any(s is sentence for s in selected):
                selected.append(sentence)

        return selected

    # Outline

    @staticmethod
    def suggest_structure(topics: List[Topic], key_points: List[KeyPoint]) -> List[ArticleSection]:
        """Outline an article: introduction, one section per topic, conclusion."""
        sections = [ArticleSection(
            heading="Introduction",
            content="Overview of the main topics and key insights from the video content.",
        )]

        for topic in topics:
            related = [kp for kp in key_points if key_point_in_topic(kp, topic)]
            if related:
                content = " ".join(kp.text for kp in related)
            else:
                content = f"Discussion of {topic.name.lower()} and related concepts."
            sections.append(ArticleSection(heading=topic.name, content=content))

        sections.append(ArticleSection(
            heading="Conclusion",
            content="Summary of key takeaways and final thoughts.",
        ))
        return sections

    # Sentiment

    def analyze_sentiment(self, text: str) -> Sentiment:
        """Classify text by its share of positive versus negative words."""
        positive = negative = 0
        for word in tokenize(text):
            if word in self.vocabulary.positive_words:
                positive += 1
            if word in self.vocabulary.negative_words:
                negative += 1

        total = positive + negative
        if total == 0:
            return Sentiment.NEUTRAL

        ratio = positive / total
        if ratio > POSITIVE_THRESHOLD:
            return Sentiment.POSITIVE
        if ratio < NEGATIVE_THRESHOLD:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL


def _split_sentences(text: str) -> List[str]:
    fragments = []
    current = []
    for char in text:
        if char in ".!?":
            fragments.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fragments.append("".join(current).strip())
    return [fragment for fragment in fragments if fragment]


def key_point_in_topic(key_point: KeyPoint, topic: Topic) -> bool:
    """A key point belongs to a topic if it names the topic or falls inside one of its time ranges."""
    if topic.name.lower() in key_point.text.lower():
        return True
    return any(r.start <= key_point.timestamp <= r.end for r in topic.time_ranges)


_default_analyzer = ContentAnalyzer()


def analyze_content(
    transcript: Transcript,
    options: Optional[ContentAnalysisOptions] = None,
    vocabulary: Optional[AnalysisVocabulary] = None,
) -> ContentAnalysis:
    """
    Analyze a transcript with the default or a substitute vocabulary.

    Args:
        transcript: Transcript to analyze
        options: Analysis options
        vocabulary: Substitute word tables

    Returns:
        ContentAnalysis
    """
    analyzer = ContentAnalyzer(vocabulary) if vocabulary is not None else _default_analyzer
    return analyzer.analyze(transcript, options)


def extract_keywords(text: str, max_keywords: int = 10, min_frequency: int = 2) -> List[Dict]:
    """Extract the most frequent content words from plain text."""
    return _default_analyzer.extract_keywords(text, max_keywords, min_frequency)
