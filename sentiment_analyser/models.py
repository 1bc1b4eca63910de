"""
Sentiment Analyser Models - Lexicon entries, match records and results.

All records are immutable. An AnalysisResult is built fresh by every
analyze call and owns its own tuples of matches, so nothing produced
by one call can be observed changing during another.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


WILDCARD_MARKER = "*"


class EntryKind(Enum):
    """How a lexicon entry is compared against a token."""
    EXACT = "exact"
    WILDCARD = "wildcard"


class MatchKind(Enum):
    """Why a word match contributed to the rating."""
    SINGLE_WORD = "single_word"
    ENHANCER = "enhancer"
    POLARITY_CHANGER = "polarity_changer"
    EMOTICON = "emoticon"
    IDIOM = "idiom"


class PreferredMatchType(Enum):
    """Which path produced the final rating."""
    PHRASE_PROXIMITY = "phrase_proximity"
    SENTIMENT_ANALYSIS = "sentiment_analysis"


class SentimentLabel(Enum):
    """Position of a rating on the sentiment scale."""
    LOW = "low"
    NEUTRAL = "neutral"
    HIGH = "high"


class PhraseDataset(Enum):
    """The three growable phrase datasets."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class LexiconEntry:
    """
    A single lexicon record.

    The entry kind is decided once, when the record is loaded: a pattern
    ending in ``*`` matches every token that starts with the remaining
    prefix, any other pattern matches only an identical token.
    """
    pattern: str
    rating: Optional[float] = None
    kind: EntryKind = EntryKind.EXACT
    line_number: int = 0

    @classmethod
    def parse(
        cls,
        pattern: str,
        rating: Optional[float] = None,
        line_number: int = 0,
    ) -> "LexiconEntry":
        kind = EntryKind.EXACT
        if len(pattern) > 1 and pattern.endswith(WILDCARD_MARKER):
            kind = EntryKind.WILDCARD
        return cls(pattern=pattern, rating=rating, kind=kind, line_number=line_number)

    @property
    def is_wildcard(self) -> bool:
        return self.kind == EntryKind.WILDCARD

    @property
    def literal(self) -> str:
        """Pattern with the wildcard marker removed."""
        if self.is_wildcard:
            return self.pattern.replace(WILDCARD_MARKER, "")
        return self.pattern

    @property
    def value(self) -> float:
        """Rating as a float, 0.0 for membership-only entries."""
        return self.rating if self.rating is not None else 0.0

    def matches(self, token: str) -> bool:
        if self.is_wildcard:
            return token.startswith(self.literal)
        return token == self.pattern


@dataclass(frozen=True)
class NormalizedText:
    """Token sequence and flat string produced by the normalizer."""
    tokens: tuple[str, ...] = ()
    flat: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.tokens


@dataclass(frozen=True)
class WordMatch:
    """A lexicon hit recorded during word-level analysis."""
    token: str
    matched_pattern: str
    rating: float
    kind: MatchKind
    position: int = -1

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "matched_pattern": self.matched_pattern,
            "rating": self.rating,
            "kind": self.kind.value,
            "position": self.position,
        }


@dataclass(frozen=True)
class PhraseMatch:
    """A candidate n-gram close enough to a previously confirmed phrase."""
    candidate_ngram: str
    matched_phrase: str
    rating_modifier: float
    levenshtein_distance: int
    similarity_percent: float
    dataset: PhraseDataset = PhraseDataset.NEUTRAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_ngram": self.candidate_ngram,
            "matched_phrase": self.matched_phrase,
            "rating_modifier": self.rating_modifier,
            "levenshtein_distance": self.levenshtein_distance,
            "similarity_percent": round(self.similarity_percent, 4),
            "dataset": self.dataset.value,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Output of one analyze call.

    rating: final sentiment rating (neutral 2.5 with default thresholds)
    preferred_match_type: phrase_proximity when a historical phrase
        decided the rating, sentiment_analysis when the word formula did
    """
    original_text: str
    tokens: tuple[str, ...]
    rating: float
    preferred_match_type: PreferredMatchType
    label: SentimentLabel
    word_matches: tuple[WordMatch, ...] = field(default_factory=tuple)
    phrase_matches: tuple[PhraseMatch, ...] = field(default_factory=tuple)

    # Counters
    positive_word_count: int = 0
    negative_word_count: int = 0
    sentiment_word_count: int = 0
    total_word_count: int = 0

    # Accumulators
    positive_score: float = 0.0
    negative_score: float = 0.0
    total_score: float = 0.0

    @property
    def best_phrase_match(self) -> Optional[PhraseMatch]:
        return self.phrase_matches[0] if self.phrase_matches else None

    @property
    def dataset_text(self) -> str:
        """Normalized text as it would be stored in a phrase dataset."""
        return " ".join(self.tokens)

    def summary(self) -> str:
        """Human readable breakdown of the calculation."""
        lines = [
            f"Positive: {self.positive_score}",
            f"Negative: {self.negative_score}",
            f"Total words: {self.total_word_count}",
            f"Sentiment words: {self.sentiment_word_count}",
            f"Positive words: {self.positive_word_count}",
            f"Negative words: {self.negative_word_count}",
            f"Sentiment Rating: {self.rating}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "original_text": self.original_text,
            "dataset": self.dataset_text,
            "tokens": list(self.tokens),
            "rating": self.rating,
            "preferred_match_type": self.preferred_match_type.value,
            "label": self.label.value,
            "word_matches": [m.to_dict() for m in self.word_matches],
            "phrase_matches": [m.to_dict() for m in self.phrase_matches],
            "positive_word_count": self.positive_word_count,
            "negative_word_count": self.negative_word_count,
            "sentiment_word_count": self.sentiment_word_count,
            "total_word_count": self.total_word_count,
            "positive_score": self.positive_score,
            "negative_score": self.negative_score,
            "total_score": self.total_score,
        }
