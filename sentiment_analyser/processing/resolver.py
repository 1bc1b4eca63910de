"""
Sentiment Analyser - Rating Resolver.

============================================================
RESPONSIBILITY
============================================================
Combines word-level accumulators and phrase proximity
matches into one rating and label.

============================================================
RATING POLICY
============================================================
1. Any phrase match: the best match's rating modifier wins,
   the formula is not evaluated (phrase_proximity)
2. No words: neutral rating (sentiment_analysis)
3. Otherwise (sentiment_analysis):
     p = min(positive_words / words * positive_score, max_term)
     n = min(negative_words / words * negative_score, max_term)
     rating = round(neutral + p - n, 2)

============================================================
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..config import AnalyserConfig
from ..models import (
    MatchKind,
    PhraseMatch,
    PreferredMatchType,
    SentimentLabel,
    WordMatch,
)


# ============================================================
# ACCUMULATION
# ============================================================


@dataclass
class SentimentAccumulator:
    """
    Per-call running totals.

    Enhancer ratings always land in the bucket of the word they
    modify: boosters scale magnitude, they never change polarity.
    """

    positive_score: float = 0.0
    negative_score: float = 0.0
    total_score: float = 0.0
    positive_words: int = 0
    negative_words: int = 0
    sentiment_words: int = 0

    def add(self, rating: float, enhancer_rating: float = 0.0) -> None:
        """Add a word rating and its paired enhancer rating."""
        if rating == 0:
            return
        contribution = abs(rating) + enhancer_rating
        self.total_score += contribution
        if rating < 0:
            self.negative_score += contribution
        else:
            self.positive_score += contribution

    def count(self, match: WordMatch) -> None:
        """Update the word counters for a recorded match."""
        if match.kind != MatchKind.POLARITY_CHANGER:
            self.sentiment_words += 1
        if match.rating > 0:
            self.positive_words += 1
        elif match.rating < 0:
            self.negative_words += 1


@dataclass(frozen=True)
class Resolution:
    """Final rating decision."""
    rating: float
    preferred_match_type: PreferredMatchType
    label: SentimentLabel
    best_match: Optional[PhraseMatch] = None


# ============================================================
# PHRASE MATCH SELECTION
# ============================================================


def select_best_match(matches: Sequence[PhraseMatch]) -> Optional[PhraseMatch]:
    """Lowest edit distance wins; the earliest recorded wins ties."""
    best = None
    for match in matches:
        if best is None or match.levenshtein_distance < best.levenshtein_distance:
            best = match
    return best


def promote_best_match(matches: Sequence[PhraseMatch]) -> list:
    """Move the best match to the front, keeping the others in order."""
    best = select_best_match(matches)
    if best is None:
        return []
    ordered = list(matches)
    ordered.remove(best)
    return [best] + ordered


def round_rating(value: float, places: int = 2) -> float:
    """Round half away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


# ============================================================
# RESOLVER
# ============================================================


class RatingResolver:
    """Applies the rating policy to one analysis."""

    def __init__(self, config: Optional[AnalyserConfig] = None) -> None:
        self._config = config or AnalyserConfig()

    def proportional_term(self, words: int, total_words: int, score: float) -> float:
        """Share of sentiment words times accumulated score, clamped."""
        if total_words <= 0:
            return 0.0
        return min((words / total_words) * score, self._config.max_term)

    def formula_rating(self, accumulator: SentimentAccumulator, total_words: int) -> float:
        if total_words <= 0:
            return self._config.neutral_rating

        positive_term = self.proportional_term(
            accumulator.positive_words, total_words, accumulator.positive_score
        )
        negative_term = self.proportional_term(
            accumulator.negative_words, total_words, accumulator.negative_score
        )
        return round_rating(self._config.neutral_rating + positive_term - negative_term)

    def label_for(self, rating: float) -> SentimentLabel:
        if rating < self._config.neutral_rating:
            return SentimentLabel.LOW
        if rating > self._config.neutral_rating:
            return SentimentLabel.HIGH
        return SentimentLabel.NEUTRAL

    def resolve(
        self,
        accumulator: SentimentAccumulator,
        total_words: int,
        phrase_matches: Sequence[PhraseMatch] = (),
    ) -> Resolution:
        best = select_best_match(phrase_matches)
        if best is not None:
            return Resolution(
                rating=best.rating_modifier,
                preferred_match_type=PreferredMatchType.PHRASE_PROXIMITY,
                label=self.label_for(best.rating_modifier),
                best_match=best,
            )

        rating = self.formula_rating(accumulator, total_words)
        return Resolution(
            rating=rating,
            preferred_match_type=PreferredMatchType.SENTIMENT_ANALYSIS,
            label=self.label_for(rating),
        )
