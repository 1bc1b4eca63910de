"""
Tests for accumulation and the rating policy.

============================================================
TEST SCENARIOS
============================================================
1. Enhancers land in the bucket of the word they modify
2. Proportional terms are clamped to max_term
3. No words gives the neutral rating
4. Any phrase match overrides the formula
5. Lowest distance wins, earliest recorded on ties
6. Ratings round half away from zero

============================================================
"""

import pytest

from sentiment_analyser.config import AnalyserConfig
from sentiment_analyser.models import (
    MatchKind,
    PhraseDataset,
    PhraseMatch,
    PreferredMatchType,
    SentimentLabel,
    WordMatch,
)
from sentiment_analyser.processing import (
    RatingResolver,
    SentimentAccumulator,
    promote_best_match,
    round_rating,
    select_best_match,
)


def phrase_match(distance: int, rating: float = 4.0, phrase: str = "phrase") -> PhraseMatch:
    return PhraseMatch(
        candidate_ngram="candidate",
        matched_phrase=f"{phrase}-{distance}",
        rating_modifier=rating,
        levenshtein_distance=distance,
        similarity_percent=80.0,
        dataset=PhraseDataset.POSITIVE,
    )


@pytest.fixture
def resolver():
    return RatingResolver(AnalyserConfig())


# ============================================================
# TEST: ACCUMULATOR
# ============================================================

class TestAccumulator:
    """Tests for score and counter accumulation."""

    def test_positive_word_with_enhancer(self):
        acc = SentimentAccumulator()
        acc.add(3.0, 1.0)

        assert acc.positive_score == 4.0
        assert acc.negative_score == 0.0
        assert acc.total_score == 4.0

    def test_enhancer_follows_negative_word(self):
        acc = SentimentAccumulator()
        acc.add(-3.0, 1.0)

        assert acc.negative_score == 4.0
        assert acc.positive_score == 0.0

    def test_zero_rating_ignored(self):
        acc = SentimentAccumulator()
        acc.add(0.0, 2.0)

        assert acc.total_score == 0.0

    def test_counts(self):
        acc = SentimentAccumulator()
        acc.count(WordMatch("good", "good", 3.0, MatchKind.SINGLE_WORD))
        acc.count(WordMatch("bad", "bad", -3.0, MatchKind.SINGLE_WORD))
        acc.count(WordMatch("not", "not", 0.0, MatchKind.POLARITY_CHANGER))

        assert acc.positive_words == 1
        assert acc.negative_words == 1
        assert acc.sentiment_words == 2


# ============================================================
# TEST: FORMULA
# ============================================================

class TestFormula:
    """Tests for the word formula."""

    def test_no_words_is_neutral(self, resolver):
        assert resolver.formula_rating(SentimentAccumulator(), 0) == 2.5

    def test_no_sentiment_is_neutral(self, resolver):
        assert resolver.formula_rating(SentimentAccumulator(), 6) == 2.5

    def test_positive_term(self, resolver):
        acc = SentimentAccumulator(positive_score=4.0, total_score=4.0, positive_words=2)
        assert resolver.formula_rating(acc, 5) == pytest.approx(4.1)

    def test_negative_term(self, resolver):
        acc = SentimentAccumulator(negative_score=3.0, total_score=3.0, negative_words=1)
        assert resolver.formula_rating(acc, 2) == pytest.approx(1.0)

    def test_terms_clamped(self, resolver):
        acc = SentimentAccumulator(positive_score=12.0, total_score=12.0, positive_words=3)
        assert resolver.formula_rating(acc, 3) == 5.0

    def test_clamped_terms_cancel(self, resolver):
        acc = SentimentAccumulator(
            positive_score=10.0,
            negative_score=10.0,
            total_score=20.0,
            positive_words=2,
            negative_words=2,
        )
        assert resolver.formula_rating(acc, 4) == 2.5

    def test_rating_within_bounds(self, resolver):
        acc = SentimentAccumulator(negative_score=50.0, total_score=50.0, negative_words=9)
        assert resolver.formula_rating(acc, 9) == 0.0


# ============================================================
# TEST: RESOLUTION
# ============================================================

class TestResolve:
    """Tests for choosing between formula and phrase match."""

    def test_formula_without_phrase_matches(self, resolver):
        acc = SentimentAccumulator(positive_score=3.0, total_score=3.0, positive_words=1)
        resolution = resolver.resolve(acc, 1)

        assert resolution.preferred_match_type == PreferredMatchType.SENTIMENT_ANALYSIS
        assert resolution.rating == 5.0
        assert resolution.label == SentimentLabel.HIGH
        assert resolution.best_match is None

    def test_phrase_match_overrides_formula(self, resolver):
        acc = SentimentAccumulator(negative_score=3.0, total_score=3.0, negative_words=1)
        matches = [phrase_match(9, 1.5), phrase_match(3, 4.25), phrase_match(7, 2.0)]

        resolution = resolver.resolve(acc, 1, matches)

        assert resolution.preferred_match_type == PreferredMatchType.PHRASE_PROXIMITY
        assert resolution.rating == 4.25
        assert resolution.best_match.levenshtein_distance == 3

    def test_labels(self, resolver):
        assert resolver.label_for(1.0) == SentimentLabel.LOW
        assert resolver.label_for(2.5) == SentimentLabel.NEUTRAL
        assert resolver.label_for(2.51) == SentimentLabel.HIGH


# ============================================================
# TEST: BEST MATCH SELECTION
# ============================================================

class TestBestMatch:
    """Tests for min-selection over phrase matches."""

    def test_lowest_distance(self):
        matches = [phrase_match(9), phrase_match(3), phrase_match(7)]
        assert select_best_match(matches).levenshtein_distance == 3

    def test_tie_keeps_earliest(self):
        first = phrase_match(3, phrase="first")
        second = phrase_match(3, phrase="second")
        assert select_best_match([first, second]) is first

    def test_empty(self):
        assert select_best_match([]) is None
        assert promote_best_match([]) == []

    def test_promote_keeps_remaining_order(self):
        matches = [phrase_match(9), phrase_match(3), phrase_match(7)]
        ordered = promote_best_match(matches)

        assert [m.levenshtein_distance for m in ordered] == [3, 9, 7]


# ============================================================
# TEST: ROUNDING
# ============================================================

class TestRounding:
    """Tests for two-place rounding."""

    @pytest.mark.parametrize("value,expected", [
        (2.675, 2.68),
        (1.005, 1.01),
        (3.333333, 3.33),
        (2.5, 2.5),
        (-1.125, -1.13),
    ])
    def test_half_away_from_zero(self, value, expected):
        assert round_rating(value) == expected
