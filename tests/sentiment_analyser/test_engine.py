"""
Tests for the sentiment engine.

============================================================
TEST SCENARIOS
============================================================
1. Empty or whitespace input is neutral
2. Word formula ratings for hand-computed inputs
3. A confirmed phrase overrides the formula
4. Analysis is repeatable and never raises
5. Confirm gate and confirmation round trip through the corpus
6. Batch input is analyzed line by line

============================================================
"""

import pytest

from sentiment_analyser.config import AnalyserConfig
from sentiment_analyser.engine import SentimentEngine
from sentiment_analyser.exceptions import ConfigurationError, LexiconLoadError, PersistError
from sentiment_analyser.lexicon import LexiconSources
from sentiment_analyser.models import PreferredMatchType, SentimentLabel


# ============================================================
# TEST: INITIALIZATION
# ============================================================

class TestInitialize:
    """Tests for building an engine."""

    def test_from_config_directory(self, engine):
        assert len(engine.lexicons.emotions) == 6
        assert len(engine.corpus) == 3

    def test_from_memory_sources(self, memory_sources):
        engine = SentimentEngine.initialize(memory_sources)
        assert engine.analyze("good").rating == 5.0

    def test_bundled_data_loads(self):
        engine = SentimentEngine.initialize()

        assert len(engine.lexicons.emotions) > 0
        assert "not" not in engine.lexicons.stopwords
        assert engine.analyze("").rating == 2.5

    def test_missing_lexicon_fails(self, data_dir):
        (data_dir / LexiconSources.EMOTION_FILE).unlink()

        with pytest.raises(LexiconLoadError):
            SentimentEngine.initialize(config=AnalyserConfig(data_dir=str(data_dir)))

    def test_invalid_config_fails(self, data_dir):
        config = AnalyserConfig(data_dir=str(data_dir), min_neutral=3.0, max_neutral=2.0)

        with pytest.raises(ConfigurationError):
            SentimentEngine.initialize(config=config)


# ============================================================
# TEST: ANALYSIS
# ============================================================

class TestAnalyze:
    """Tests for single-text analysis."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None, "the a is"])
    def test_empty_is_neutral(self, engine, text):
        result = engine.analyze(text)

        assert result.rating == 2.5
        assert result.preferred_match_type == PreferredMatchType.SENTIMENT_ANALYSIS
        assert result.label == SentimentLabel.NEUTRAL
        assert result.word_matches == ()
        assert result.phrase_matches == ()
        assert result.total_word_count == 0

    def test_single_positive_word(self, engine):
        result = engine.analyze("Good!")

        # "good!" keeps its punctuation, so nothing matches
        assert result.tokens == ("good!",)
        assert result.rating == 2.5

    def test_positive_word_clamped(self, engine):
        result = engine.analyze("good")

        assert result.rating == 5.0
        assert result.label == SentimentLabel.HIGH

    def test_negation(self, engine):
        result = engine.analyze("not good")

        assert result.rating == 1.0
        assert result.label == SentimentLabel.LOW
        assert result.negative_word_count == 1
        assert result.sentiment_word_count == 1

    def test_booster_in_sentence(self, engine):
        result = engine.analyze("The food was very good today, tonight.")

        assert result.tokens == ("food", "very", "good", "today", "tonight")
        assert result.rating == pytest.approx(4.1)
        assert result.positive_score == 4.0
        assert result.positive_word_count == 2

    def test_mixed_sentiment(self, engine):
        result = engine.analyze("good food bad service")

        # p = 1/4 * 3, n = 1/4 * 3
        assert result.rating == 2.5
        assert result.positive_word_count == 1
        assert result.negative_word_count == 1

    def test_total_word_count_matches_tokens(self, engine):
        result = engine.analyze("Visit https://example.com for <b>great</b> deals @shop")

        assert result.total_word_count == len(result.tokens)
        assert result.tokens == ("visit", "great", "deals")

    def test_rating_bounds(self, engine):
        for text in ["good great love", "bad terrible not good", "happy :) :)", ":( :( bad"]:
            rating = engine.analyze(text).rating
            assert 0.0 <= rating <= 5.0

    def test_repeatable(self, engine):
        text = "not very good but great customer service thanks help"
        assert engine.analyze(text) == engine.analyze(text)

    def test_bytes_input(self, engine):
        result = engine.analyze(b"good \xff")

        assert result.tokens == ("good",)
        assert result.rating == 5.0

    def test_summary(self, engine):
        summary = engine.analyze("not good").summary()

        assert "Negative: 3.0" in summary
        assert "Total words: 2" in summary
        assert "Sentiment Rating: 1.0" in summary


# ============================================================
# TEST: PHRASE OVERRIDE
# ============================================================

class TestPhraseOverride:
    """Tests for confirmed phrases taking precedence."""

    def test_exact_phrase_overrides_formula(self, engine):
        result = engine.analyze("Great customer service, thanks for the help")

        assert result.tokens == ("great", "customer", "service", "thanks", "help")
        assert result.preferred_match_type == PreferredMatchType.PHRASE_PROXIMITY
        assert result.rating == 4.0
        assert result.best_phrase_match.levenshtein_distance == 0

    def test_negative_phrase(self, engine):
        result = engine.analyze("Parcel never arrived, courier ignored my emails")

        assert result.preferred_match_type == PreferredMatchType.PHRASE_PROXIMITY
        assert result.rating == 1.0
        assert result.label == SentimentLabel.LOW


# ============================================================
# TEST: CONFIRMATION
# ============================================================

class TestConfirm:
    """Tests for the confirm gate and persistence."""

    def test_formula_result_with_enough_tokens(self, engine):
        result = engine.analyze("food very good today tonight")
        assert engine.can_confirm(result)

    def test_too_few_tokens(self, engine):
        assert not engine.can_confirm(engine.analyze("very good"))

    def test_close_phrase_match_cannot_be_confirmed(self, engine):
        result = engine.analyze("great customer service thanks help")
        assert not engine.can_confirm(result)

    def test_distant_phrase_match_can_be_confirmed(self, engine):
        result = engine.analyze("grand customer services thanks helpers today")

        assert result.preferred_match_type == PreferredMatchType.PHRASE_PROXIMITY
        assert result.best_phrase_match.levenshtein_distance > 5
        assert engine.can_confirm(result)

    def test_confirm_writes_dataset(self, engine, data_dir):
        path = engine.confirm_phrase("food very good today tonight", 4.1)

        assert path == data_dir / "positive_data.txt"
        assert path.read_text().splitlines()[-1] == "food very good today tonight\t4.1"

    def test_confirmed_phrase_used_after_reload(self, engine):
        engine.confirm_phrase("food very good today tonight", 3.9)
        assert engine.analyze("food very good today tonight").rating == pytest.approx(4.1)

        engine.reload_corpus()
        result = engine.analyze("food very good today tonight")

        assert result.preferred_match_type == PreferredMatchType.PHRASE_PROXIMITY
        assert result.rating == 3.9

    def test_reload_on_confirm(self, data_dir):
        config = AnalyserConfig(data_dir=str(data_dir), reload_corpus_on_confirm=True)
        engine = SentimentEngine.initialize(config=config)

        engine.confirm_phrase("queue moved quickly staff lovely", 2.5)

        assert len(engine.corpus) == 4
        assert engine.analyze("queue moved quickly staff lovely").rating == 2.5

    def test_dataset_for(self, engine):
        assert engine.dataset_for(2.5).value == "neutral"
        assert engine.dataset_for(4.0).value == "positive"

    def test_persist_error_leaves_engine_usable(self, engine, data_dir):
        with pytest.raises(PersistError):
            engine.confirm_phrase("", 4.0)

        assert engine.analyze("good").rating == 5.0


# ============================================================
# TEST: BATCH
# ============================================================

class TestBatch:
    """Tests for multi-line input."""

    def test_one_result_per_line(self, engine):
        results = engine.analyze_batch("good\nnot good\n")

        assert [r.rating for r in results] == [5.0, 1.0]

    def test_iterable_input(self, engine):
        results = engine.analyze_batch(["good", "", "bad"])

        assert [r.rating for r in results] == [5.0, 2.5, 0.0]

    def test_lines_independent(self, engine):
        batch = engine.analyze_batch(["not good", "good"])
        assert batch[1] == engine.analyze("good")
