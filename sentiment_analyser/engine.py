"""
Sentiment Analyser - Engine.

============================================================
RESPONSIBILITY
============================================================
Public entry point wiring the pipeline together:

  normalize ──┬── word analyzer ─────┐
              └── phrase matcher ────┴── rating resolver

plus phrase confirmation through the corpus writer.

============================================================
DESIGN PRINCIPLES
============================================================
- analyze() is a pure function of its input and the loaded
  lexicons: no per-call state lives on the engine
- Lexicons are loaded once, completely, or not at all
- Confirmation is a side effect layered on top of analysis;
  its failure never touches computed results
- The phrase corpus is swapped as one reference on reload, so
  a running analysis keeps a consistent snapshot

============================================================
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import AnalyserConfig
from .corpus_writer import CorpusWriter
from .lexicon import (
    LexiconSet,
    LexiconSources,
    PhraseCorpus,
    load_lexicon_set,
    load_phrase_corpus,
)
from .models import AnalysisResult, PhraseDataset, PreferredMatchType
from .processing import PhraseMatcher, RatingResolver, TextNormalizer, WordAnalyzer


logger = logging.getLogger(__name__)


class SentimentEngine:
    """
    Rule-based sentiment engine with a learned phrase corpus.

    ============================================================
    USAGE
    ============================================================
    ```python
    engine = SentimentEngine.initialize()

    result = engine.analyze("The customer service was incredible!")
    print(result.rating, result.preferred_match_type.value)

    if engine.can_confirm(result):
        engine.confirm_phrase(result.dataset_text, result.rating)
    ```

    ============================================================
    """

    def __init__(
        self,
        lexicons: LexiconSet,
        config: Optional[AnalyserConfig] = None,
        sources: Optional[LexiconSources] = None,
        writer: Optional[CorpusWriter] = None,
    ) -> None:
        self._config = config or AnalyserConfig()
        self._lexicons = lexicons
        self._sources = sources
        self._normalizer = TextNormalizer(lexicons.stopwords)
        self._word_analyzer = WordAnalyzer(lexicons)
        self._resolver = RatingResolver(self._config)
        self._phrase_matcher = PhraseMatcher(lexicons.corpus, self._config)
        self._writer = writer or CorpusWriter(self._config.corpus_path, self._config)

    # =========================================================
    # INITIALIZATION
    # =========================================================

    @classmethod
    def initialize(
        cls,
        sources: Optional[LexiconSources] = None,
        config: Optional[AnalyserConfig] = None,
    ) -> "SentimentEngine":
        """
        Load every lexicon and build an engine.

        Args:
            sources: Lexicon locations (defaults to the config directories)
            config: Thresholds and locations (defaults to AnalyserConfig())

        Raises:
            ConfigurationError: invalid configuration
            LexiconLoadError: any source failed to load
        """
        config = (config or AnalyserConfig()).require_valid()
        if sources is None:
            sources = LexiconSources.from_directory(config.data_path, config.corpus_path)

        lexicons = load_lexicon_set(sources)
        writer = CorpusWriter(cls._corpus_dir_for(sources, config), config)
        return cls(lexicons, config=config, sources=sources, writer=writer)

    @staticmethod
    def _corpus_dir_for(sources: LexiconSources, config: AnalyserConfig) -> Path:
        if isinstance(sources.neutral_phrases, (str, Path)):
            return Path(sources.neutral_phrases).parent
        return config.corpus_path

    @property
    def config(self) -> AnalyserConfig:
        return self._config

    @property
    def lexicons(self) -> LexiconSet:
        return self._lexicons

    @property
    def corpus(self) -> PhraseCorpus:
        return self._phrase_matcher.corpus

    @property
    def normalizer(self) -> TextNormalizer:
        return self._normalizer

    # =========================================================
    # ANALYSIS
    # =========================================================

    def analyze(self, text: Union[str, bytes, None]) -> AnalysisResult:
        """
        Analyze one text.

        Never raises on malformed input; empty or whitespace-only text
        yields the neutral rating with no matches.
        """
        if isinstance(text, bytes):
            original = text.decode("utf-8", errors="ignore")
        else:
            original = "" if text is None else str(text)
        normalized = self._normalizer.normalize(text)
        phrase_matcher = self._phrase_matcher

        words = self._word_analyzer.analyze(normalized)
        phrase_matches = phrase_matcher.match(normalized)
        total_words = len(normalized.tokens)
        resolution = self._resolver.resolve(words.accumulator, total_words, phrase_matches)

        accumulator = words.accumulator
        logger.debug(
            f"Analyzed {total_words} tokens: rating={resolution.rating} "
            f"type={resolution.preferred_match_type.value} "
            f"word_matches={len(words.matches)} phrase_matches={len(phrase_matches)}"
        )

        return AnalysisResult(
            original_text=original,
            tokens=normalized.tokens,
            rating=resolution.rating,
            preferred_match_type=resolution.preferred_match_type,
            label=resolution.label,
            word_matches=tuple(words.matches),
            phrase_matches=tuple(phrase_matches),
            positive_word_count=accumulator.positive_words,
            negative_word_count=accumulator.negative_words,
            sentiment_word_count=accumulator.sentiment_words,
            total_word_count=total_words,
            positive_score=accumulator.positive_score,
            negative_score=accumulator.negative_score,
            total_score=accumulator.total_score,
        )

    def analyze_batch(self, texts: Union[str, Iterable[str]]) -> List[AnalysisResult]:
        """
        Analyze a batch, one result per input line.

        A single string is split on newlines.
        """
        if isinstance(texts, str):
            texts = texts.splitlines()
        return [self.analyze(text) for text in texts]

    # =========================================================
    # CONFIRMATION
    # =========================================================

    def can_confirm(self, result: AnalysisResult) -> bool:
        """
        Whether a result may be added to the phrase datasets.

        Formula results, and phrase results whose best match is not
        already very close, qualify once the normalized text has
        enough tokens.
        """
        if len(result.tokens) < self._config.min_confirm_tokens:
            return False
        if result.preferred_match_type == PreferredMatchType.SENTIMENT_ANALYSIS:
            return True
        best = result.best_phrase_match
        return best is not None and best.levenshtein_distance > self._config.levenshtein_min_submit_distance

    def dataset_for(self, rating: float) -> PhraseDataset:
        """Dataset a confirmed rating is routed to."""
        return self._writer.route(rating)

    def confirm_phrase(self, text: str, rating: Union[float, str]) -> Path:
        """
        Append a confirmed phrase/rating pair to its dataset.

        Returns:
            Path of the dataset written

        Raises:
            PersistError: the record could not be written
        """
        path = self._writer.append(text, rating)
        if self._config.reload_corpus_on_confirm:
            self.reload_corpus()
        return path

    def reload_corpus(self) -> PhraseCorpus:
        """
        Re-read the three phrase datasets.

        The new corpus replaces the old one in a single assignment.
        Raises LexiconLoadError and keeps the old corpus if loading fails.
        """
        if self._sources is None:
            logger.warning("No lexicon sources recorded, corpus reload skipped")
            return self.corpus

        corpus = load_phrase_corpus(self._sources)
        self._phrase_matcher = PhraseMatcher(corpus, self._config)
        logger.info(f"Phrase corpus reloaded: {len(corpus)} phrases")
        return corpus
