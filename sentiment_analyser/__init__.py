"""
Sentiment Analyser - Rule-based sentiment rating for short texts.

Rates text on a 0 to 5 scale centred on 2.5 by combining:
- Emotion, booster, negator, emoticon and idiom lexicons
- Fuzzy matching against phrases a human has already confirmed

Confirmed results grow the phrase datasets, so the analyser learns
without retraining.

Usage:
    from sentiment_analyser import SentimentEngine

    engine = SentimentEngine.initialize()

    result = engine.analyze("The customer service was incredible!")
    print(f"Rating: {result.rating}")
    print(f"Decided by: {result.preferred_match_type.value}")

    if engine.can_confirm(result):
        engine.confirm_phrase(result.dataset_text, result.rating)

Output Schema:
- rating: 2.5 is neutral, higher is more positive
- preferred_match_type: phrase_proximity or sentiment_analysis
- label: low, neutral or high
"""

from .config import AnalyserConfig
from .corpus_writer import CorpusWriter
from .engine import SentimentEngine
from .exceptions import (
    ConfigurationError,
    LexiconLoadError,
    PersistError,
    SentimentAnalyserError,
)
from .lexicon import (
    Lexicon,
    LexiconSet,
    LexiconSources,
    PhraseCorpus,
    load_lexicon,
    load_lexicon_set,
    load_phrase_corpus,
)
from .models import (
    AnalysisResult,
    EntryKind,
    LexiconEntry,
    MatchKind,
    NormalizedText,
    PhraseDataset,
    PhraseMatch,
    PreferredMatchType,
    SentimentLabel,
    WordMatch,
)

__version__ = "1.0.0"

__all__ = [
    # Engine
    "SentimentEngine",
    "AnalyserConfig",
    "CorpusWriter",
    # Lexicons
    "Lexicon",
    "LexiconSet",
    "LexiconSources",
    "PhraseCorpus",
    "load_lexicon",
    "load_lexicon_set",
    "load_phrase_corpus",
    # Models
    "AnalysisResult",
    "EntryKind",
    "LexiconEntry",
    "MatchKind",
    "NormalizedText",
    "PhraseDataset",
    "PhraseMatch",
    "PreferredMatchType",
    "SentimentLabel",
    "WordMatch",
    # Exceptions
    "SentimentAnalyserError",
    "ConfigurationError",
    "LexiconLoadError",
    "PersistError",
]
