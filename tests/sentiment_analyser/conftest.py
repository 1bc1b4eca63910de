"""
Shared fixtures for the sentiment analyser tests.

Lexicons are deliberately tiny so expected ratings can be worked
out by hand.
"""

from pathlib import Path

import pytest

from sentiment_analyser.config import AnalyserConfig
from sentiment_analyser.engine import SentimentEngine
from sentiment_analyser.lexicon import LexiconSources, load_lexicon_set


STOPWORDS = ["a", "the", "is", "was", "so", "and", "for", "i", "it", "my", "to", "of"]

EMOTIONS = ["good\t3", "great\t4", "bad\t-3", "terrible\t-4", "happ*\t3", "love\t4"]

BOOSTERS = ["very\t1", "extremely\t2"]

NEGATORS = ["not", "never"]

IDIOMS = ["over the moon\t4"]

EMOTICONS = [":)\t2", ":(\t-2"]

POSITIVE_PHRASES = ["great customer service thanks help\t4.0"]

NEGATIVE_PHRASES = ["parcel never arrived courier ignored emails\t1.0"]

NEUTRAL_PHRASES = ["order number email sent yesterday afternoon\t2.5"]


LEXICON_FILES = {
    LexiconSources.STOPWORD_FILE: STOPWORDS,
    LexiconSources.EMOTION_FILE: EMOTIONS,
    LexiconSources.BOOSTER_FILE: BOOSTERS,
    LexiconSources.NEGATION_FILE: NEGATORS,
    LexiconSources.IDIOM_FILE: IDIOMS,
    LexiconSources.EMOTICON_FILE: EMOTICONS,
    LexiconSources.POSITIVE_FILE: POSITIVE_PHRASES,
    LexiconSources.NEGATIVE_FILE: NEGATIVE_PHRASES,
    LexiconSources.NEUTRAL_FILE: NEUTRAL_PHRASES,
}


def write_lexicon_dir(directory: Path) -> Path:
    """Write the test lexicons into a directory."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, lines in LEXICON_FILES.items():
        (directory / name).write_text("\n".join(lines) + "\n", encoding="utf-8")
    return directory


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def config():
    """Default thresholds."""
    return AnalyserConfig()


@pytest.fixture
def memory_sources():
    """Lexicon sources backed by in-memory lines."""
    return LexiconSources(
        emotions=EMOTIONS,
        boosters=BOOSTERS,
        negators=NEGATORS,
        idioms=IDIOMS,
        emoticons=EMOTICONS,
        stopwords=STOPWORDS,
        positive_phrases=POSITIVE_PHRASES,
        negative_phrases=NEGATIVE_PHRASES,
        neutral_phrases=NEUTRAL_PHRASES,
    )


@pytest.fixture
def lexicons(memory_sources):
    """Loaded in-memory lexicon set."""
    return load_lexicon_set(memory_sources)


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding the test lexicon files."""
    return write_lexicon_dir(tmp_path / "data")


@pytest.fixture
def engine(data_dir):
    """Engine reading and writing the temporary data directory."""
    config = AnalyserConfig(data_dir=str(data_dir))
    return SentimentEngine.initialize(config=config)
