"""
Sentiment Analyser - Configuration.

============================================================
RESPONSIBILITY
============================================================
Holds every threshold used by the scoring engine so that it
can be tuned without touching the algorithm.

- Rating scale (neutral value, term clamp, neutral band)
- Phrase proximity gates (edit distance, similarity)
- Confirm gate (submit distance, minimum tokens)
- Lexicon and corpus locations

============================================================
ENVIRONMENT
============================================================
SENTIMENT_NEUTRAL_RATING            2.5
SENTIMENT_MAX_TERM                  2.5
SENTIMENT_MIN_NEUTRAL               2.3
SENTIMENT_MAX_NEUTRAL               2.7
SENTIMENT_LEVENSHTEIN_MAX_DISTANCE  15
SENTIMENT_SIMILARITY_MIN_PERCENT    65.0
SENTIMENT_MIN_SUBMIT_DISTANCE       5
SENTIMENT_MIN_CONFIRM_TOKENS        4
SENTIMENT_NGRAM_MIN                 5
SENTIMENT_NGRAM_MAX                 10
SENTIMENT_DATA_DIR                  bundled data directory
SENTIMENT_CORPUS_DIR                same as data directory
SENTIMENT_RELOAD_CORPUS_ON_CONFIRM  false
LOG_LEVEL                           per command (INFO for serve, else WARNING)

============================================================
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError


DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_value(name: str, default: str, cast):
    """Read and convert one environment variable."""
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value for {name}: {raw!r}",
            details={"variable": name, "value": raw},
        ) from e


@dataclass
class AnalyserConfig:
    """Configuration for the sentiment analyser."""

    # Rating scale
    neutral_rating: float = 2.5
    """Rating returned for text with no sentiment evidence."""

    max_term: float = 2.5
    """Upper clamp for the positive and negative proportional terms."""

    min_neutral: float = 2.3
    """Lower bound (inclusive) of the neutral confirmation band."""

    max_neutral: float = 2.7
    """Upper bound (inclusive) of the neutral confirmation band."""

    # Phrase proximity
    levenshtein_max_distance: int = 15
    """Largest edit distance a phrase match may have."""

    similarity_min_percent: float = 65.0
    """Smallest similar-text percentage a phrase match may have."""

    ngram_min: int = 5
    """Shortest candidate n-gram length."""

    ngram_max: int = 10
    """Longest candidate n-gram length."""

    # Confirm gate
    levenshtein_min_submit_distance: int = 5
    """Phrase matches further than this may still be confirmed."""

    min_confirm_tokens: int = 4
    """Normalized texts shorter than this cannot be confirmed."""

    # Locations
    data_dir: Optional[str] = None
    """Directory holding the lexicon files."""

    corpus_dir: Optional[str] = None
    """Directory holding the phrase datasets (defaults to data_dir)."""

    reload_corpus_on_confirm: bool = False
    """Re-read the phrase datasets after every confirmation."""

    # Logging
    log_level: Optional[str] = None
    """Root log level; unset lets the caller pick its own default."""

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir) if self.data_dir else DEFAULT_DATA_DIR

    @property
    def corpus_path(self) -> Path:
        return Path(self.corpus_dir) if self.corpus_dir else self.data_path

    @classmethod
    def from_env(cls) -> "AnalyserConfig":
        """Load configuration from environment variables."""
        load_dotenv()
        return cls(
            neutral_rating=_env_value("SENTIMENT_NEUTRAL_RATING", "2.5", float),
            max_term=_env_value("SENTIMENT_MAX_TERM", "2.5", float),
            min_neutral=_env_value("SENTIMENT_MIN_NEUTRAL", "2.3", float),
            max_neutral=_env_value("SENTIMENT_MAX_NEUTRAL", "2.7", float),
            levenshtein_max_distance=_env_value("SENTIMENT_LEVENSHTEIN_MAX_DISTANCE", "15", int),
            similarity_min_percent=_env_value("SENTIMENT_SIMILARITY_MIN_PERCENT", "65.0", float),
            ngram_min=_env_value("SENTIMENT_NGRAM_MIN", "5", int),
            ngram_max=_env_value("SENTIMENT_NGRAM_MAX", "10", int),
            levenshtein_min_submit_distance=_env_value("SENTIMENT_MIN_SUBMIT_DISTANCE", "5", int),
            min_confirm_tokens=_env_value("SENTIMENT_MIN_CONFIRM_TOKENS", "4", int),
            data_dir=os.getenv("SENTIMENT_DATA_DIR"),
            corpus_dir=os.getenv("SENTIMENT_CORPUS_DIR"),
            reload_corpus_on_confirm=os.getenv("SENTIMENT_RELOAD_CORPUS_ON_CONFIRM", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL"),
        )

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.max_term < 0:
            errors.append("max_term must not be negative")

        if self.min_neutral > self.max_neutral:
            errors.append("min_neutral must not exceed max_neutral")

        if not self.min_neutral <= self.neutral_rating <= self.max_neutral:
            errors.append("neutral_rating must lie inside the neutral band")

        if self.levenshtein_max_distance < 0:
            errors.append("levenshtein_max_distance must not be negative")

        if not 0.0 <= self.similarity_min_percent <= 100.0:
            errors.append("similarity_min_percent must be between 0 and 100")

        if self.ngram_min < 1:
            errors.append("ngram_min must be at least 1")

        if self.ngram_min > self.ngram_max:
            errors.append("ngram_min must not exceed ngram_max")

        if self.min_confirm_tokens < 0:
            errors.append("min_confirm_tokens must not be negative")

        if self.log_level is not None and self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}")

        return errors

    def require_valid(self) -> "AnalyserConfig":
        """Raise ConfigurationError when the configuration is invalid."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(
                "Invalid analyser configuration",
                details={"errors": errors},
            )
        return self
