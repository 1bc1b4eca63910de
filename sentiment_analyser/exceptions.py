"""
Sentiment Analyser Exceptions - Custom error hierarchy.

SentimentAnalyserError (base)
├── ConfigurationError
├── LexiconLoadError
└── PersistError

Analysis itself never raises on malformed text. Only initialization
(lexicon loading, configuration) and phrase confirmation (persistence)
surface these errors to the caller.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union


class SentimentAnalyserError(Exception):
    """Base exception for all sentiment analyser errors."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.utcnow()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(SentimentAnalyserError):
    """Invalid analyser configuration."""
    pass


class LexiconLoadError(SentimentAnalyserError):
    """A lexicon source could not be read or contains a malformed record."""

    def __init__(
        self,
        message: str,
        source: str = "",
        line_number: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.source = source
        self.line_number = line_number
        location = source
        if line_number is not None:
            location = f"{source}:{line_number}"
        super().__init__(f"{location}: {message}" if location else message, details)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({
            "source": self.source,
            "line_number": self.line_number,
        })
        return data


class PersistError(SentimentAnalyserError):
    """A confirmed phrase could not be appended to its dataset."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.path = str(path) if path is not None else None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({
            "path": self.path,
        })
        return data
