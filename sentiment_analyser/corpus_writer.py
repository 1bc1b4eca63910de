"""
Sentiment Analyser - Corpus Writer.

============================================================
RESPONSIBILITY
============================================================
Appends a human-confirmed phrase/rating pair to the dataset
that the phrase matcher reads on its next load.

============================================================
ROUTING (inclusive neutral band)
============================================================
min_neutral <= rating <= max_neutral   -> neutral_data.txt
rating > max_neutral                   -> positive_data.txt
otherwise                              -> negative_data.txt

============================================================
"""

import logging
import math
import re
import threading
from pathlib import Path
from typing import Optional, Union

from .config import AnalyserConfig
from .exceptions import PersistError
from .lexicon import LexiconSources
from .models import PhraseDataset

try:
    import fcntl
    HAVE_FCNTL = True
except ImportError:  # Windows
    HAVE_FCNTL = False


logger = logging.getLogger(__name__)


class CorpusWriter:
    """
    Append-only writer for the phrase datasets.

    One record per confirmation, ``text<TAB>rating`` followed by a
    newline. Appends are serialised by a lock shared by every writer
    in the process, plus an exclusive file lock where the platform
    has one, so racing confirmations from the CLI and the server
    never interleave.
    """

    _write_lock = threading.Lock()

    RECORD_BREAK_PATTERN = re.compile(r"[\t\r\n]+")

    def __init__(
        self,
        corpus_dir: Union[str, Path],
        config: Optional[AnalyserConfig] = None,
    ) -> None:
        self._corpus_dir = Path(corpus_dir)
        self._config = config or AnalyserConfig()

    @property
    def corpus_dir(self) -> Path:
        return self._corpus_dir

    def route(self, rating: float) -> PhraseDataset:
        """Pick the dataset for a rating."""
        if self._config.min_neutral <= rating <= self._config.max_neutral:
            return PhraseDataset.NEUTRAL
        if rating > self._config.max_neutral:
            return PhraseDataset.POSITIVE
        return PhraseDataset.NEGATIVE

    def path_for(self, dataset: PhraseDataset) -> Path:
        names = {
            PhraseDataset.POSITIVE: LexiconSources.POSITIVE_FILE,
            PhraseDataset.NEGATIVE: LexiconSources.NEGATIVE_FILE,
            PhraseDataset.NEUTRAL: LexiconSources.NEUTRAL_FILE,
        }
        return self._corpus_dir / names[dataset]

    def format_record(self, text: str, rating: float) -> str:
        phrase = self.RECORD_BREAK_PATTERN.sub(" ", text).strip()
        return f"{phrase}\t{rating}\n"

    def append(self, text: str, rating: Union[float, str]) -> Path:
        """
        Append one confirmed phrase.

        Returns:
            Path of the dataset that received the record

        Raises:
            PersistError: invalid phrase/rating or failed write
        """
        try:
            value = float(rating)
        except (TypeError, ValueError) as e:
            raise PersistError(f"Invalid rating: {rating!r}", details={"rating": str(rating)}) from e
        if not math.isfinite(value):
            raise PersistError(f"Invalid rating: {rating!r}", details={"rating": str(rating)})

        record = self.format_record(text or "", value)
        if record.startswith("\t"):
            raise PersistError("Cannot confirm an empty phrase")

        dataset = self.route(value)
        path = self.path_for(dataset)

        with self._write_lock:
            try:
                with open(path, "ab+") as handle:
                    self._lock_file(handle)
                    try:
                        # Keep the previous record terminated
                        handle.seek(0, 2)
                        if handle.tell() > 0:
                            handle.seek(-1, 2)
                            if handle.read(1) != b"\n":
                                handle.write(b"\n")
                        handle.write(record.encode("utf-8"))
                        handle.flush()
                    finally:
                        self._unlock_file(handle)
            except OSError as e:
                logger.error(f"Failed to append phrase to {path}: {e}")
                raise PersistError(
                    f"Unable to write phrase dataset: {e}",
                    path=path,
                    details={"dataset": dataset.value},
                ) from e

        logger.info(f"Confirmed phrase appended to {dataset.value} dataset ({path.name}) rating={value:g}")
        return path

    @staticmethod
    def _lock_file(handle) -> None:
        if HAVE_FCNTL:
            fcntl.flock(handle, fcntl.LOCK_EX)

    @staticmethod
    def _unlock_file(handle) -> None:
        if HAVE_FCNTL:
            fcntl.flock(handle, fcntl.LOCK_UN)
