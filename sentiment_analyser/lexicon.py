"""
Sentiment Analyser - Lexicon Store.

============================================================
RESPONSIBILITY
============================================================
Loads word and phrase rating tables into read-only lookups.

- One record per line: pattern<TAB>rating
- Membership-only sources (negators, stopwords) may omit the rating
- Wildcard entries (trailing ``*``) are resolved at load time

============================================================
DESIGN PRINCIPLES
============================================================
- All-or-nothing: a source either loads completely or raises
  LexiconLoadError naming the source and line
- Storage agnostic: a source is a path or any iterable of lines
- Loaded lexicons are never mutated

============================================================
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .exceptions import LexiconLoadError
from .models import LexiconEntry, PhraseDataset


logger = logging.getLogger(__name__)


LexiconSource = Union[str, Path, Iterable[str]]


# ============================================================
# LEXICON
# ============================================================


class Lexicon(Mapping):
    """
    Ordered, read-only mapping of pattern -> LexiconEntry.

    ============================================================
    USAGE
    ============================================================
    ```python
    emotions = load_lexicon("data/EmotionLookupTable.txt")

    entry = emotions.lookup("happy")
    hits = emotions.matching("happiness")
    ```

    ============================================================
    """

    def __init__(self, name: str, entries: Iterable[LexiconEntry] = ()) -> None:
        self.name = name
        self._entries: Dict[str, LexiconEntry] = {}
        for entry in entries:
            self._entries[entry.pattern] = entry
        self._wildcards = tuple(e for e in self._entries.values() if e.is_wildcard)

    def __getitem__(self, pattern: str) -> LexiconEntry:
        return self._entries[pattern]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Lexicon(name={self.name!r}, entries={len(self)})"

    def entries(self) -> List[LexiconEntry]:
        """Entries in load order."""
        return list(self._entries.values())

    def matching(self, token: str) -> List[LexiconEntry]:
        """All entries matching the token, in load order."""
        if not self._wildcards:
            entry = self._entries.get(token)
            return [entry] if entry is not None and entry.matches(token) else []
        return [entry for entry in self._entries.values() if entry.matches(token)]

    def lookup(self, token: str) -> Optional[LexiconEntry]:
        """First entry matching the token, or None."""
        entry = self._entries.get(token)
        if entry is not None and entry.matches(token):
            return entry
        for wildcard in self._wildcards:
            if wildcard.matches(token):
                return wildcard
        return None

    def has_match(self, token: str) -> bool:
        return self.lookup(token) is not None


# ============================================================
# LOADING
# ============================================================


def _source_name(source: LexiconSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "<lines>")


def _read_lines(source: LexiconSource, name: str) -> List[str]:
    if isinstance(source, (str, Path)):
        try:
            with open(source, "r", encoding="utf-8") as handle:
                return handle.read().splitlines()
        except UnicodeDecodeError as e:
            raise LexiconLoadError(
                f"Lexicon source is not valid UTF-8: {e.reason} at byte {e.start}",
                source=name,
                details={"byte_offset": e.start},
            ) from e
        except OSError as e:
            raise LexiconLoadError(
                f"Unable to read lexicon source: {e}",
                source=name,
                details={"errno": e.errno},
            ) from e
    try:
        return [str(line) for line in source]
    except (OSError, TypeError) as e:
        raise LexiconLoadError(f"Unable to read lexicon source: {e}", source=name) from e


def parse_record(
    line: str,
    line_number: int,
    source: str,
    requires_rating: bool = True,
) -> Optional[LexiconEntry]:
    """
    Parse a single tab-delimited record.

    Returns None for blank lines.
    """
    record = line.strip()
    if not record:
        return None

    fields = [f.strip() for f in record.split("\t")]
    pattern = fields[0]
    if not pattern:
        raise LexiconLoadError("Record has an empty pattern", source=source, line_number=line_number)

    raw_rating = fields[1] if len(fields) > 1 and fields[1] else None
    if raw_rating is None:
        if requires_rating:
            raise LexiconLoadError(
                f"Record '{pattern}' is missing its rating",
                source=source,
                line_number=line_number,
            )
        return LexiconEntry.parse(pattern, None, line_number)

    try:
        rating = float(raw_rating)
    except ValueError:
        if requires_rating:
            raise LexiconLoadError(
                f"Record '{pattern}' has a non-numeric rating '{raw_rating}'",
                source=source,
                line_number=line_number,
            )
        rating = None

    return LexiconEntry.parse(pattern, rating, line_number)


def load_lexicon(
    source: LexiconSource,
    name: Optional[str] = None,
    requires_rating: bool = True,
) -> Lexicon:
    """
    Load one lexicon source.

    Args:
        source: Path to a tab-delimited file, or an iterable of lines
        name: Lexicon name (defaults to the source name)
        requires_rating: Reject records without a rating

    Returns:
        Lexicon with every record of the source

    Raises:
        LexiconLoadError: if the source is unreadable or malformed
    """
    source_name = _source_name(source)
    lines = _read_lines(source, source_name)

    entries = []
    for line_number, line in enumerate(lines, 1):
        entry = parse_record(line, line_number, source_name, requires_rating)
        if entry is not None:
            entries.append(entry)

    lexicon = Lexicon(name or source_name, entries)
    logger.debug(f"Loaded lexicon {lexicon.name}: {len(lexicon)} entries from {source_name}")
    return lexicon


# ============================================================
# LEXICON SETS
# ============================================================


@dataclass(frozen=True)
class LexiconSources:
    """Locations of the nine sources the engine needs."""

    emotions: LexiconSource
    boosters: LexiconSource
    negators: LexiconSource
    idioms: LexiconSource
    emoticons: LexiconSource
    stopwords: LexiconSource
    positive_phrases: LexiconSource
    negative_phrases: LexiconSource
    neutral_phrases: LexiconSource

    EMOTION_FILE = "EmotionLookupTable.txt"
    BOOSTER_FILE = "BoosterWordList.txt"
    NEGATION_FILE = "NegatingWordList.txt"
    IDIOM_FILE = "IdiomLookupTable.txt"
    EMOTICON_FILE = "EmoticonLookupTable.txt"
    STOPWORD_FILE = "StopWordList.txt"
    POSITIVE_FILE = "positive_data.txt"
    NEGATIVE_FILE = "negative_data.txt"
    NEUTRAL_FILE = "neutral_data.txt"

    @classmethod
    def from_directory(
        cls,
        data_dir: Union[str, Path],
        corpus_dir: Optional[Union[str, Path]] = None,
    ) -> "LexiconSources":
        """Use the conventional file names inside data_dir and corpus_dir."""
        data = Path(data_dir)
        corpus = Path(corpus_dir) if corpus_dir is not None else data
        return cls(
            emotions=data / cls.EMOTION_FILE,
            boosters=data / cls.BOOSTER_FILE,
            negators=data / cls.NEGATION_FILE,
            idioms=data / cls.IDIOM_FILE,
            emoticons=data / cls.EMOTICON_FILE,
            stopwords=data / cls.STOPWORD_FILE,
            positive_phrases=corpus / cls.POSITIVE_FILE,
            negative_phrases=corpus / cls.NEGATIVE_FILE,
            neutral_phrases=corpus / cls.NEUTRAL_FILE,
        )

    def phrase_source(self, dataset: PhraseDataset) -> LexiconSource:
        return {
            PhraseDataset.POSITIVE: self.positive_phrases,
            PhraseDataset.NEGATIVE: self.negative_phrases,
            PhraseDataset.NEUTRAL: self.neutral_phrases,
        }[dataset]


@dataclass(frozen=True)
class PhraseCorpus:
    """Previously confirmed phrases, one lexicon per dataset."""

    positive: Lexicon
    negative: Lexicon
    neutral: Lexicon

    def datasets(self) -> List[tuple]:
        """(dataset, lexicon) pairs in matching order."""
        return [
            (PhraseDataset.POSITIVE, self.positive),
            (PhraseDataset.NEGATIVE, self.negative),
            (PhraseDataset.NEUTRAL, self.neutral),
        ]

    def __len__(self) -> int:
        return len(self.positive) + len(self.negative) + len(self.neutral)


@dataclass(frozen=True)
class LexiconSet:
    """Every lexicon the engine reads during analysis."""

    emotions: Lexicon
    boosters: Lexicon
    negators: Lexicon
    idioms: Lexicon
    emoticons: Lexicon
    stopwords: Lexicon
    corpus: PhraseCorpus


def load_phrase_corpus(sources: LexiconSources) -> PhraseCorpus:
    """Load the positive, negative and neutral phrase datasets."""
    return PhraseCorpus(
        positive=load_lexicon(sources.positive_phrases, name="positive_phrases"),
        negative=load_lexicon(sources.negative_phrases, name="negative_phrases"),
        neutral=load_lexicon(sources.neutral_phrases, name="neutral_phrases"),
    )


def load_lexicon_set(sources: LexiconSources) -> LexiconSet:
    """
    Load every source or fail.

    Raises:
        LexiconLoadError: for the first source that cannot be loaded
    """
    lexicons = LexiconSet(
        emotions=load_lexicon(sources.emotions, name="emotions"),
        boosters=load_lexicon(sources.boosters, name="boosters"),
        negators=load_lexicon(sources.negators, name="negators", requires_rating=False),
        idioms=load_lexicon(sources.idioms, name="idioms"),
        emoticons=load_lexicon(sources.emoticons, name="emoticons"),
        stopwords=load_lexicon(sources.stopwords, name="stopwords", requires_rating=False),
        corpus=load_phrase_corpus(sources),
    )
    logger.info(
        f"Lexicons loaded: emotions={len(lexicons.emotions)} "
        f"boosters={len(lexicons.boosters)} negators={len(lexicons.negators)} "
        f"idioms={len(lexicons.idioms)} emoticons={len(lexicons.emoticons)} "
        f"stopwords={len(lexicons.stopwords)} phrases={len(lexicons.corpus)}"
    )
    return lexicons
