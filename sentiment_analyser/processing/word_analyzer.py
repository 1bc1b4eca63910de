"""
Sentiment Analyser - Word-Level Analyzer.

============================================================
RESPONSIBILITY
============================================================
Scores normalized tokens against the emotion, emoticon and
idiom lexicons.

- Single words, with the preceding token checked for a
  booster (enhancer) or a negator (polarity changer)
- Emoticons, exact token match
- Idioms, checked against the whole flat string

Every recorded match is a WordMatch. A token may be counted
by more than one pass; each lexicon contributes on its own.

============================================================
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..lexicon import LexiconSet
from ..models import LexiconEntry, MatchKind, NormalizedText, WordMatch
from .resolver import SentimentAccumulator


@dataclass
class WordAnalysis:
    """Matches and running totals of one word-level analysis."""

    matches: List[WordMatch] = field(default_factory=list)
    accumulator: SentimentAccumulator = field(default_factory=SentimentAccumulator)

    def record(self, match: WordMatch) -> None:
        self.matches.append(match)
        self.accumulator.count(match)


class WordAnalyzer:
    """
    Applies the word, emoticon and idiom passes.

    ============================================================
    USAGE
    ============================================================
    ```python
    analyzer = WordAnalyzer(lexicons)

    analysis = analyzer.analyze(normalizer.normalize(text))
    for match in analysis.matches:
        print(match.kind.value, match.token, match.rating)
    ```

    ============================================================
    """

    def __init__(self, lexicons: LexiconSet) -> None:
        self._lexicons = lexicons

    # =========================================================
    # PUBLIC API
    # =========================================================

    def analyze(self, normalized: NormalizedText) -> WordAnalysis:
        """Run all three passes over one normalized text."""
        analysis = WordAnalysis()
        if normalized.is_empty:
            return analysis

        self._analyze_single_words(normalized.tokens, analysis)
        self._analyze_emoticons(normalized.tokens, analysis)
        self._analyze_idioms(normalized.flat, analysis)
        return analysis

    # =========================================================
    # PASSES
    # =========================================================

    def _analyze_single_words(self, tokens: tuple, analysis: WordAnalysis) -> None:
        for position, token in enumerate(tokens):
            for entry in self._lexicons.emotions.matching(token):
                self._score_word(tokens, position, token, entry, analysis)

    def _score_word(
        self,
        tokens: tuple,
        position: int,
        token: str,
        entry: LexiconEntry,
        analysis: WordAnalysis,
    ) -> None:
        rating = entry.value
        previous = tokens[position - 1] if position > 0 else None

        enhancer = self._find_enhancer(previous)
        enhancer_rating = enhancer.value if enhancer is not None else 0.0

        negator = self._find_negator(previous)
        if negator is not None:
            rating = -rating

        analysis.record(WordMatch(
            token=token,
            matched_pattern=entry.pattern,
            rating=rating,
            kind=MatchKind.SINGLE_WORD,
            position=position,
        ))

        if enhancer is not None:
            analysis.record(WordMatch(
                token=previous,
                matched_pattern=enhancer.pattern,
                rating=enhancer_rating,
                kind=MatchKind.ENHANCER,
                position=position - 1,
            ))

        if negator is not None:
            analysis.record(WordMatch(
                token=previous,
                matched_pattern=negator.pattern,
                rating=0.0,
                kind=MatchKind.POLARITY_CHANGER,
                position=position - 1,
            ))

        analysis.accumulator.add(rating, enhancer_rating)

    def _analyze_emoticons(self, tokens: tuple, analysis: WordAnalysis) -> None:
        emoticons = self._lexicons.emoticons
        for position, token in enumerate(tokens):
            entry = emoticons.get(token)
            if entry is None:
                continue
            analysis.record(WordMatch(
                token=token,
                matched_pattern=entry.pattern,
                rating=entry.value,
                kind=MatchKind.EMOTICON,
                position=position,
            ))
            analysis.accumulator.add(entry.value)

    def _analyze_idioms(self, flat: str, analysis: WordAnalysis) -> None:
        # The idiom must contain the whole flat string, not the reverse
        if not flat:
            return
        for entry in self._lexicons.idioms.values():
            if flat not in entry.literal:
                continue
            analysis.record(WordMatch(
                token=flat,
                matched_pattern=entry.pattern,
                rating=entry.value,
                kind=MatchKind.IDIOM,
            ))
            analysis.accumulator.add(entry.value)

    # =========================================================
    # MODIFIERS
    # =========================================================

    def _find_enhancer(self, token: Optional[str]) -> Optional[LexiconEntry]:
        if token is None:
            return None
        entry = self._lexicons.boosters.lookup(token)
        if entry is None or not entry.value:
            return None
        return entry

    def _find_negator(self, token: Optional[str]) -> Optional[LexiconEntry]:
        if token is None:
            return None
        return self._lexicons.negators.lookup(token)
