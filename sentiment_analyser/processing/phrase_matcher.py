"""
Sentiment Analyser - Phrase Proximity Matcher.

============================================================
RESPONSIBILITY
============================================================
Detects whether the input resembles a phrase that a human has
already confirmed, closely enough to prefer that judgment over
the word formula.

============================================================
MATCHING
============================================================
1. Sliding-window n-grams over the tokens, longest first
   (10 down to 5 words with default settings)
2. Each n-gram is compared with every phrase of the positive,
   negative and neutral datasets, in that order
3. A pair qualifies when its Levenshtein distance is at most
   levenshtein_max_distance AND its similar-text percentage is
   at least similarity_min_percent
4. The qualifying match with the lowest distance is moved to
   the front; the earliest recorded wins ties

Comparisons cost O(corpus size x candidate length^2). This is
the only path whose cost grows with the confirmed corpus.

============================================================
"""

import logging
from typing import Iterator, List, Optional, Sequence

from ..config import AnalyserConfig
from ..lexicon import PhraseCorpus
from ..models import NormalizedText, PhraseMatch
from .resolver import promote_best_match
from .similarity import levenshtein_distance, similarity_percent


logger = logging.getLogger(__name__)


def generate_ngrams(tokens: Sequence[str], length: int) -> List[str]:
    """Every contiguous run of `length` tokens, joined by spaces."""
    if length <= 0 or length > len(tokens):
        return []
    return [" ".join(tokens[i:i + length]) for i in range(len(tokens) - length + 1)]


class PhraseMatcher:
    """
    Fuzzy-matches n-grams of the input against the phrase corpus.

    ============================================================
    USAGE
    ============================================================
    ```python
    matcher = PhraseMatcher(corpus, AnalyserConfig())

    matches = matcher.match(normalizer.normalize(text))
    if matches:
        print(matches[0].matched_phrase, matches[0].rating_modifier)
    ```

    ============================================================
    """

    def __init__(
        self,
        corpus: PhraseCorpus,
        config: Optional[AnalyserConfig] = None,
    ) -> None:
        self._corpus = corpus
        self._config = config or AnalyserConfig()

    @property
    def corpus(self) -> PhraseCorpus:
        return self._corpus

    # =========================================================
    # PUBLIC API
    # =========================================================

    def candidates(self, tokens: Sequence[str]) -> Iterator[List[str]]:
        """N-gram lists from the longest length down."""
        for length in range(self._config.ngram_max, self._config.ngram_min - 1, -1):
            ngrams = generate_ngrams(tokens, length)
            if ngrams:
                yield ngrams

    def compare(self, candidate: str, phrase: str) -> Optional[tuple]:
        """(distance, similarity) when the pair qualifies, else None."""
        max_distance = self._config.levenshtein_max_distance
        distance = levenshtein_distance(candidate, phrase, max_distance)
        if distance > max_distance:
            return None

        similarity = similarity_percent(candidate, phrase)
        if similarity < self._config.similarity_min_percent:
            return None
        return distance, similarity

    def match(self, normalized: NormalizedText) -> List[PhraseMatch]:
        """
        All qualifying phrase matches, best first.

        An empty list means no confirmed phrase is close enough to
        override the word formula.
        """
        if normalized.is_empty or not len(self._corpus):
            return []

        matches: List[PhraseMatch] = []
        for ngrams in self.candidates(normalized.tokens):
            for dataset, phrases in self._corpus.datasets():
                for entry in phrases.values():
                    for candidate in ngrams:
                        result = self.compare(candidate, entry.pattern)
                        if result is None:
                            continue
                        distance, similarity = result
                        matches.append(PhraseMatch(
                            candidate_ngram=candidate,
                            matched_phrase=entry.pattern,
                            rating_modifier=entry.value,
                            levenshtein_distance=distance,
                            similarity_percent=similarity,
                            dataset=dataset,
                        ))

        if matches:
            logger.debug(
                f"Phrase proximity: {len(matches)} matches, "
                f"best distance {min(m.levenshtein_distance for m in matches)}"
            )
        return promote_best_match(matches)
