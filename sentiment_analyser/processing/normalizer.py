"""
Sentiment Analyser - Text Normalizer.

============================================================
RESPONSIBILITY
============================================================
Turns raw input into the token sequence and flat string that
both the word analyzer and the phrase matcher consume.

============================================================
NORMALIZATION PIPELINE (order-sensitive)
============================================================
1. Lowercase
2. Decode HTML entities, drop script/style blocks and
   [tag]...[/tag] shortcodes, strip remaining tags
3. Remove URLs (scheme:// to the end of the token run)
4. Remove control and zero-width characters
5. Commas and periods become spaces
6. Collapse whitespace, trim
7. Split on single spaces
8. Drop stopwords and @mentions

============================================================
"""

import html
import re
from typing import Iterable, List, Optional, Union

from ..lexicon import Lexicon
from ..models import NormalizedText


class TextNormalizer:
    """
    Normalizes and tokenises short texts.

    ============================================================
    USAGE
    ============================================================
    ```python
    normalizer = TextNormalizer(stopwords)

    result = normalizer.normalize("I am <b>SO</b> happy!!")
    print(result.tokens)
    print(result.flat)
    ```

    ============================================================
    """

    SCRIPT_STYLE_PATTERN = re.compile(r"<(script|style)\b.*?</\1\s*>", re.IGNORECASE | re.DOTALL)

    SHORTCODE_PATTERN = re.compile(r"\[(.+?)\](.+?\[/\1\])?", re.DOTALL)

    HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

    URL_PATTERN = re.compile(r"[a-z][a-z0-9+.\-]*://\S*", re.IGNORECASE)

    # Control characters except tab, newline and carriage return
    CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

    ZERO_WIDTH_PATTERN = re.compile(r"[\u200b-\u200f\u2060\ufeff]")

    SURROGATE_PATTERN = re.compile(r"[\ud800-\udfff]")

    WORD_BOUNDARY_PUNCTUATION = re.compile(r"[,.]")

    WHITESPACE_PATTERN = re.compile(r"\s+")

    MENTION_PATTERN = re.compile(r"(\s+|^)@\S+")

    def __init__(self, stopwords: Optional[Union[Lexicon, Iterable[str]]] = None) -> None:
        """
        Initialize the normalizer.

        Args:
            stopwords: Stopword lexicon or plain collection of words
        """
        if stopwords is None:
            self._stopwords = frozenset()
        elif isinstance(stopwords, Lexicon):
            self._stopwords = frozenset(stopwords.keys())
        else:
            self._stopwords = frozenset(stopwords)

    @property
    def stopwords(self) -> frozenset:
        return self._stopwords

    # =========================================================
    # PUBLIC API
    # =========================================================

    def normalize(self, raw: Union[str, bytes, None]) -> NormalizedText:
        """
        Normalize a single text.

        Never raises on malformed input; unrecognized bytes are dropped.
        """
        flat = self.clean(raw)
        if not flat:
            return NormalizedText()

        tokens = tuple(self.remove_stop_words(flat.split(" ")))
        return NormalizedText(tokens=tokens, flat=" ".join(tokens))

    def tokenise(self, raw: Union[str, bytes, None]) -> List[str]:
        """Cleaned tokens before stopword and mention removal."""
        flat = self.clean(raw)
        return flat.split(" ") if flat else []

    def clean(self, raw: Union[str, bytes, None]) -> str:
        """Steps 1-6 of the pipeline, returning the flat cleaned string."""
        if raw is None:
            return ""
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="ignore")
        elif not isinstance(raw, str):
            raw = str(raw)

        text = raw.lower()
        text = self._strip_markup(text)
        text = self._remove_urls(text)
        text = self._remove_control_chars(text)
        text = self.WORD_BOUNDARY_PUNCTUATION.sub(" ", text)
        return self._normalize_whitespace(text)

    def remove_stop_words(self, tokens: Iterable[str]) -> List[str]:
        """Drop stopwords and @mention tokens, keeping order."""
        return [
            token for token in tokens
            if token
            and token not in self._stopwords
            and not self.MENTION_PATTERN.match(token)
        ]

    # =========================================================
    # CLEANING OPERATIONS
    # =========================================================

    def _strip_markup(self, text: str) -> str:
        text = html.unescape(text)
        text = self.SCRIPT_STYLE_PATTERN.sub(" ", text)
        text = self.SHORTCODE_PATTERN.sub("", text)
        text = self.HTML_TAG_PATTERN.sub("", text)
        # Entities may have been double encoded
        return html.unescape(text)

    def _remove_urls(self, text: str) -> str:
        return self.URL_PATTERN.sub(" ", text)

    def _remove_control_chars(self, text: str) -> str:
        text = self.CONTROL_CHAR_PATTERN.sub("", text)
        text = self.ZERO_WIDTH_PATTERN.sub("", text)
        return self.SURROGATE_PATTERN.sub("", text)

    def _normalize_whitespace(self, text: str) -> str:
        return self.WHITESPACE_PATTERN.sub(" ", text).strip()
