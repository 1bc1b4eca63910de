"""
Sentiment Analyser - Processing Package.

Modules:
- normalizer: Text normalization and tokenisation
- word_analyzer: Emotion, emoticon and idiom scoring
- phrase_matcher: N-gram proximity against confirmed phrases
- similarity: Edit distance and similar-text percentage
- resolver: Accumulation and final rating policy
"""

from .normalizer import TextNormalizer
from .phrase_matcher import PhraseMatcher, generate_ngrams
from .resolver import (
    RatingResolver,
    Resolution,
    SentimentAccumulator,
    promote_best_match,
    round_rating,
    select_best_match,
)
from .similarity import levenshtein_distance, similar_text, similarity_percent
from .word_analyzer import WordAnalysis, WordAnalyzer

__all__ = [
    "TextNormalizer",
    "WordAnalyzer",
    "WordAnalysis",
    "PhraseMatcher",
    "generate_ngrams",
    "RatingResolver",
    "Resolution",
    "SentimentAccumulator",
    "select_best_match",
    "promote_best_match",
    "round_rating",
    "levenshtein_distance",
    "similar_text",
    "similarity_percent",
]
