from constants.text_patterns import (
    COMPILED_FLAGGED_PRIORITY_PATTERNS,
    COMPOUND_PHRASE_BOOSTS,
    FALLBACK_CONFIDENCE,
    FLAGGED_PRIORITY_PATTERNS,
    MAX_DOMINANT_CATEGORIES,
    MIN_FALLBACK_WORD_LENGTH,
    START_OF_TEXT_BOOST,
    WORD_PATTERN,
)

__all__ = [
    "COMPILED_FLAGGED_PRIORITY_PATTERNS",
    "COMPOUND_PHRASE_BOOSTS",
    "FALLBACK_CONFIDENCE",
    "FLAGGED_PRIORITY_PATTERNS",
    "MAX_DOMINANT_CATEGORIES",
    "MIN_FALLBACK_WORD_LENGTH",
    "START_OF_TEXT_BOOST",
    "WORD_PATTERN",
]
