import re

from models.domain import FlagType, PoliticalCategory

# Checked in order; the first matching pattern decides the flag.
FLAGGED_PRIORITY_PATTERNS = [
    (r"imprison\s+(judges|officials)", FlagType.EXTREME, "Advocates for potentially extra-judicial actions."),
    (r"trade\s+war", FlagType.EXTREME, "Suggests a drastic and potentially harmful economic policy."),
    (r"gold\s+standard", FlagType.OUT_OF_SCOPE, "Represents a niche economic theory not typically covered."),
    (r"abolish\s+(taxes|government)", FlagType.EXTREME, "Suggests a fundamental dismantling of core government functions."),
]

COMPILED_FLAGGED_PRIORITY_PATTERNS = [
    (re.compile(pattern, re.IGNORECASE), flag_type, reason)
    for pattern, flag_type, reason in FLAGGED_PRIORITY_PATTERNS
]

# Every keyword of a phrase must appear in the priority for its boosts to apply.
COMPOUND_PHRASE_BOOSTS = [
    (("economic", "justice"), (PoliticalCategory.SOCIAL_SERVICES, PoliticalCategory.ECONOMY)),
    (
        ("environmental", "health"),
        (PoliticalCategory.SOCIAL_SERVICES, PoliticalCategory.ENVIRONMENT, PoliticalCategory.HEALTHCARE),
    ),
]

START_OF_TEXT_BOOST = 1.2
FALLBACK_CONFIDENCE = 0.5
MIN_FALLBACK_WORD_LENGTH = 4
MAX_DOMINANT_CATEGORIES = 3

WORD_PATTERN = re.compile(r"[a-z0-9']+")
