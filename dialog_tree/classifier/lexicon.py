"""
Lexicons and weights of the heuristic response classifier.

Every keyword is matched as a lowercase substring of the response and
counts at most once. Weights and thresholds are fixed: changing them
changes the labels recorded in the learning dataset.
"""

from typing import Dict, List


POSITIVE_WORDS: List[str] = [
    "great", "love", "awesome", "fun", "amazing",
    "happy", "excited", "cool", "fantastic",
]

NEGATIVE_WORDS: List[str] = [
    "no", "nah", "boring", "whatever", "not really",
    "bad", "sorry", "hate",
]

EMOTIONAL_WORDS: List[str] = [
    "heart", "feel", "memory", "special", "deep", "personal",
]

# "?" counts as engagement as well
ENGAGEMENT_WORDS: List[str] = [
    "you", "we", "us", "?", "tell", "share",
]

# category -> (keywords, weight per matched keyword)
LEXICON_WEIGHTS: Dict[str, tuple] = {
    "positive": (POSITIVE_WORDS, 1.0),
    "negative": (NEGATIVE_WORDS, -1.0),
    "emotional": (EMOTIONAL_WORDS, 0.5),
    "engagement": (ENGAGEMENT_WORDS, 0.3),
}

# Length adjustment
LONG_RESPONSE_WORDS = 20      # word_count > 20
LONG_RESPONSE_BONUS = 0.5
SHORT_RESPONSE_WORDS = 5      # word_count < 5
SHORT_RESPONSE_PENALTY = -0.5

# Punctuation and tone
EXCLAMATION_MARK = "!"
EXCLAMATION_BONUS = 0.2
DOWNBEAT_MARKERS: List[str] = ["...", ":("]
DOWNBEAT_PENALTY = -0.2

# Label boundaries
POSITIVE_THRESHOLD = 0.8      # score > 0.8
NEGATIVE_THRESHOLD = -0.5     # score < -0.5
