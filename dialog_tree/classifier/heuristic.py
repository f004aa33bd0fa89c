"""
Heuristic response classifier.

Scores a free-text response with keyword lexicons, a length adjustment and
punctuation cues, then maps the score to positive / neutral / negative.
Deterministic and free of state: the same text always gets the same label.
"""

from typing import List

from dialog_tree.logger import logger

from .lexicon import (
    LEXICON_WEIGHTS,
    LONG_RESPONSE_WORDS,
    LONG_RESPONSE_BONUS,
    SHORT_RESPONSE_WORDS,
    SHORT_RESPONSE_PENALTY,
    EXCLAMATION_MARK,
    EXCLAMATION_BONUS,
    DOWNBEAT_MARKERS,
    DOWNBEAT_PENALTY,
    POSITIVE_THRESHOLD,
    NEGATIVE_THRESHOLD,
)
from .models import Classification, ClassificationScore


def split_words(text: str) -> List[str]:
    """Split on single spaces, dropping empty segments."""
    return [word for word in text.split(" ") if word]


class ResponseClassifier:
    """
    Keyword and punctuation based sentiment scorer.

    Scoring, applied in this order:
    1. Lexicons: +1.0 positive, -1.0 negative, +0.5 emotional, +0.3
       engagement, once per matching keyword (substring, case-insensitive)
    2. Length: > 20 words +0.5, < 5 words -0.5
    3. "!" +0.2; "..." -0.2; ":(" -0.2

    Labels: score > 0.8 positive, score < -0.5 negative, otherwise neutral.
    """

    def __init__(self, sink=None):
        """
        Args:
            sink: Diagnostic sink with log(message, level); defaults to the
                  package logger
        """
        self._sink = sink or logger

    def score(self, text: str) -> ClassificationScore:
        """
        Score a response without logging.

        Args:
            text: Raw response text

        Returns:
            ClassificationScore with label, score and matched signals
        """
        lowered = text.lower()
        signals: List[str] = []
        score = 0.0

        for category, (keywords, weight) in LEXICON_WEIGHTS.items():
            for keyword in keywords:
                if keyword in lowered:
                    score += weight
                    signals.append(f"{category}:{keyword}")

        word_count = len(split_words(text))
        if word_count > LONG_RESPONSE_WORDS:
            score += LONG_RESPONSE_BONUS
            signals.append("length:long")
        elif word_count < SHORT_RESPONSE_WORDS:
            score += SHORT_RESPONSE_PENALTY
            signals.append("length:short")

        if EXCLAMATION_MARK in text:
            score += EXCLAMATION_BONUS
            signals.append(f"punctuation:{EXCLAMATION_MARK}")
        for marker in DOWNBEAT_MARKERS:
            if marker in text:
                score += DOWNBEAT_PENALTY
                signals.append(f"punctuation:{marker}")

        return ClassificationScore(
            label=self._label_for(score),
            score=score,
            word_count=word_count,
            signals=signals,
        )

    def classify(self, text: str) -> Classification:
        """
        Classify a response.

        Args:
            text: Raw response text

        Returns:
            Classification label
        """
        result = self.score(text)
        self._sink.log(
            f"Response: '{text}' -> Score: {result.score:.2f}, "
            f"Classified as: {result.label.value}",
            level="INFO",
        )
        return result.label

    @staticmethod
    def _label_for(score: float) -> Classification:
        if score > POSITIVE_THRESHOLD:
            return Classification.POSITIVE
        if score < NEGATIVE_THRESHOLD:
            return Classification.NEGATIVE
        return Classification.NEUTRAL


def classify_response(text: str, sink=None) -> Classification:
    """Shortcut for ResponseClassifier(sink).classify(text)."""
    return ResponseClassifier(sink=sink).classify(text)
