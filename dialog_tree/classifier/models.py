"""
Classifier data models.

Contains:
- Classification: three-way label of a response
- ClassificationScore: score breakdown behind a label
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Classification(str, Enum):
    """Sentiment label of a response. Values double as edge labels."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

    @property
    def sentiment(self) -> float:
        """Numeric sentiment used in learning examples."""
        return _SENTIMENT[self]


_SENTIMENT = {
    Classification.POSITIVE: 1.0,
    Classification.NEUTRAL: 0.0,
    Classification.NEGATIVE: -1.0,
}


@dataclass
class ClassificationScore:
    """Result of scoring one response."""
    label: Classification
    score: float
    word_count: int
    signals: List[str] = field(default_factory=list)   # e.g. "positive:love", "length:short"
