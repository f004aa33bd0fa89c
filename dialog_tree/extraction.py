"""
Attribute extraction for learning examples.

Turns a response into a fixed-shape feature record. Sentiment comes from the
response classifier; pass the classification the caller already computed to
avoid scoring the same text twice.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from dialog_tree.classifier import Classification, ResponseClassifier, split_words


@dataclass(frozen=True)
class ResponseAttributes:
    """Features of one response."""
    sentiment: float        # 1.0 positive, 0.0 neutral, -1.0 negative
    length: int             # character count of the raw text
    has_question: bool      # "?" present
    word_count: int         # space-separated segments

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentiment": self.sentiment,
            "length": self.length,
            "hasQuestion": self.has_question,
            "wordCount": self.word_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponseAttributes":
        return cls(
            sentiment=float(data["sentiment"]),
            length=int(data["length"]),
            has_question=bool(data["hasQuestion"]),
            word_count=int(data["wordCount"]),
        )


class AttributeExtractor:
    """Derives ResponseAttributes from response text."""

    def __init__(self, classifier: Optional[ResponseClassifier] = None):
        self._classifier = classifier or ResponseClassifier()

    def extract(
        self,
        text: str,
        classification: Optional[Classification] = None,
    ) -> ResponseAttributes:
        """
        Extract features of a response.

        Args:
            text: Raw response text
            classification: Label already computed for this text; the
                            classifier runs only when it is None

        Returns:
            ResponseAttributes
        """
        if classification is None:
            classification = self._classifier.classify(text)

        return ResponseAttributes(
            sentiment=classification.sentiment,
            length=len(text),
            has_question="?" in text,
            word_count=len(split_words(text)),
        )
