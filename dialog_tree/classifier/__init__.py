"""
Response classifier module.

Usage:
    from dialog_tree.classifier import ResponseClassifier, Classification

    classifier = ResponseClassifier()
    label = classifier.classify("That was an amazing day!")
    print(label)  # Classification.POSITIVE
"""

from dialog_tree.classifier.models import Classification, ClassificationScore
from dialog_tree.classifier.heuristic import (
    ResponseClassifier,
    classify_response,
    split_words,
)

__all__ = [
    "Classification",
    "ClassificationScore",
    "ResponseClassifier",
    "classify_response",
    "split_words",
]
