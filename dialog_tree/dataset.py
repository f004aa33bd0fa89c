"""
Learning dataset.

LearningDataset collects one LearningExample per classified traversal step.
It is owned by the caller, handed to TraversalEngine.run() and returned in
the TraversalResult, so several runs can accumulate into one dataset or each
run can start from a fresh one.

The dataset is append-only. The single in-place change is the outcome of
the last example, set once when the terminal confirmation arrives.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from dialog_tree.extraction import ResponseAttributes


class Outcome(str, Enum):
    """Post-hoc label of a run."""
    PENDING = ""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class LearningExample:
    """
    One recorded traversal step.

    Attributes:
        response_text: Raw text supplied at the step
        attributes: Features derived from the text
        action: Node id chosen as the next step
        outcome: "" until the run is confirmed, then "success" / "failure"
    """
    response_text: str
    attributes: ResponseAttributes
    action: str
    outcome: str = Outcome.PENDING.value

    def to_dict(self) -> Dict[str, Any]:
        """Serialization to a dict."""
        return {
            "responseText": self.response_text,
            "attributes": self.attributes.to_dict(),
            "action": self.action,
            "outcome": self.outcome,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LearningExample":
        """Deserialization from a dict."""
        return cls(
            response_text=data["responseText"],
            attributes=ResponseAttributes.from_dict(data["attributes"]),
            action=data["action"],
            outcome=data.get("outcome", Outcome.PENDING.value),
        )


class LearningDataset:
    """Ordered collection of learning examples."""

    def __init__(self, examples: Optional[List[LearningExample]] = None):
        self._examples: List[LearningExample] = list(examples or [])

    def append(self, example: LearningExample) -> None:
        self._examples.append(example)

    @property
    def last(self) -> Optional[LearningExample]:
        """Most recent example, None for an empty dataset."""
        return self._examples[-1] if self._examples else None

    @property
    def examples(self) -> List[LearningExample]:
        """Copy of the examples in insertion order."""
        return list(self._examples)

    def record_outcome(self, success: bool) -> Optional[LearningExample]:
        """
        Label the last example with the outcome of the run.

        Args:
            success: Result of the terminal confirmation

        Returns:
            The labeled example, None when the dataset is empty
        """
        example = self.last
        if example is None:
            return None
        example.outcome = (Outcome.SUCCESS if success else Outcome.FAILURE).value
        return example

    def reset(self) -> None:
        """Drop all examples."""
        self._examples.clear()

    def to_dict(self) -> List[Dict[str, Any]]:
        return [example.to_dict() for example in self._examples]

    @classmethod
    def from_dict(cls, data: List[Dict[str, Any]]) -> "LearningDataset":
        return cls([LearningExample.from_dict(item) for item in data])

    def __len__(self) -> int:
        return len(self._examples)

    def __iter__(self) -> Iterator[LearningExample]:
        return iter(self._examples)

    def __getitem__(self, index: int) -> LearningExample:
        return self._examples[index]
