"""
Training hook.

The traversal engine calls the trainer after every recorded step with the
current dataset size. The bundled PlaceholderTrainer does no machine
learning: it only reports whether enough examples exist and hands back a
mock artifact. Its result never changes routing.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from dialog_tree.logger import logger
from dialog_tree.settings import settings


@dataclass
class TrainingArtifact:
    """Output of a training pass."""
    examples: int
    mock_model: bool = True
    params: Dict[str, Any] = field(default_factory=dict)


# dataset size -> artifact or None
Trainer = Callable[[int], Optional[TrainingArtifact]]


class PlaceholderTrainer:
    """Stand-in trainer gated on a minimum dataset size."""

    def __init__(self, min_examples: Optional[int] = None, sink=None):
        if min_examples is None:
            min_examples = settings.get_nested("training.min_examples", 5)
        self.min_examples = min_examples
        self._sink = sink or logger

    def __call__(self, dataset_size: int) -> Optional[TrainingArtifact]:
        if dataset_size < self.min_examples:
            self._sink.log(
                f"Insufficient data for training ({dataset_size} entries)",
                level="WARNING",
            )
            return None

        self._sink.log(f"Training model with {dataset_size} examples...", level="INFO")
        return TrainingArtifact(examples=dataset_size)
