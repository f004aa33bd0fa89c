"""
Traversal engine.

Drives one walk through a decision graph:

    validate -> [present node -> ask -> classify -> extract -> route
                 -> record example -> train] * -> confirm outcome

The graph is validated once before the first step; an invalid graph ends
the run with no steps taken. Missing responses and routing gaps never raise:
they send the walk to the exit node, and a node id that is not in the graph
(usually the exit node itself) simply ends the walk.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from dialog_tree.classifier import ResponseClassifier
from dialog_tree.dataset import LearningDataset, LearningExample
from dialog_tree.extraction import AttributeExtractor
from dialog_tree.graph.models import DecisionGraph, DecisionNode
from dialog_tree.graph.validator import GraphValidator
from dialog_tree.logger import StructuredLogger, logger
from dialog_tree.providers import ResponseProvider
from dialog_tree.settings import settings
from dialog_tree.training import Trainer


class ExitReason(Enum):
    """Why a traversal stopped."""
    NOT_STARTED = "not_started"       # Run has not finished yet
    INVALID_GRAPH = "invalid_graph"   # Validation failed, no steps taken
    TERMINUS = "terminus"             # Reached a terminus node
    UNKNOWN_NODE = "unknown_node"     # Current node id is not in the graph


@dataclass
class TraversalResult:
    """
    Result of one traversal.

    Attributes:
        run_id: Identifier attached to the run's log lines
        dataset: Dataset the run appended to
        valid: Whether the graph passed validation
        exit_reason: Why the walk stopped
        path: Visited node ids in order
        steps: Learning examples recorded by this run
        terminal_node: Terminus reached, None otherwise
        outcome: Outcome written to the last example, "" if none
    """
    run_id: str
    dataset: LearningDataset
    valid: bool = True
    exit_reason: ExitReason = ExitReason.NOT_STARTED
    path: List[str] = field(default_factory=list)
    steps: int = 0
    terminal_node: Optional[str] = None
    outcome: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialization to a dict."""
        return {
            "run_id": self.run_id,
            "valid": self.valid,
            "exit_reason": self.exit_reason.value,
            "path": self.path,
            "steps": self.steps,
            "terminal_node": self.terminal_node,
            "outcome": self.outcome,
            "dataset": self.dataset.to_dict(),
        }


class TraversalEngine:
    """
    State machine walking a decision graph.

    Usage:
        engine = TraversalEngine(trainer=PlaceholderTrainer())
        result = engine.run(graph, FixtureResponseProvider(responses))

        for example in result.dataset:
            print(example.action, example.outcome)
    """

    def __init__(
        self,
        classifier: Optional[ResponseClassifier] = None,
        extractor: Optional[AttributeExtractor] = None,
        validator: Optional[GraphValidator] = None,
        trainer: Optional[Trainer] = None,
        sink=None,
        display: Optional[Callable[[str], None]] = None,
        start_node: Optional[str] = None,
        exit_node: Optional[str] = None,
        outcome_prompt: Optional[str] = None,
        fallback_action: Optional[str] = None,
    ):
        """
        Args:
            classifier: Response classifier (default: heuristic classifier)
            extractor: Attribute extractor sharing the classifier
            validator: Graph validator run before every traversal
            trainer: Optional training hook called with the dataset size
            sink: Diagnostic sink with log(message, level); defaults to the
                  package logger
            display: Callback showing node content and hints to the user
            start_node: First node id (default traversal.start_node)
            exit_node: Sentinel node id (default traversal.exit_node)
            outcome_prompt: Prompt id of the final confirmation
            fallback_action: Action recorded when routing finds no edge
        """
        self._sink = sink or logger
        self._classifier = classifier or ResponseClassifier(sink=self._sink)
        self._extractor = extractor or AttributeExtractor(self._classifier)
        self._validator = validator or GraphValidator(sink=self._sink)
        self._trainer = trainer
        self._display = display

        self.start_node = start_node or settings.traversal.start_node
        self.exit_node = exit_node or settings.traversal.exit_node
        self.outcome_prompt = outcome_prompt or settings.traversal.outcome_prompt
        self.fallback_action = fallback_action or settings.traversal.fallback_action

    def run(
        self,
        graph: DecisionGraph,
        response_provider: ResponseProvider,
        dataset: Optional[LearningDataset] = None,
    ) -> TraversalResult:
        """
        Walk the graph from the start node until a terminus or a dead end.

        Args:
            graph: Mapping node id -> DecisionNode
            response_provider: Callable prompt id -> response text or None
            dataset: Dataset to append to (a new one when None)

        Returns:
            TraversalResult holding the dataset
        """
        if dataset is None:
            dataset = LearningDataset()

        result = TraversalResult(run_id=f"run_{uuid.uuid4().hex[:8]}", dataset=dataset)
        if isinstance(self._sink, StructuredLogger):
            self._sink.set_run(result.run_id)

        try:
            if not self._validator.validate(graph):
                self._sink.log("Cannot traverse invalid tree", level="ERROR")
                result.valid = False
                result.exit_reason = ExitReason.INVALID_GRAPH
                return result

            current_id = self.start_node
            while True:
                node = graph.get(current_id)
                if node is None:
                    self._log_dead_end(current_id)
                    result.exit_reason = ExitReason.UNKNOWN_NODE
                    break

                result.path.append(current_id)
                self._present(node)

                if node.is_terminus:
                    self._confirm_outcome(response_provider, result)
                    result.terminal_node = current_id
                    result.exit_reason = ExitReason.TERMINUS
                    break

                current_id = self._step(current_id, node, response_provider, result)

            self._sink.log(
                f"Collected learning data: {len(dataset)} examples",
                level="INFO",
                steps=result.steps,
                exit_reason=result.exit_reason.value,
            )
            return result
        finally:
            if isinstance(self._sink, StructuredLogger):
                self._sink.clear_run()

    def _step(
        self,
        node_id: str,
        node: DecisionNode,
        response_provider: ResponseProvider,
        result: TraversalResult,
    ) -> str:
        """Handle one non-terminus node and return the next node id."""
        response_text = response_provider(node_id)
        if not response_text:
            self._sink.log(
                f"No response received, moving to {self.exit_node}",
                level="INFO",
                node=node_id,
            )
            return self.exit_node

        classification = self._classifier.classify(response_text)
        attributes = self._extractor.extract(response_text, classification)

        target = self._route(node_id, node, classification.value)
        action = target if target is not None else self.fallback_action

        result.dataset.append(LearningExample(
            response_text=response_text,
            attributes=attributes,
            action=action,
        ))
        result.steps += 1

        self._train(len(result.dataset))

        next_id = target if target is not None else self.exit_node
        self._sink.log(
            "Transition",
            level="INFO",
            from_node=node_id,
            to_node=next_id,
            classification=classification.value,
        )
        return next_id

    def _route(self, node_id: str, node: DecisionNode, label: str) -> Optional[str]:
        """
        Pick the child for a classification label.

        Returns:
            children[label], else children[default], else None
        """
        children = node.children or {}
        if label in children:
            return children[label]

        if node.default is not None and node.default in children:
            self._sink.log(
                f"No edge for '{label}' at node '{node_id}', using default '{node.default}'",
                level="INFO",
            )
            return children[node.default]

        self._sink.log(
            f"No edge for '{label}' and no usable default at node '{node_id}'",
            level="WARNING",
        )
        return None

    def _train(self, dataset_size: int) -> None:
        if self._trainer is None:
            return
        artifact = self._trainer(dataset_size)
        if artifact is not None:
            self._sink.log("Learned suggestion: Using default action for now.", level="INFO")

    def _present(self, node: DecisionNode) -> None:
        """Emit node content and the evaluation hint."""
        if node.content:
            self._sink.log(f"Send/Say: {node.content}", level="INFO")
            if self._display is not None:
                self._display(node.content)
        if node.test:
            self._sink.log(f"Evaluation Guide: {node.test}", level="INFO")
            if self._display is not None:
                self._display(f"(hint) {node.test}")

    def _confirm_outcome(
        self,
        response_provider: ResponseProvider,
        result: TraversalResult,
    ) -> None:
        """Ask for the final yes/no and label the last example of this run."""
        self._sink.log("End of questionnaire.", level="INFO")
        answer = response_provider(self.outcome_prompt)

        if answer is None:
            self._sink.log("No outcome confirmation received", level="WARNING")
            return

        if result.steps == 0:
            self._sink.log("No learning examples recorded in this run, outcome not stored", level="INFO")
            return

        example = result.dataset.record_outcome(answer.strip().lower() == "yes")
        result.outcome = example.outcome
        self._sink.log(f"Outcome recorded: {example.outcome}", level="INFO")

    def _log_dead_end(self, node_id: str) -> None:
        if node_id == self.exit_node:
            self._sink.log(f"Reached '{node_id}', traversal stopped", level="INFO")
        else:
            self._sink.log(f"Node '{node_id}' not found, traversal stopped", level="WARNING")


def traverse(
    graph: DecisionGraph,
    response_provider: ResponseProvider,
    dataset: Optional[LearningDataset] = None,
    **engine_kwargs: Any,
) -> TraversalResult:
    """Shortcut for TraversalEngine(**engine_kwargs).run(...)."""
    return TraversalEngine(**engine_kwargs).run(graph, response_provider, dataset)
