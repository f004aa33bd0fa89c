"""
dialog_tree: decision-graph conversation engine.

Walks a tree-shaped conversation graph, classifies free-text responses with
a heuristic scorer and records every step as a learning example.

Usage:
    from dialog_tree import load_graph, TraversalEngine, FixtureResponseProvider

    graph = load_graph("decision_tree.json")
    result = TraversalEngine().run(graph, FixtureResponseProvider({...}))
    print(len(result.dataset), result.outcome)
"""

from dialog_tree.graph import (
    GraphSourceError,
    GraphLoadError,
    GraphFormatError,
    NodeType,
    DecisionNode,
    DecisionGraph,
    GraphValidator,
    load_graph,
    validate_graph,
)
from dialog_tree.classifier import Classification, ResponseClassifier, classify_response
from dialog_tree.extraction import AttributeExtractor, ResponseAttributes
from dialog_tree.dataset import LearningDataset, LearningExample, Outcome
from dialog_tree.training import PlaceholderTrainer, TrainingArtifact
from dialog_tree.providers import FixtureResponseProvider, TerminalResponseProvider
from dialog_tree.traversal import ExitReason, TraversalEngine, TraversalResult, traverse

__all__ = [
    # Graph
    "GraphSourceError",
    "GraphLoadError",
    "GraphFormatError",
    "NodeType",
    "DecisionNode",
    "DecisionGraph",
    "GraphValidator",
    "load_graph",
    "validate_graph",
    # Classification
    "Classification",
    "ResponseClassifier",
    "classify_response",
    "AttributeExtractor",
    "ResponseAttributes",
    # Learning data
    "LearningDataset",
    "LearningExample",
    "Outcome",
    "PlaceholderTrainer",
    "TrainingArtifact",
    # Traversal
    "FixtureResponseProvider",
    "TerminalResponseProvider",
    "ExitReason",
    "TraversalEngine",
    "TraversalResult",
    "traverse",
]

__version__ = "1.0.0"
