"""
Decision graph module.

Models, loading and structural validation of the conversation graph.

Usage:
    from dialog_tree.graph import load_graph, GraphValidator

    graph = load_graph("decision_tree.json")
    if not GraphValidator().validate(graph):
        ...
"""

from dialog_tree.graph.errors import GraphSourceError, GraphLoadError, GraphFormatError
from dialog_tree.graph.models import (
    NodeType,
    DecisionNode,
    DecisionGraph,
    graph_from_dict,
    graph_to_dict,
)
from dialog_tree.graph.loader import load_graph, DEFAULT_GRAPH_FILE
from dialog_tree.graph.validator import GraphValidator, validate_graph, ROOT_NODE

__all__ = [
    # Errors
    "GraphSourceError",
    "GraphLoadError",
    "GraphFormatError",
    # Models
    "NodeType",
    "DecisionNode",
    "DecisionGraph",
    "graph_from_dict",
    "graph_to_dict",
    # Loader
    "load_graph",
    "DEFAULT_GRAPH_FILE",
    # Validator
    "GraphValidator",
    "validate_graph",
    "ROOT_NODE",
]
