"""
Decision graph loader.

Reads a graph document from disk and decodes it into DecisionNode objects.
JSON is the primary format; .yaml / .yml files with the same shape are
accepted too.

Usage:
    from dialog_tree.graph import load_graph

    graph = load_graph("resources/decision_tree.json")
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml

from dialog_tree.graph.errors import GraphFormatError, GraphLoadError
from dialog_tree.graph.models import DecisionGraph, graph_from_dict


YAML_SUFFIXES = (".yaml", ".yml")

# Sample graph shipped with the package
DEFAULT_GRAPH_FILE = Path(__file__).parent.parent / "resources" / "decision_tree.json"


def _parse(text: str, file_path: Path) -> Any:
    """Parse document text according to the file suffix."""
    if file_path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise GraphFormatError(f"YAML parse error: {e}", file_path=str(file_path))
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"JSON parse error: {e}", file_path=str(file_path))


def load_graph(file_path: Union[str, Path]) -> DecisionGraph:
    """
    Load a decision graph from a JSON or YAML file.

    Args:
        file_path: Path to the graph document

    Returns:
        Mapping node id -> DecisionNode (not validated)

    Raises:
        GraphLoadError: If the file is missing or unreadable
        GraphFormatError: If the document is malformed
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise GraphLoadError(str(file_path), "File not found")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise GraphLoadError(str(file_path), str(e))

    data = _parse(text, file_path)

    try:
        return graph_from_dict(data)
    except GraphFormatError as e:
        raise GraphFormatError(e.reason, file_path=str(file_path)) from e
