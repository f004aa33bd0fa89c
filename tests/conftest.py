"""
Shared pytest fixtures for dialog_tree tests.

Provides fixtures for:
- A recording diagnostic sink
- The bundled sample graph
- Building graphs from plain dicts and writing them to disk
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from dialog_tree.graph import DEFAULT_GRAPH_FILE, graph_from_dict, load_graph
from graph_helpers import RecordingSink


# =============================================================================
# Sink Fixtures
# =============================================================================

@pytest.fixture
def sink():
    """Fresh recording sink."""
    return RecordingSink()


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def sample_graph():
    """Bundled ten-node sample graph."""
    return load_graph(DEFAULT_GRAPH_FILE)


@pytest.fixture
def sample_graph_data():
    """Bundled sample graph as a plain dict (safe to mutate)."""
    with open(DEFAULT_GRAPH_FILE, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def make_graph():
    """Build a DecisionGraph from a plain dict."""
    def _make(data: Dict[str, Any]):
        return graph_from_dict(data)
    return _make


@pytest.fixture
def write_graph(tmp_path: Path):
    """Write a graph document to tmp_path and return its path."""
    def _write(data: Any, name: str = "tree.json") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
