"""
Structural validation of decision graphs.

GraphValidator walks the graph depth-first from every node id and reports
every problem it finds in one pass:

- no "root" node
- circular reference (back-edge to a node on the current path)
- reference to a node id that does not exist
- node type outside question / response / terminus
- non-terminus node without children
- non-terminus node whose default is missing or not a key of children

The walk keeps an explicit stack of frames instead of recursing, so graph
depth is not bounded by the interpreter recursion limit. Cycle detection
tracks only the nodes on the current path, so two siblings routing to the
same downstream node (diamond reuse) are accepted.

Failures are reported through the diagnostic sink and the boolean result,
never raised. The caller decides whether to abort.
"""

from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set

from dialog_tree.graph.models import DecisionGraph
from dialog_tree.logger import logger
from dialog_tree.settings import settings


ROOT_NODE = "root"


@dataclass
class _Frame:
    """A non-terminus node whose children are being walked."""
    node_id: str
    children: Iterator[str]
    ok: bool = True


class GraphValidator:
    """
    Depth-first structural checker.

    Attributes:
        errors: Distinct error diagnostics of the last validate() call
        warnings: Warning diagnostics of the last validate() call
    """

    def __init__(self, sink=None, warn_unreachable: Optional[bool] = None):
        """
        Args:
            sink: Diagnostic sink with log(message, level); defaults to the
                  package logger
            warn_unreachable: Report nodes unreachable from root as warnings.
                              Defaults to validation.warn_unreachable setting.
        """
        self._sink = sink or logger
        if warn_unreachable is None:
            warn_unreachable = settings.get_nested("validation.warn_unreachable", True)
        self.warn_unreachable = warn_unreachable
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self._graph: DecisionGraph = {}
        self._on_stack: Set[str] = set()
        self._checked: Dict[str, bool] = {}

    def validate(self, graph: DecisionGraph) -> bool:
        """
        Validate the whole graph.

        Args:
            graph: Mapping node id -> DecisionNode

        Returns:
            True when no structural violation was found
        """
        self.errors = []
        self.warnings = []
        self._graph = graph
        self._on_stack = set()
        self._checked = {}

        is_valid = True

        if ROOT_NODE not in graph:
            self._error("No root node defined")
            is_valid = False

        for node_id in graph:
            if not self._check_node(node_id):
                is_valid = False

        if self.warn_unreachable and ROOT_NODE in graph:
            for node_id in self.unreachable_nodes(graph):
                self._warning(f"Node '{node_id}' is unreachable from '{ROOT_NODE}'")

        self._sink.log(
            f"Decision tree validation: {'Passed' if is_valid else 'Failed'}",
            level="INFO" if is_valid else "ERROR",
        )
        return is_valid

    def _check_node(self, start_id: str) -> bool:
        """Check one node and, for non-terminus nodes, its whole subtree."""
        result = self._visit(start_id, [])
        if result is not None:
            return result

        frames = [self._push(start_id)]
        while frames:
            frame = frames[-1]
            child_id = next(frame.children, None)

            if child_id is None:
                frames.pop()
                self._on_stack.discard(frame.node_id)
                self._checked[frame.node_id] = frame.ok
                if frames and not frame.ok:
                    frames[-1].ok = False
                continue

            result = self._visit(child_id, frames)
            if result is None:
                frames.append(self._push(child_id))
            elif not result:
                frame.ok = False

        return self._checked[start_id]

    def _push(self, node_id: str) -> _Frame:
        self._on_stack.add(node_id)
        return _Frame(node_id, iter(self._graph[node_id].children.values()))

    def _visit(self, node_id: str, frames: List[_Frame]) -> Optional[bool]:
        """
        Run the per-node checks.

        Returns:
            False on a violation, True for a terminus, the cached result
            for a subtree already walked, None when the children still
            need walking
        """
        if node_id in self._on_stack:
            cycle = " -> ".join([frame.node_id for frame in frames] + [node_id])
            self._error(f"Circular reference detected at node '{node_id}' in path: {cycle}")
            return False

        # Subtree fully walked from an earlier start node or sibling
        if node_id in self._checked:
            return self._checked[node_id]

        node = self._graph.get(node_id)
        if node is None:
            if frames:
                self._error(f"Missing node: '{node_id}' (referenced from '{frames[-1].node_id}')")
            else:
                self._error(f"Missing node: '{node_id}'")
            return False

        if node.node_type is None:
            self._error(f"Invalid node type '{node.type}' for node '{node_id}'")
            return False

        if node.is_terminus:
            return True

        if not node.children:
            self._error(f"Non-terminus node '{node_id}' has no children")
            return False

        if node.default is None or node.default not in node.children:
            self._error(f"Invalid or missing default child for node '{node_id}'")
            return False

        return None

    @staticmethod
    def unreachable_nodes(graph: DecisionGraph) -> List[str]:
        """Node ids that cannot be reached from root, in graph order."""
        reachable = set()
        queue = deque([ROOT_NODE])

        while queue:
            node_id = queue.popleft()
            if node_id in reachable or node_id not in graph:
                continue
            reachable.add(node_id)

            children = graph[node_id].children or {}
            for target in children.values():
                if target not in reachable:
                    queue.append(target)

        return [node_id for node_id in graph if node_id not in reachable]

    def _error(self, message: str) -> None:
        # Nodes failing their own checks are met again from every parent
        if message in self.errors:
            return
        self.errors.append(message)
        self._sink.log(message, level="ERROR")

    def _warning(self, message: str) -> None:
        self.warnings.append(message)
        self._sink.log(message, level="WARNING")


def validate_graph(graph: DecisionGraph, sink=None) -> bool:
    """Shortcut for GraphValidator(sink).validate(graph)."""
    return GraphValidator(sink=sink).validate(graph)
