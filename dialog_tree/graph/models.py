"""
Decision graph models.

A decision graph is a mapping from node id to DecisionNode. Nodes are decoded
from the serialized form (JSON or YAML document) with DecisionNode.from_dict,
which only checks the shape of the fields. Structural rules (legal node type,
children/default completeness, cycles, dangling references) belong to
GraphValidator, so a node with an unknown type decodes fine and fails
validation later.

Serialized node:

    {
        "type": "question",
        "content": "Tell me about a favorite memory.",
        "test": "Look for warmth and detail.",
        "children": {"positive": "node_2A", "neutral": "node_2B"},
        "default": "neutral"
    }
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from dialog_tree.graph.errors import GraphFormatError


class NodeType(Enum):
    """Legal node types."""
    QUESTION = "question"     # Asks something and routes on the answer
    RESPONSE = "response"     # Says something and routes on the answer
    TERMINUS = "terminus"     # Sink, ends the traversal

    @classmethod
    def values(cls) -> tuple:
        return tuple(member.value for member in cls)


@dataclass(frozen=True)
class DecisionNode:
    """
    A single vertex of the decision graph.

    Attributes:
        type: Raw node type string (checked by the validator)
        content: Text presented when the node is visited, may be empty
        test: Optional guidance for the operator, display only
        children: Classification label -> child node id
        default: Label key in children used when the classification has no edge
    """
    type: str
    content: str = ""
    test: Optional[str] = None
    children: Optional[Dict[str, str]] = None
    default: Optional[str] = None

    @property
    def node_type(self) -> Optional[NodeType]:
        """Parsed type, None when the raw value is not a legal type."""
        try:
            return NodeType(self.type)
        except ValueError:
            return None

    @property
    def is_terminus(self) -> bool:
        return self.type == NodeType.TERMINUS.value

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the document form, omitting absent optional fields."""
        data: Dict[str, Any] = {"type": self.type, "content": self.content}
        if self.test is not None:
            data["test"] = self.test
        if self.children is not None:
            data["children"] = dict(self.children)
        if self.default is not None:
            data["default"] = self.default
        return data

    @classmethod
    def from_dict(cls, data: Any, node_id: str = "?") -> "DecisionNode":
        """
        Decode a node from its document form.

        Raises:
            GraphFormatError: If a required field is absent or a field has
                the wrong shape
        """
        if not isinstance(data, dict):
            raise GraphFormatError(f"Node '{node_id}' must be a mapping")

        for key in ("type", "content"):
            if key not in data:
                raise GraphFormatError(f"Node '{node_id}' is missing required field '{key}'")
            if not isinstance(data[key], str):
                raise GraphFormatError(f"Node '{node_id}' field '{key}' must be a string")

        test = data.get("test")
        if test is not None and not isinstance(test, str):
            raise GraphFormatError(f"Node '{node_id}' field 'test' must be a string")

        default = data.get("default")
        if default is not None and not isinstance(default, str):
            raise GraphFormatError(f"Node '{node_id}' field 'default' must be a string")

        children = data.get("children")
        if children is not None:
            if not isinstance(children, dict) or not all(
                isinstance(label, str) and isinstance(target, str)
                for label, target in children.items()
            ):
                raise GraphFormatError(
                    f"Node '{node_id}' field 'children' must map strings to strings"
                )
            children = dict(children)

        return cls(
            type=data["type"],
            content=data["content"],
            test=test,
            children=children,
            default=default,
        )


# node id -> node
DecisionGraph = Dict[str, DecisionNode]


def graph_from_dict(data: Any) -> DecisionGraph:
    """
    Decode a whole graph document.

    Raises:
        GraphFormatError: If the document is not a mapping of node ids to
            well-formed nodes
    """
    if not isinstance(data, dict):
        raise GraphFormatError("Decision tree document must be a mapping of node ids")

    graph: DecisionGraph = {}
    for node_id, node_data in data.items():
        if not isinstance(node_id, str):
            raise GraphFormatError(f"Node id {node_id!r} must be a string")
        graph[node_id] = DecisionNode.from_dict(node_data, node_id=node_id)
    return graph


def graph_to_dict(graph: DecisionGraph) -> Dict[str, Dict[str, Any]]:
    """Serialize a graph back to its document form."""
    return {node_id: node.to_dict() for node_id, node in graph.items()}
