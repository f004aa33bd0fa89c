"""Errors raised while reading a decision graph source."""

from typing import Optional


class GraphSourceError(Exception):
    """Base class for graph source failures. Fatal to a run."""


class GraphLoadError(GraphSourceError):
    """Raised when the graph source cannot be read."""

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        message = f"Failed to load '{file_path}': {reason}"
        super().__init__(message)


class GraphFormatError(GraphSourceError):
    """Raised when the graph document is malformed or a node has a bad field."""

    def __init__(self, reason: str, file_path: Optional[str] = None):
        self.reason = reason
        self.file_path = file_path
        if file_path:
            message = f"Malformed decision tree '{file_path}': {reason}"
        else:
            message = f"Malformed decision tree: {reason}"
        super().__init__(message)
