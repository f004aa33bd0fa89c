"""
Structured Logging for dialog_tree.

JSON logs for production, readable lines for development.
Every line carries the run_id of the active traversal.

Usage:
    from dialog_tree.logger import logger

    logger.set_run("run_123")
    logger.info("Response classified", classification="positive")
    logger.log("Missing node: 'node_9'", level="ERROR")
    logger.close()

The logger is also the diagnostic sink of the validator, the classifier and
the traversal engine: anything with ``log(message, level, **fields)`` and
``close()`` can take its place.
"""

import logging
import json
import os
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dialog_tree.settings import settings


_run_id_var: ContextVar[Optional[str]] = ContextVar('run_id', default=None)
_extra_context_var: ContextVar[Optional[Dict[str, Any]]] = ContextVar('extra_context', default=None)

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StructuredLogger:
    """
    Structured logger with JSON output and run tracing.

    Features:
    - JSON format for production (LOG_FORMAT=json)
    - Readable format for development (default)
    - run_id attached to every line
    - metric() and event() for analytics
    - log(message, level) and close() for the diagnostic sink contract
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

        if not self.logger.handlers:
            self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure handler and level from settings and environment"""
        level_name = settings.get_nested("logging.level", "INFO")
        level = getattr(logging, str(level_name).upper(), logging.INFO)
        self.logger.setLevel(level)

        handler = logging.StreamHandler()
        handler.setLevel(level)

        log_format = os.environ.get("LOG_FORMAT", "readable")

        if log_format == "json":
            formatter = logging.Formatter("%(message)s")
        else:
            formatter = logging.Formatter(
                "[%(asctime)s] %(levelname)s - %(message)s",
                datefmt="%H:%M:%S"
            )

        handler.setFormatter(formatter)
        self.logger.addHandler(handler)

        # No duplicate lines through the root logger
        self.logger.propagate = False

    @property
    def run_id(self) -> Optional[str]:
        """Context-local run_id"""
        return _run_id_var.get()

    def set_run(self, run_id: str) -> None:
        """Set run_id (context-local)"""
        _run_id_var.set(run_id)

    def clear_run(self) -> None:
        """Clear run_id"""
        _run_id_var.set(None)

    @property
    def _extra_context(self) -> Dict[str, Any]:
        """Context-local extra fields"""
        ctx = _extra_context_var.get()
        if ctx is None:
            ctx = {}
            _extra_context_var.set(ctx)
        return ctx

    def set_context(self, **kwargs: Any) -> None:
        """Set extra context (context-local)"""
        ctx = self._extra_context
        ctx.update(kwargs)
        _extra_context_var.set(ctx)

    def clear_context(self) -> None:
        """Clear extra context"""
        _extra_context_var.set({})

    def _format_structured(self, level: str, message: str, **kwargs: Any) -> Dict[str, Any]:
        """Build a structured log entry"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }

        if self.run_id:
            log_entry["run_id"] = self.run_id

        if self._extra_context:
            log_entry.update(self._extra_context)

        if kwargs:
            log_entry.update(kwargs)

        return log_entry

    def _should_use_json(self) -> bool:
        return os.environ.get("LOG_FORMAT", "readable") == "json"

    def _render(self, message: str, **kwargs: Any) -> str:
        """Readable line: message, extras and run_id prefix"""
        if kwargs:
            extras = ", ".join(f"{k}={v}" for k, v in kwargs.items())
            full_message = f"{message} [{extras}]"
        else:
            full_message = message

        if self.run_id:
            full_message = f"[{self.run_id}] {full_message}"

        return full_message

    def _log(self, level: str, message: str, log_method, **kwargs: Any) -> None:
        # Reopen after close() so the singleton survives consecutive runs
        if not self.logger.handlers:
            self._setup_logger()

        if self._should_use_json():
            structured = self._format_structured(level, message, **kwargs)
            log_method(json.dumps(structured, ensure_ascii=False, default=str))
        else:
            log_method(self._render(message, **kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message"""
        self._log("DEBUG", message, self.logger.debug, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message"""
        self._log("INFO", message, self.logger.info, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message"""
        self._log("WARNING", message, self.logger.warning, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message"""
        self._log("ERROR", message, self.logger.error, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message"""
        self._log("CRITICAL", message, self.logger.critical, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback"""
        if self._should_use_json():
            import traceback
            kwargs["traceback"] = traceback.format_exc()
            structured = self._format_structured("ERROR", message, **kwargs)
            self.logger.error(json.dumps(structured, ensure_ascii=False, default=str))
        else:
            self.logger.exception(self._render(message, **kwargs))

    def log(self, message: str, level: str = "INFO", **kwargs: Any) -> None:
        """
        Log a message at a level given by name.

        Args:
            message: Text of the diagnostic
            level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL

        Raises:
            ValueError: If level is not a known level name
        """
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{level}'")
        log_method = getattr(self.logger, level.lower())
        self._log(level, message, log_method, **kwargs)

    def metric(self, name: str, value: Any, **kwargs: Any) -> None:
        """
        Structured metric for analytics.

        Example:
            logger.metric("dataset_size", 4, run="run_1")
        """
        self._log("METRIC", name, self.logger.info, value=value, **kwargs)

    def event(self, event_type: str, **kwargs: Any) -> None:
        """
        Business event for analytics.

        Example:
            logger.event("transition", from_node="root", to_node="node_2A")
        """
        self._log("EVENT", event_type, self.logger.info, **kwargs)

    def close(self) -> None:
        """Flush and close all handlers at the end of a run"""
        for handler in list(self.logger.handlers):
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)


# Singleton logger instance
logger = StructuredLogger("dialog_tree")


def create_test_logger(name: str = "test") -> StructuredLogger:
    """Create an isolated logger for tests"""
    return StructuredLogger(f"dialog_tree.{name}")
