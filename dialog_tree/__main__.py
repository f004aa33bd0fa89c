#!/usr/bin/env python3
"""
CLI for running one interactive traversal.

Usage:
    python -m dialog_tree path/to/decision_tree.json
    python -m dialog_tree path/to/decision_tree.yaml
    python -m dialog_tree                              # bundled sample graph

Exit codes: 0 done, 1 graph could not be loaded, 2 graph failed validation.
"""

import argparse
import sys

from dialog_tree.graph import DEFAULT_GRAPH_FILE, GraphSourceError, load_graph
from dialog_tree.logger import logger
from dialog_tree.providers import TerminalResponseProvider
from dialog_tree.settings import settings
from dialog_tree.training import PlaceholderTrainer
from dialog_tree.traversal import ExitReason, TraversalEngine


def create_parser():
    """Create and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dialog-tree",
        description="Walk a decision tree and collect learning examples",
    )

    parser.add_argument(
        "graph",
        nargs="?",
        default=str(DEFAULT_GRAPH_FILE),
        help="Decision tree file, JSON or YAML (default: bundled sample)",
    )

    return parser


def print_summary(result) -> None:
    """Print the collected dataset."""
    print()
    print("=" * 60)
    print("LEARNING DATA")
    print("=" * 60)
    print(f"Path: {' -> '.join(result.path)}")
    print(f"Examples: {len(result.dataset)}")
    for index, example in enumerate(result.dataset, 1):
        attrs = example.attributes
        print(
            f"  {index}. '{example.response_text}' -> {example.action} "
            f"(sentiment={attrs.sentiment}, words={attrs.word_count}, "
            f"question={attrs.has_question}) {example.outcome or '-'}"
        )


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)

    try:
        graph = load_graph(args.graph)
    except GraphSourceError as e:
        logger.error(f"Failed to load decision tree: {e}")
        logger.close()
        return 1

    trainer = PlaceholderTrainer() if settings.get_nested("training.enabled", True) else None
    engine = TraversalEngine(
        trainer=trainer,
        display=print,
    )
    provider = TerminalResponseProvider(outcome_prompt=engine.outcome_prompt)

    result = engine.run(graph, provider)
    logger.close()

    if result.exit_reason == ExitReason.INVALID_GRAPH:
        return 2

    print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
