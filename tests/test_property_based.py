"""
Property-based tests for the classifier, the validator and the engine.

Random responses and random acyclic graphs check the properties that must
hold for any input, not just the hand-picked cases.

Requires: pip install hypothesis
"""

import pytest

# Skip entire module if hypothesis is not installed
hypothesis = pytest.importorskip(
    "hypothesis",
    reason="hypothesis not installed - run 'pip install hypothesis' to enable property-based tests"
)

from hypothesis import HealthCheck, given, settings, strategies as st

from dialog_tree.classifier import Classification, ResponseClassifier
from dialog_tree.classifier.lexicon import NEGATIVE_THRESHOLD, POSITIVE_THRESHOLD
from dialog_tree.graph import GraphValidator, graph_from_dict
from dialog_tree.providers import FixtureResponseProvider
from dialog_tree.traversal import ExitReason, TraversalEngine
from graph_helpers import RecordingSink

# =============================================================================
# STRATEGIES
# =============================================================================

LABELS = [c.value for c in Classification]

response_words = st.sampled_from([
    "great", "love", "fun", "no", "nah", "boring", "bad", "heart", "feel",
    "memory", "tell", "share", "you", "?", "the", "a", "day", "school", "ok",
    "it", "was", "...", ":(", "!",
])

responses = st.lists(response_words, min_size=0, max_size=30).map(" ".join)

answers_text = st.lists(response_words, min_size=1, max_size=30).map(" ".join)

free_text = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz !?.:(",
    max_size=200,
)


@st.composite
def acyclic_graphs(draw):
    """
    Graph data where node i only points forward, node i always reaches
    node i+1 and the last node is a terminus.
    """
    size = draw(st.integers(min_value=2, max_value=8))
    ids = ["root"] + [f"node_{i}" for i in range(1, size)]
    data = {}

    for index, node_id in enumerate(ids[:-1]):
        default = draw(st.sampled_from(LABELS))
        children = {default: ids[index + 1]}
        for label in LABELS:
            if label != default and draw(st.booleans()):
                children[label] = draw(st.sampled_from(ids[index + 1:]))
        data[node_id] = {
            "type": draw(st.sampled_from(["question", "response"])),
            "content": f"Prompt {index}",
            "children": children,
            "default": default,
        }

    data[ids[-1]] = {"type": "terminus", "content": "Bye"}
    return data


# =============================================================================
# CLASSIFIER PROPERTIES
# =============================================================================

class TestClassifierProperties:

    @given(text=st.one_of(responses, free_text))
    @settings(max_examples=200)
    def test_label_matches_score(self, text):
        result = ResponseClassifier(sink=RecordingSink()).score(text)

        if result.score > POSITIVE_THRESHOLD:
            assert result.label == Classification.POSITIVE
        elif result.score < NEGATIVE_THRESHOLD:
            assert result.label == Classification.NEGATIVE
        else:
            assert result.label == Classification.NEUTRAL

    @given(text=responses)
    def test_classification_is_deterministic(self, text):
        classifier = ResponseClassifier(sink=RecordingSink())

        assert classifier.classify(text) == classifier.classify(text)

    @given(text=responses)
    def test_classify_logs_once(self, text):
        sink = RecordingSink()

        ResponseClassifier(sink=sink).classify(text)

        assert len(sink.records) == 1


# =============================================================================
# VALIDATOR PROPERTIES
# =============================================================================

class TestValidatorProperties:

    @given(data=acyclic_graphs())
    @settings(max_examples=100)
    def test_forward_graphs_are_valid(self, data):
        sink = RecordingSink()

        assert GraphValidator(sink=sink).validate(graph_from_dict(data))
        assert sink.messages("ERROR") == []

    @given(data=acyclic_graphs(), pick=st.integers(min_value=0))
    @settings(max_examples=100)
    def test_back_edge_to_root_is_a_cycle(self, data, pick):
        inner = [node_id for node_id, node in data.items() if node["type"] != "terminus"]
        node_id = inner[pick % len(inner)]
        data[node_id]["children"]["negative"] = "root"
        sink = RecordingSink()

        assert not GraphValidator(sink=sink).validate(graph_from_dict(data))
        assert sink.contains("Circular reference detected", level="ERROR")


# =============================================================================
# TRAVERSAL PROPERTIES
# =============================================================================

class TestTraversalProperties:

    @given(answers=st.lists(answers_text, min_size=4, max_size=4), outcome=st.sampled_from(["yes", "no", ""]))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_sample_graph_walk(self, sample_graph, answers, outcome):
        prompts = ["root", "node_2A", "node_2B", "node_2C", "node_3A", "node_3B", "node_4A", "node_4B"]
        mapping = {prompt: answers[i % len(answers)] for i, prompt in enumerate(prompts)}
        mapping["Outcome?"] = outcome
        engine = TraversalEngine(sink=RecordingSink())

        result = engine.run(sample_graph, FixtureResponseProvider(mapping))

        assert result.valid
        assert result.steps == len(result.dataset)
        assert 1 <= result.steps <= len(sample_graph)
        assert result.path[0] == "root"
        assert len(set(result.path)) == len(result.path)
        assert all(example.action in sample_graph for example in result.dataset)
        assert result.exit_reason == ExitReason.TERMINUS
        assert result.dataset.last.outcome == ("success" if outcome == "yes" else "failure")
