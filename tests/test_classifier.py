"""
Tests for the heuristic response classifier.

Labels are derived from the scoring formula: lexicon weights, length
adjustment, punctuation cues and the 0.8 / -0.5 boundaries.
"""

import pytest

from dialog_tree.classifier import (
    Classification,
    ResponseClassifier,
    classify_response,
    split_words,
)


@pytest.fixture
def classifier(sink):
    return ResponseClassifier(sink=sink)


class TestReferenceResponses:
    """Known responses and their labels."""

    def test_positive(self, classifier):
        """amazing + love (in "loved") + "!" = 2.2"""
        text = "That was an amazing day with my friends! I loved it!"

        assert classifier.classify(text) == Classification.POSITIVE
        assert classifier.score(text).score == pytest.approx(2.2)

    def test_neutral(self, classifier):
        """No keyword, five words, no punctuation cue."""
        assert classifier.classify("It was okay, I guess.") == Classification.NEUTRAL
        assert classifier.score("It was okay, I guess.").score == pytest.approx(0.0)

    def test_negative(self, classifier):
        """no (in "nothing") + nah + whatever - special bonus - short penalty."""
        text = "Nah, nothing special, whatever."

        assert classifier.classify(text) == Classification.NEGATIVE
        assert classifier.score(text).score == pytest.approx(-3.0)

    def test_short_exclamation_is_neutral(self, classifier):
        """One word (-0.5) plus "!" (+0.2) = -0.3, inside the neutral band."""
        result = classifier.score("Short!")

        assert result.score == pytest.approx(-0.3)
        assert result.label == Classification.NEUTRAL

    def test_engaging_response(self, classifier):
        """tell + you + "?" + "!" = 1.1"""
        text = "Tell me about you! What's your story?"

        assert classifier.classify(text) == Classification.POSITIVE
        assert classifier.score(text).score == pytest.approx(1.1)


class TestScoring:
    """Individual scoring rules."""

    def test_case_insensitive(self, classifier):
        assert classifier.classify("That was AMAZING fun!") == classifier.classify("that was amazing fun!")
        assert classifier.classify("That was AMAZING fun!") == Classification.POSITIVE

    def test_keyword_counts_once(self, classifier):
        """Repeating a keyword does not add weight."""
        result = classifier.score("love love love love love")

        assert result.score == pytest.approx(1.0)
        assert result.signals == ["positive:love"]

    def test_every_matching_keyword_adds(self, classifier):
        result = classifier.score("great love happy fun amazing")

        assert result.score == pytest.approx(5.0)

    def test_substring_containment(self, classifier):
        """Keywords match inside longer words."""
        result = classifier.score("nothing to see here at all")

        assert "negative:no" in result.signals

    def test_emotional_keywords(self, classifier):
        result = classifier.score("that moment touched my heart deeply")

        assert "emotional:heart" in result.signals
        assert "emotional:deep" in result.signals
        assert result.score == pytest.approx(1.0)

    def test_question_mark_is_engagement(self, classifier):
        result = classifier.score("what did it look like then?")

        assert "engagement:?" in result.signals
        assert result.score == pytest.approx(0.3)

    def test_long_response_bonus(self, classifier):
        result = classifier.score(" ".join(["la"] * 21))

        assert result.word_count == 21
        assert "length:long" in result.signals
        assert result.score == pytest.approx(0.5)

    @pytest.mark.parametrize("count", [5, 20])
    def test_length_band_has_no_adjustment(self, classifier, count):
        result = classifier.score(" ".join(["la"] * count))

        assert result.score == pytest.approx(0.0)
        assert not any(s.startswith("length:") for s in result.signals)

    def test_downbeat_markers_fire_independently(self, classifier):
        result = classifier.score("I guess it was okay... :(")

        assert "punctuation:..." in result.signals
        assert "punctuation::(" in result.signals
        assert result.score == pytest.approx(-0.4)
        assert result.label == Classification.NEUTRAL

    def test_lower_boundary_is_neutral(self, classifier):
        """Exactly -0.5 stays neutral."""
        result = classifier.score("Okay.")

        assert result.score == pytest.approx(-0.5)
        assert result.label == Classification.NEUTRAL

    def test_below_lower_boundary_is_negative(self, classifier):
        assert classifier.classify("Bad.") == Classification.NEGATIVE

    def test_empty_text(self, classifier):
        """No words counts as a short response."""
        result = classifier.score("")

        assert result.word_count == 0
        assert result.label == Classification.NEUTRAL


class TestBehaviour:
    """Purity and logging."""

    def test_idempotent(self, classifier):
        text = "We had a great time, tell you more later..."

        assert classifier.classify(text) == classifier.classify(text)

    def test_logs_one_info_line(self, classifier, sink):
        classifier.classify("That was amazing!")

        assert len(sink.records) == 1
        assert sink.records[0]["level"] == "INFO"
        assert "Classified as: positive" in sink.records[0]["message"]

    def test_score_does_not_log(self, classifier, sink):
        classifier.score("That was amazing!")

        assert sink.records == []

    def test_shortcut(self, sink):
        assert classify_response("Nah, whatever.", sink=sink) == Classification.NEGATIVE

    def test_label_values_are_edge_labels(self):
        assert [c.value for c in Classification] == ["positive", "neutral", "negative"]
        assert Classification.POSITIVE.sentiment == 1.0
        assert Classification.NEUTRAL.sentiment == 0.0
        assert Classification.NEGATIVE.sentiment == -1.0


class TestSplitWords:
    """Word splitting on single spaces."""

    def test_drops_empty_segments(self):
        assert split_words("a  b ") == ["a", "b"]

    def test_keeps_punctuation(self):
        assert split_words("Hi, you!") == ["Hi,", "you!"]
