"""
Tests for the settings system.
"""

import pytest
import tempfile
from pathlib import Path

from dialog_tree.settings import (
    DEFAULTS,
    SETTINGS_FILE,
    DotDict,
    load_settings,
    validate_settings,
)


class TestDotDict:
    """Tests for DotDict"""

    def test_dot_access(self):
        d = DotDict({"a": 1, "b": {"c": 2}})
        assert d.a == 1
        assert d.b.c == 2

    def test_missing_key_raises(self):
        d = DotDict({"a": 1})
        with pytest.raises(AttributeError):
            _ = d.nonexistent

    def test_get_nested(self):
        d = DotDict({"a": {"b": {"c": 3}}})
        assert d.get_nested("a.b.c") == 3
        assert d.get_nested("a.b.x", "default") == "default"

    def test_set_attr(self):
        d = DotDict({})
        d.foo = "bar"
        assert d["foo"] == "bar"


class TestLoadSettings:
    """Tests for loading settings"""

    def test_bundled_file_exists(self):
        assert SETTINGS_FILE.exists()

    def test_bundled_settings(self):
        settings = load_settings()

        assert settings.traversal.start_node == "root"
        assert settings.traversal.exit_node == "terminus_exit"
        assert settings.traversal.outcome_prompt == "Outcome?"
        assert settings.traversal.fallback_action == "neutral"
        assert settings.training.min_examples == 5

    def test_load_defaults_when_no_file(self):
        """Without a file the defaults are used"""
        settings = load_settings(Path("/nonexistent/path.yaml"))
        assert settings.traversal.start_node == DEFAULTS["traversal"]["start_node"]

    def test_load_from_yaml(self):
        yaml_content = """
traversal:
  exit_node: "goodbye"
training:
  min_examples: 10
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(yaml_content)
            f.flush()

            settings = load_settings(Path(f.name))

            # Overridden
            assert settings.traversal.exit_node == "goodbye"
            assert settings.training.min_examples == 10

            # Deep-merged defaults
            assert settings.traversal.start_node == "root"
            assert settings.training.enabled is True

    def test_empty_yaml(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("")
            f.flush()

            settings = load_settings(Path(f.name))

            assert settings.logging.level == "INFO"


class TestValidateSettings:
    """Tests for settings validation"""

    def test_bundled_settings_valid(self):
        assert validate_settings(load_settings()) == []

    def test_bad_min_examples(self):
        settings = load_settings()
        settings["training"]["min_examples"] = 0

        errors = validate_settings(settings)

        assert any("training.min_examples" in e for e in errors)

    def test_empty_node_id(self):
        settings = load_settings()
        settings["traversal"]["exit_node"] = ""

        errors = validate_settings(settings)

        assert any("traversal.exit_node" in e for e in errors)

    def test_bad_log_level(self):
        settings = load_settings()
        settings["logging"]["level"] = "LOUD"

        assert any("logging.level" in e for e in validate_settings(settings))
