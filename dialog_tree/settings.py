"""
Settings loader for settings.yaml.

Usage:
    from dialog_tree.settings import settings

    start = settings.traversal.start_node
    minimum = settings.get_nested("training.min_examples", 5)
"""

import yaml
from pathlib import Path
from typing import List, Any


# Path to the bundled settings file
SETTINGS_FILE = Path(__file__).parent / "settings.yaml"

# Used when a key is missing from the YAML file
DEFAULTS = {
    "logging": {
        "level": "INFO",
    },
    "traversal": {
        "start_node": "root",
        "exit_node": "terminus_exit",
        "outcome_prompt": "Outcome?",
        "fallback_action": "neutral",
    },
    "training": {
        "enabled": True,
        "min_examples": 5,
    },
    "validation": {
        "warn_unreachable": True,
    },
}


class DotDict(dict):
    """Dictionary with attribute access: d.key instead of d['key']"""

    def __getattr__(self, key: str) -> Any:
        try:
            value = self[key]
            if isinstance(value, dict):
                return DotDict(value)
            return value
        except KeyError:
            raise AttributeError(f"Setting '{key}' not found")

    def __setattr__(self, key: str, value: Any) -> None:
        self[key] = value

    def get_nested(self, path: str, default: Any = None) -> Any:
        """Get a value by dotted path: 'traversal.start_node'"""
        keys = path.split('.')
        value = self
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge of dictionaries (override wins)"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(filepath: Path = None) -> DotDict:
    """
    Load settings from a YAML file.

    Priority:
    1. Values from the YAML file
    2. DEFAULTS

    Args:
        filepath: Settings file (defaults to the bundled settings.yaml)

    Returns:
        DotDict with settings
    """
    filepath = filepath or SETTINGS_FILE

    config = _deep_merge({}, DEFAULTS)

    if filepath.exists():
        with open(filepath, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        config = _deep_merge(config, yaml_config)
    else:
        print(f"[settings] Settings file not found: {filepath}")
        print("[settings] Using default values")

    return DotDict(config)


def validate_settings(settings: DotDict) -> List[str]:
    """
    Validate settings.

    Returns:
        List of errors (empty when everything is OK)
    """
    errors = []

    # Traversal
    for name in ["start_node", "exit_node", "outcome_prompt", "fallback_action"]:
        value = settings.traversal.get(name)
        if not isinstance(value, str) or not value:
            errors.append(f"traversal.{name} must be a non-empty string")

    # Training
    min_examples = settings.training.get("min_examples")
    if not isinstance(min_examples, int) or min_examples < 1:
        errors.append("training.min_examples must be an integer >= 1")

    # Logging
    level = settings.logging.get("level", "")
    if str(level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"logging.level '{level}' is not a valid level")

    return errors


# Global settings instance (lazy)
_settings = None


def get_settings() -> DotDict:
    """Get global settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = load_settings()
        errors = validate_settings(_settings)
        if errors:
            print("[settings] Invalid settings:")
            for err in errors:
                print(f"  - {err}")
    return _settings


def reload_settings() -> DotDict:
    """Reload settings from file"""
    global _settings
    _settings = None
    return get_settings()


# For convenient import: from dialog_tree.settings import settings
settings = get_settings()
