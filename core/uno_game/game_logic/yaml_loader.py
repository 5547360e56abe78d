"""
YAML Loader for UNO Game Rules

This module loads the declarative room rules (capacity, hand size, room
code shape, draw penalties) from YAML.
"""

import copy
import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from tools.logger.custom_logging import custom_log

DEFAULT_RULES: Dict[str, Any] = {
    "players": {"min": 2, "max": 4},
    "dealing": {"hand_size": 7},
    "room_code": {"length": 6, "alphabet": "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"},
    "draw_penalties": {"+2": 2, "+4": 4},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class YAMLLoader:
    """Loads YAML configuration files for game rules"""

    def __init__(self, base_path: str = None):
        self.base_path = base_path or self._get_default_base_path()

    def _get_default_base_path(self) -> str:
        """Get the default base path for game rules"""
        current_dir = Path(__file__).parent
        return str(current_dir.parent / "game_rules")

    def load_single_rule(self, rule_path: str) -> Dict[str, Any]:
        """Load a single rule file (absolute, or relative to base_path)"""
        full_path = rule_path if os.path.isabs(rule_path) else os.path.join(self.base_path, rule_path)

        if not os.path.exists(full_path):
            custom_log(f"Rules file not found: {full_path}", level="WARNING")
            return {}

        try:
            with open(full_path, 'r', encoding='utf-8') as file:
                return yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as e:
            custom_log(f"Error loading rule {rule_path}: {e}", level="ERROR")
            return {}


def load_game_rules(rules_path: Optional[str] = None) -> Dict[str, Any]:
    """Load rules.yaml (or ``rules_path``) layered over the built-in defaults."""
    loader = YAMLLoader()
    loaded = loader.load_single_rule(rules_path or "rules.yaml")
    return _merge(DEFAULT_RULES, loaded)
