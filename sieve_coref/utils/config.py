"""
Configuration for the coreference system.

Everything lives under the ``coref`` section. Per-sieve settings sit in
``coref.sieve_options.<sieve name>`` and fall back to the key of the same
name directly under ``coref``.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

SECTION = "coref"

DEFAULT_CONFIG = {
    SECTION: {
        "language": "en",
        "sieves": "SpeakerMatch,PreciseConstructs,pp-rf,cc-rf,pc-rf,ll-rf,pr-rf",
        "merge_threshold": 0.3,
        "max_sentence_distance": 1000,
        "default_pronoun_agreement": False,
        "postprocessing": False,
        "remove_singletons": True,
        "debug": False,
        "trace": False,
        "dictionaries": None,
        "heuristic_filter": {
            "enabled": False,
            "max_mention_distance": 50,
            "max_mention_distance_with_string_match": 5000,
        },
        "sieve_options": {
            "pp-rf": {"mention_types": "PROPER", "antecedent_types": "PROPER"},
            "cc-rf": {"mention_types": "NOMINAL", "antecedent_types": "NOMINAL"},
            "pc-rf": {"mention_types": "NOMINAL", "antecedent_types": "PROPER"},
            "ll-rf": {"mention_types": "LIST", "antecedent_types": "LIST"},
            "pr-rf": {"mention_types": "PRONOMINAL", "antecedent_types": "all"},
        },
    }
}

_MISSING = object()


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` onto a copy of ``base``; nested sections merge key by key."""
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def split_names(value: Any) -> List[str]:
    """Names from a comma-separated string or a YAML list, blanks dropped."""
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else value
    return [str(part).strip() for part in parts if str(part).strip()]


class ConfigManager:
    """Coref settings with dotted access, backed by an optional YAML file"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Start from the defaults and overlay ``config_path`` when it exists.

        Args:
            config_path: YAML file with a ``coref`` section
        """
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path is None:
            return
        if Path(config_path).exists():
            self.load_config(Path(config_path))
        else:
            logger.warning(f"Config file not found: {config_path}, using defaults")

    @classmethod
    def from_dict(cls, overrides: Mapping[str, Any]) -> "ConfigManager":
        """Defaults deep-merged with an in-memory override mapping."""
        manager = cls()
        manager.config = merge_configs(manager.config, overrides)
        return manager

    def load_config(self, config_path: Path) -> None:
        """Overlay a YAML file on the defaults. Unreadable files leave the defaults in place."""
        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            return

        self.config = merge_configs(DEFAULT_CONFIG, loaded)
        logger.info(f"Loaded configuration from {config_path}")

    def save_config(self, config_path: Path) -> None:
        try:
            with Path(config_path).open("w", encoding="utf-8") as f:
                yaml.safe_dump(self.config, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")
            return
        logger.info(f"Saved configuration to {config_path}")

    # ========================================================================
    # Access
    # ========================================================================

    def _lookup(self, keys: List[str]) -> Any:
        node: Any = self.config
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return _MISSING
            node = node[key]
        return node

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Value at a dotted path such as ``coref.heuristic_filter.enabled``.

        Returns ``default`` when any segment of the path is absent.
        """
        value = self._lookup(key_path.split("."))
        return default if value is _MISSING else value

    def set(self, key_path: str, value: Any) -> None:
        """Store ``value`` at a dotted path, replacing non-mapping parents on the way."""
        *parents, leaf = key_path.split(".")
        node = self.config
        for key in parents:
            if not isinstance(node.get(key), dict):
                node[key] = {}
            node = node[key]
        node[leaf] = value

    def sieve_option(self, sieve: str, key: str, default: Any = None) -> Any:
        """Per-sieve setting, falling back to the global ``coref.<key>``."""
        value = self._lookup([SECTION, "sieve_options", sieve, key])
        if value is not _MISSING:
            return value
        return self.get(f"{SECTION}.{key}", default)

    def sieve_names(self) -> List[str]:
        """Sieve names from ``coref.sieves``, in the order they run."""
        return split_names(self.get(f"{SECTION}.sieves"))

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.config)
