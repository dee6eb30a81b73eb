"""
config.py — YAML configuration with built-in defaults.

`load_config` reads config.yaml and layers it over DEFAULT_CONFIG, so a
partial file (or no file at all) still yields every key the pipeline needs.
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "report": {
        "title": "Custom Report Builder",
        "subtitle": "Build your custom reports by selecting metrics and actions.",
        "instruction": (
            "Select the metrics and then click on the Preview Report "
            "button to view the report."
        ),
    },
    "data_generation": {
        "seed": None,
    },
    "paths": {
        "output_dir": "data/output",
        "log_dir": "logs",
        "csv_filename": "custom-report.csv",
        "dashboard_filename": "custom-report.html",
    },
    "brand": {
        "primary": "005DA6",
        "background": "E6F7FF",
        "banner": "FFFECE",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        # An empty YAML section ("paths:" with every key commented out) loads as None
        if value is None and isinstance(merged.get(key), dict):
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """Load configuration, falling back to defaults for anything not set.

    Args:
        config_path: Path to configuration YAML.

    Returns:
        Full configuration dict.
    """
    path = Path(config_path)
    if not path.exists():
        logger.warning("Config file %s not found; using built-in defaults", path)
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(path, "r") as fh:
        loaded = yaml.safe_load(fh) or {}

    return _deep_merge(DEFAULT_CONFIG, loaded)
