"""
Configuration management for graph export.

Handles export settings:
- CSV delimiter and the delimiter used to join multi-valued cells
- Output file names and encoding

Settings come from DEFAULT_CONFIG, overlaid by an optional JSON config file,
then by environment variables. A .env file can be passed explicitly; it is read
with python-dotenv without touching os.environ.
"""

import codecs
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "delimiter": ",",
    "array_delimiter": ";",
    "nodes_filename": "nodes.csv",
    "edges_filename": "edges.csv",
    "encoding": "utf-8",
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "GRAPHEXPORT_DELIMITER": "delimiter",
    "GRAPHEXPORT_ARRAY_DELIMITER": "array_delimiter",
}

CONFIG_PATH_ENV = "GRAPHEXPORT_CONFIG"


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read a JSON config file. Returns {} if it is missing or unreadable."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {config_path}: expected a JSON object")
        return {}
    return data


def validate_delimiters(delimiter: Any, array_delimiter: Any) -> None:
    """Raise ValueError unless both delimiters are single characters."""
    for key, value in (("delimiter", delimiter), ("array_delimiter", array_delimiter)):
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"{key} must be a single character, got {value!r}")


def validate_config(config: Dict[str, Any]) -> None:
    """
    Raise ValueError for settings export_graph_csv() cannot use:
    delimiters must be single characters, file names non-empty strings, and
    the encoding one Python knows.
    """
    validate_delimiters(config.get("delimiter"), config.get("array_delimiter"))

    for key in ("nodes_filename", "edges_filename"):
        value = config.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} must be a non-empty string, got {value!r}")

    encoding = config.get("encoding")
    if not isinstance(encoding, str):
        raise ValueError(f"encoding must be a string, got {encoding!r}")
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ValueError(f"Unknown encoding {encoding!r}") from None


def load_config(
    path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Load export configuration.

    Priority (highest first):
    1. Environment variables GRAPHEXPORT_DELIMITER / GRAPHEXPORT_ARRAY_DELIMITER
    2. The same variables in `env_file` (a .env file), if given
    3. JSON file at `path`, or at $GRAPHEXPORT_CONFIG
    4. DEFAULT_CONFIG

    The .env file is only read; os.environ is never modified.
    """
    env: Dict[str, Optional[str]] = {}
    if env_file is not None:
        env.update(dotenv_values(env_file))
    env.update(os.environ)

    config = dict(DEFAULT_CONFIG)

    if path is None:
        path = env.get(CONFIG_PATH_ENV)
    if path:
        for key, value in _read_config_file(Path(path)).items():
            if key not in DEFAULT_CONFIG:
                logger.warning(f"Unknown config key '{key}' in {path}")
                continue
            config[key] = value

    for env_name, key in ENV_OVERRIDES.items():
        env_value = env.get(env_name)
        if env_value:
            config[key] = env_value

    validate_config(config)
    return config


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """Save configuration to a JSON file."""
    validate_config(config)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)
