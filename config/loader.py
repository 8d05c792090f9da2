"""Configuration loading utilities."""

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from .defaults import CONFIG_DIRNAME, CONFIG_FILENAMES
from .main_config import Config

logger = logging.getLogger(__name__)


_JSONC_TOKEN = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)


def strip_jsonc_comments(content: str) -> str:
    """
    Strip comments from JSONC content to convert to valid JSON.

    Handles:
    - Single-line comments: // comment
    - Multi-line comments: /* comment */

    Comment markers inside string values (e.g. URLs) are left alone.
    """
    return _JSONC_TOKEN.sub(lambda m: m.group(1) or "", content)


def load_config_file(path: Path) -> dict[str, Any] | None:
    """
    Load a config file from the given path.

    Returns:
        Parsed config dictionary or None if the file is missing or unreadable
    """
    if not path.exists():
        return None

    try:
        content = path.read_text()
        if path.suffix == ".jsonc":
            content = strip_jsonc_comments(content)
        return json.loads(content)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return None


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries; `override` wins."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def load_config(project_root: Path | None = None, home: Path | None = None) -> Config:
    """
    Load configuration from multiple sources with precedence.

    Looks for config files in the following order:
    1. Project-level: chatty.jsonc, chatty.json, .chatty/chatty.jsonc
    2. Global: ~/.chatty/chatty.jsonc

    The first project-level file found is merged over the global config.
    """
    if project_root is None:
        project_root = Path.cwd()
    if home is None:
        home = Path.home()

    config_data = load_config_file(home / CONFIG_DIRNAME / CONFIG_FILENAMES[0]) or {}

    project_config_paths = [project_root / name for name in CONFIG_FILENAMES]
    project_config_paths.append(project_root / CONFIG_DIRNAME / CONFIG_FILENAMES[0])

    for path in project_config_paths:
        project_config = load_config_file(path)
        if project_config:
            logger.debug("Loaded project config from %s", path)
            config_data = merge_configs(config_data, project_config)
            break

    return Config(**config_data)


@lru_cache(maxsize=1)
def get_config(project_root: Path | None = None) -> Config:
    """
    Get cached configuration.

    To reload the config, clear the cache with get_config.cache_clear().
    """
    return load_config(project_root or Path.cwd())
