"""
Configuration loading for the text diff tool.

Settings live in config/config.json at the project root (or the file named by
the TEXT_DIFF_CONFIG environment variable). A missing or unreadable file means
defaults; a bad value falls back to its default with a warning.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from text_diff import DiffSettings, InvalidDiffOptionError

logger = logging.getLogger(__name__)

app_root = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_FILE = app_root / "config" / "config.json"


def get_config_file() -> Path:
    """Path of the JSON config file."""
    config_file = os.environ.get('TEXT_DIFF_CONFIG')
    if config_file:
        return Path(config_file)
    return DEFAULT_CONFIG_FILE


def get_config_directory() -> Path:
    """Directory for runtime files such as the port file."""
    config_dir = os.environ.get('TEXT_DIFF_CONFIG_DIR')
    if config_dir:
        return Path(config_dir)

    # Default to ~/.config/text-diff-tool
    return Path.home() / '.config' / 'text-diff-tool'


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the whole config file as a dict; empty dict when unavailable."""
    config_file = Path(config_file) if config_file else get_config_file()
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Could not read config file %s: %s", config_file, e)
            return {}
        if isinstance(config, dict):
            return config
        logger.warning("Ignoring config file %s: top level is not an object", config_file)
    return {}


def load_tool_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """The 'tools' section: per-tool flags such as 'enabled'."""
    config = load_config() if config is None else config
    return config.get('tools', {})


def is_tool_enabled(tool_id: str, tool_config: Dict[str, Any]) -> bool:
    """Check if a tool is enabled in config. Defaults to True if not specified."""
    tool_conf = tool_config.get(tool_id, {})
    return tool_conf.get('enabled', True)


def load_diff_settings(config: Optional[Dict[str, Any]] = None) -> DiffSettings:
    """Build DiffSettings from the 'text_diff' section, value by value."""
    config = load_config() if config is None else config
    section = config.get('text_diff', {})
    if not isinstance(section, dict):
        logger.warning("Ignoring 'text_diff' config section: not an object")
        return DiffSettings()

    defaults = DiffSettings().to_dict()
    values = {}
    for name, default in defaults.items():
        value = section.get(name, default)
        try:
            DiffSettings(**{name: value})
        except InvalidDiffOptionError as e:
            logger.warning("Invalid text_diff setting, using default %s=%s: %s", name, default, e)
            value = default
        values[name] = value

    return DiffSettings(**values)
