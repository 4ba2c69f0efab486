#!/usr/bin/env python3
"""
Configuration for gitsim.

Settings are layered: built-in defaults, then the config file, then
GITSIM_<SECTION>_<KEY> environment variables. The config file may be
JSON, TOML or YAML.
"""

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

# Log to stderr so stdout stays clean for JSONL and transcripts
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger("gitsim")

ENV_PREFIX = "GITSIM_"
CONFIG_ENV_VAR = "GITSIM_CONFIG"
CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def _read_toml(path):
    with open(path, 'rb') as f:
        return tomllib.load(f)


def _read_yaml(path):
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def _read_json(path):
    with open(path, 'r') as f:
        return json.load(f)


READERS = {
    '.toml': _read_toml,
    '.yaml': _read_yaml,
    '.yml': _read_yaml,
}


def get_config_path():
    """Path of the config file in effect.

    $GITSIM_CONFIG wins when it names an existing file. Otherwise the
    first non-trivial ~/.gitsim/config.* is used, and when there is none
    the JSON path is returned so save_config() knows where to write.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override and Path(override).exists():
        return Path(override)

    config_dir = Path.home() / '.gitsim'
    candidates = (config_dir / name for name in CONFIG_FILENAMES)
    found = next((p for p in candidates if p.exists() and p.stat().st_size > 2), None)
    return found or config_dir / CONFIG_FILENAMES[0]


def load_config():
    """Defaults merged with the config file and environment overrides.

    A file that cannot be read or parsed is logged and ignored.
    """
    config = get_default_config()
    path = get_config_path()

    if path.exists():
        reader = READERS.get(path.suffix.lower(), _read_json)
        try:
            config = merge_configs(config, reader(path))
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Ignoring unreadable config {path}: {e}")

    return apply_env_overrides(config)


def save_config(config):
    """Write ``config`` to the active config path and return that path.

    tomllib cannot write, so a TOML config is saved as JSON beside it.
    """
    path = get_config_path()
    if path.suffix.lower() == '.toml':
        logger.warning("Cannot write TOML. Saving as JSON instead.")
        path = path.with_suffix('.json')

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                yaml.safe_dump(config, f, default_flow_style=False)
            else:
                json.dump(config, f, indent=2)
        logger.info(f"Saved configuration to {path}")
    except OSError as e:
        logger.error(f"Could not write config {path}: {e}")
    return path


def get_default_config():
    return {
        "prompt": {
            "user": "user",
            "host": "computer",
            "repo_host": "repo",
        },
        "display": {
            "recent_commits": 3,
            "history_limit": 10,
            "output_preview_chars": 100,
        },
        "topics": {
            "fuzzy_threshold": 60,
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s",
        },
    }


def configure_logging(config):
    """Apply the logging section of the configuration."""
    settings = config.get("logging", {})
    level = getattr(logging, str(settings.get("level", "WARNING")).upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(level)
    if fmt := settings.get("format"):
        for handler in root.handlers:
            handler.setFormatter(logging.Formatter(fmt))
    return level


def merge_configs(base_config, override_config):
    """
    Deep-merge ``override_config`` into a copy of ``base_config``.

    Nested dicts are merged key by key; any other value replaces the
    base value outright.
    """
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = value
    return merged


def _coerce(value):
    """Environment strings to bool or int where they clearly are one."""
    lowered = value.lower()
    if lowered in ('true', 'yes', 'on'):
        return True
    if lowered in ('false', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def _assign(section, parts, value):
    """
    Set ``value`` at the key path spelled by ``parts`` inside ``section``.

    Keys may themselves contain underscores (``repo_host``), so at each
    level the longest key matching the leading parts is taken. Paths
    that do not name an existing key are ignored.
    """
    best = None
    for key in section:
        key_parts = key.split('_')
        if parts[:len(key_parts)] == key_parts and (best is None or len(key_parts) > len(best.split('_'))):
            best = key
    if best is None:
        return

    rest = parts[len(best.split('_')):]
    if not rest:
        section[best] = value
    elif isinstance(section[best], dict):
        _assign(section[best], rest, value)


def apply_env_overrides(config):
    """
    Apply GITSIM_<SECTION>_<KEY> environment variables to ``config``.

    For example GITSIM_DISPLAY_HISTORY_LIMIT=20 sets
    config['display']['history_limit'] to 20.
    """
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX) or name == CONFIG_ENV_VAR:
            continue
        parts = name[len(ENV_PREFIX):].lower().split('_')
        _assign(config, parts, _coerce(value))
    return config
