"""YAML config loading with env var expansion and FEED_* overrides."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ClipfeedConfig

# FEED_* variable -> (section, key). Kept compatible with earlier deployments.
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "FEED_TARGET_DIR": ("source", "target_dir"),
    "FEED_PORT": ("server", "port"),
    "FEED_TITLE": ("feed", "title"),
    "FEED_LINK": ("feed", "link"),
    "FEED_DESC": ("feed", "description"),
    "FEED_AUTHOR": ("feed", "author"),
    "FEED_MAX_ITEMS": ("feed", "max_items"),
    "FEED_HIDE_DESCRIPTION": ("feed", "hide_description"),
    "FEED_DEBOUNCE_DELAY": ("watch", "debounce_seconds"),
    "FEED_OUTPUT_DIR": ("output", "directory"),
}

_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_UNITS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def load_config(
    cli_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClipfeedConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    FEED_* environment variables are applied on top of whichever file wins.
    """
    env = os.environ if environ is None else environ
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./clipfeed.yaml"),
        Path.home() / ".clipfeed" / "config.yaml",
    ]

    raw: dict = {}
    source = "environment"
    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            if loaded is None:
                continue
            if not isinstance(loaded, dict):
                raise ValueError(f"Invalid config in {path}: top level must be a mapping")
            raw = _expand_env_vars(loaded, env)
            source = str(path)
            break

    raw = _apply_env_overrides(raw, env)
    try:
        return ClipfeedConfig(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {source}: {e}") from e


def parse_duration(value: str) -> float:
    """Parse seconds from "10", "2.5", "10s", "500ms" or "1m30s"."""
    text = value.strip()
    try:
        return float(text)
    except ValueError:
        pass
    pos = 0
    total = 0.0
    for match in _DURATION_RE.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise ValueError(f"Invalid duration: {value!r}")
    return total


def _apply_env_overrides(raw: dict, env: Mapping[str, str]) -> dict:
    merged = {k: (dict(v) if isinstance(v, dict) else v) for k, v in raw.items()}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value is None or value == "":
            continue
        if var == "FEED_DEBOUNCE_DELAY":
            value = parse_duration(value)
        merged.setdefault(section, {})[key] = value
    return merged


def _expand_env_vars(obj: object, env: Mapping[str, str]) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: env.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v, env) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v, env) for v in obj]
    return obj


# Default YAML template for `clipfeed config init`
DEFAULT_CONFIG_TEMPLATE = """\
# clipfeed.yaml

# Documents to publish
source:
  target_dir: "./"             # root of the clippings tree
  extension: ".md"

# Feed metadata
feed:
  title: "Obsidian Clippings Feed"
  link: "http://localhost:8080"
  description: "RSS feed from Obsidian clippings"
  author: "Obsidian User"
  max_items: 0                 # 0 = unlimited
  hide_description: false

# Generated artifacts
output:
  # directory: "./public"      # default: a temporary directory removed on exit
  formats: [rss, atom, json]

# Change watching
watch:
  debounce_seconds: 10

# Static file server
server:
  host: "0.0.0.0"
  port: 8080

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
