"""Loading of JSON documents and configuration files."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional, TextIO

import yaml

from .exceptions import ConfigError, LoadError
from .models import CheckerConfig, LogLevel

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"

# The array search holds about three frames per nesting level
MAX_DEPTH_LIMIT = 250


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant: {name}")


def decode_json(text: str, source: str = "<string>") -> Any:
    """
    Decode JSON text into a tree.

    Raises:
        LoadError: on malformed JSON or the NaN/Infinity extensions
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise LoadError(source, str(e))
    except RecursionError:
        raise LoadError(source, "document nested too deeply")


def load_json(source: str, stdin: Optional[TextIO] = None) -> Any:
    """
    Load a JSON document from a file path, or from stdin when ``source`` is "-".

    Raises:
        LoadError: if the source cannot be read or decoded
    """
    if source == STDIN_SOURCE:
        stream = stdin if stdin is not None else sys.stdin
        try:
            text = stream.read()
        except OSError as e:
            raise LoadError("stdin", str(e))
        logger.debug("Read %d characters from stdin", len(text))
        return decode_json(text, "stdin")

    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(source, str(e))

    logger.debug("Read %d characters from %s", len(text), source)
    return decode_json(text, source)


def load_config(config_path: str) -> CheckerConfig:
    """
    Load a CheckerConfig from a YAML (or JSON) file.

    Raises:
        ConfigError: if the file is unreadable, malformed, or has bad keys
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}")

    # JSON is valid YAML, so one parser covers both
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file: {e}")

    return config_from_dict(data or {})


def config_from_dict(data: Any) -> CheckerConfig:
    """Build a CheckerConfig from a plain mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")

    known = {f.name for f in fields(CheckerConfig)}
    for key in data:
        if key not in known:
            raise ConfigError(f"Unknown config key: {key}", key)

    config = CheckerConfig()

    for key in ("max_depth", "indent", "max_value_length"):
        if key in data:
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{key} must be a non-negative integer", key)
            setattr(config, key, value)

    if config.max_depth > MAX_DEPTH_LIMIT:
        raise ConfigError(f"max_depth must be at most {MAX_DEPTH_LIMIT}", "max_depth")

    if "fail_fast" in data:
        if not isinstance(data["fail_fast"], bool):
            raise ConfigError("fail_fast must be a boolean", "fail_fast")
        config.fail_fast = data["fail_fast"]

    if "marker" in data:
        marker = data["marker"]
        if not isinstance(marker, str) or len(marker) != 1 or marker.isspace():
            raise ConfigError("marker must be a single visible character", "marker")
        config.marker = marker

    if "log_level" in data:
        try:
            config.log_level = LogLevel(str(data["log_level"]).upper())
        except ValueError:
            choices = ", ".join(level.value for level in LogLevel)
            raise ConfigError(f"log_level must be one of: {choices}", "log_level")

    return config
