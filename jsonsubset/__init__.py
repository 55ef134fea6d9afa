"""
json-subset - Structural JSON Containment Checker

Decides whether one decoded JSON document is contained in another (every
subset key present with a contained value, arrays compared as sets) and
renders the subset annotated with markers on the lines that failed.
"""

__version__ = "1.0.0"

from .checker import ContainmentChecker, check, check_subset, is_contained
from .renderer import DiffMarker, DiffRenderer, render, render_diff
from .engine import SubsetEngine, compare
from .path import Path
from .models import (
    CheckerConfig,
    CheckReport,
    CheckResult,
    DiffEntry,
    DiffType,
    JsonKind,
    LogLevel,
    RenderedLine,
)
from .exceptions import (
    JsonSubsetError,
    ValidationError,
    MaxDepthExceededError,
    LoadError,
    ConfigError,
)
from .loader import load_json, load_config

__all__ = [
    # Checker
    "ContainmentChecker",
    "check",
    "check_subset",
    "is_contained",
    # Renderer
    "DiffMarker",
    "DiffRenderer",
    "render",
    "render_diff",
    # Engine
    "SubsetEngine",
    "compare",
    # Models
    "Path",
    "CheckerConfig",
    "CheckReport",
    "CheckResult",
    "DiffEntry",
    "DiffType",
    "JsonKind",
    "LogLevel",
    "RenderedLine",
    # Errors
    "JsonSubsetError",
    "ValidationError",
    "MaxDepthExceededError",
    "LoadError",
    "ConfigError",
    # Loading
    "load_json",
    "load_config",
]
