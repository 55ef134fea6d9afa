"""Data models for json-subset."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .path import Path


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class JsonKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def is_compound(self) -> bool:
        return self in (JsonKind.OBJECT, JsonKind.ARRAY)


class DiffType(Enum):
    MISSING_KEY = "MISSING_KEY"
    VALUE_MISMATCH = "VALUE_MISMATCH"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"


@dataclass
class CheckerConfig:
    """Settings shared by the checker, the renderer and the CLI."""
    max_depth: int = 200
    fail_fast: bool = False
    indent: int = 2
    marker: str = "-"
    max_value_length: int = 50
    log_level: LogLevel = LogLevel.WARN


@dataclass
class DiffEntry:
    """A single difference, recorded at the point of failure."""
    path: Path
    type: DiffType
    subset_value: Any
    message: str
    superset_value: Any = None
    has_superset_value: bool = False

    def to_dict(self) -> dict:
        result = {
            "path": str(self.path),
            "type": self.type.value,
            "message": self.message,
            "subset_value": self.subset_value,
        }
        if self.has_superset_value:
            result["superset_value"] = self.superset_value
        return result


@dataclass
class RenderedLine:
    """One pretty-printed line of the subset and the path it renders."""
    text: str
    path: Path


@dataclass
class CheckResult:
    """Verdict and differences from a single containment check."""
    is_contained: bool
    diffs: list[DiffEntry] = field(default_factory=list)
    fields_checked: int = 0

    def _pair(self) -> tuple:
        return (self.is_contained, self.diffs)

    # Behaves as the pair (is_contained, diffs)
    def __iter__(self):
        return iter(self._pair())

    def __getitem__(self, index):
        return self._pair()[index]

    def __len__(self) -> int:
        return 2


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class Summary:
    """Summary statistics of a check."""
    fields_checked: int = 0
    differences_found: int = 0
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "fields_checked": self.fields_checked,
            "differences_found": self.differences_found,
            "by_type": dict(self.by_type),
        }


@dataclass
class CheckReport:
    """Complete result of an engine run."""
    is_contained: bool
    execution: ExecutionInfo
    summary: Summary
    diffs: list[DiffEntry] = field(default_factory=list)
    report: str = ""
    root_expression: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "is_contained": self.is_contained,
            "execution": self.execution.to_dict(),
            "summary": self.summary.to_dict(),
            "diffs": [d.to_dict() for d in self.diffs],
            "report": self.report,
        }
        if self.root_expression:
            result["root"] = self.root_expression
        return result
