"""Utility functions for json-subset."""

from __future__ import annotations

import json
import math
from typing import Any

from .exceptions import ValidationError
from .models import JsonKind
from .path import Path


def kind_of(value: Any) -> JsonKind:
    """
    Classify a decoded JSON value.

    Raises:
        ValidationError: if the value is not something ``json.loads`` produces
    """
    if value is None:
        return JsonKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, list):
        return JsonKind.ARRAY
    raise ValidationError(
        f"Not a JSON value: {type(value).__name__}",
        {"type": type(value).__name__}
    )


def numbers_equal(a: int | float, b: int | float) -> bool:
    """Exact equality on the double-precision representation of two numbers."""
    try:
        return float(a) == float(b)
    except OverflowError:
        return a == b


def format_number(value: int | float) -> str:
    """Render a number: integral values below 1e16 without a decimal point."""
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return json.dumps(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def quote(text: str) -> str:
    """JSON-quote a string or key."""
    return json.dumps(text, ensure_ascii=False)


def format_scalar(value: Any) -> str:
    """Render a scalar JSON value as a JSON token."""
    kind = kind_of(value)
    if kind == JsonKind.NULL:
        return "null"
    if kind == JsonKind.BOOLEAN:
        return "true" if value else "false"
    if kind == JsonKind.NUMBER:
        return format_number(value)
    if kind == JsonKind.STRING:
        return quote(value)
    raise ValidationError(f"Not a scalar: {kind.value}", {"kind": kind.value})


def _compact(value: Any) -> str:
    kind = kind_of(value)
    if kind == JsonKind.OBJECT:
        items = (f"{quote(k)}:{_compact(value[k])}" for k in sorted(value))
        return "{" + ",".join(items) + "}"
    if kind == JsonKind.ARRAY:
        return "[" + ",".join(_compact(v) for v in value) + "]"
    return format_scalar(value)


def format_value(value: Any, max_length: int = 50) -> str:
    """Compact single-line JSON for messages, truncated to ``max_length``."""
    text = _compact(value)
    if max_length > 3 and len(text) > max_length:
        return text[:max_length - 3] + "..."
    return text


def validate_json_tree(value: Any, path: Path = Path()) -> None:
    """
    Check that a value is a decoded JSON tree.

    Raises:
        ValidationError: on a non-JSON object, a non-string key or a
            non-finite number; ``details`` carries the offending path
    """
    stack = [(value, path)]
    while stack:
        node, node_path = stack.pop()
        try:
            kind = kind_of(node)
        except ValidationError as e:
            e.details["path"] = str(node_path)
            raise
        if isinstance(node, float) and not math.isfinite(node):
            raise ValidationError(
                f"Non-finite number at {node_path}",
                {"path": str(node_path), "value": repr(node)}
            )
        if kind == JsonKind.OBJECT:
            for key, child in node.items():
                if not isinstance(key, str):
                    raise ValidationError(
                        f"Object key must be a string at {node_path}",
                        {"path": str(node_path), "key": repr(key)}
                    )
                stack.append((child, node_path.field(key)))
        elif kind == JsonKind.ARRAY:
            for i, child in enumerate(node):
                stack.append((child, node_path.index(i)))
