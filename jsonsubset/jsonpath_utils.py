"""JSONPath selection for narrowing documents before a check."""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from .exceptions import ValidationError


class JSONPathMatcher:
    """Compiles and evaluates JSONPath expressions with jsonpath-ng."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, expression: str):
        """Compile and cache a JSONPath expression."""
        if expression not in cls._cache:
            try:
                cls._cache[expression] = jsonpath_parse(expression)
            except (JsonPathParserError, JsonPathLexerError) as e:
                raise ValidationError(
                    f"Invalid JSONPath expression '{expression}': {e}",
                    {"expression": expression}
                )
        return cls._cache[expression]

    @classmethod
    def find_values(cls, data: Any, expression: str) -> list[Any]:
        """Find all values matching a JSONPath expression."""
        expr = cls.compile(expression)
        return [m.value for m in expr.find(data)]

    @classmethod
    def select(cls, data: Any, expression: str, label: str = "document") -> Any:
        """
        Return the first value matching ``expression``.

        Raises:
            ValidationError: if the expression is invalid or matches nothing
        """
        values = cls.find_values(data, expression)
        if not values:
            raise ValidationError(
                f"JSONPath '{expression}' matched nothing in {label}",
                {"expression": expression, "document": label}
            )
        return values[0]
