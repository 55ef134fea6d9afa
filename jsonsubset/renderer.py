"""Diff-aware pretty-printer for the subset document."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .exceptions import MaxDepthExceededError
from .models import CheckerConfig, DiffEntry, JsonKind, RenderedLine
from .path import Path
from .utils import format_scalar, kind_of, quote


class DiffMarker:
    """
    Decides which rendered lines belong to a failed subtree.

    A line is marked when its path is a diff path, a structural ancestor of
    one, or lies inside the subtree of one. Paths are compared segment by
    segment, so ``$.foo`` never marks ``$.foobar``.
    """

    def __init__(self, diffs: Iterable[DiffEntry]):
        self.diff_paths: set[Path] = set()
        self.ancestor_paths: set[Path] = set()

        for diff in diffs:
            self.diff_paths.add(diff.path)
            self.ancestor_paths.update(diff.path.ancestors())

    def is_marked(self, path: Path) -> bool:
        if path in self.diff_paths or path in self.ancestor_paths:
            return True
        return any(a in self.diff_paths for a in path.ancestors())


class DiffRenderer:
    """
    Renders a JSON tree one structural token per line, keys in sorted order.

    Every line carries the path of the node it renders; the opening and
    closing delimiters of a compound value carry that value's own path.
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or CheckerConfig()

    def lines(self, value: Any) -> list[RenderedLine]:
        """Pretty-print ``value`` into path-tagged lines."""
        out: list[RenderedLine] = []
        self._emit(out, value, Path(), 0, None, "")
        return out

    def render(self, value: Any, diffs: Iterable[DiffEntry]) -> str:
        """Pretty-print ``value`` with a marker column for failed lines."""
        marker = DiffMarker(diffs)
        mark = self.config.marker
        blank = " " * len(mark)
        return "\n".join(
            (mark if marker.is_marked(line.path) else blank) + line.text
            for line in self.lines(value)
        )

    def _emit(
        self,
        out: list[RenderedLine],
        value: Any,
        path: Path,
        depth: int,
        key: Optional[str],
        comma: str
    ):
        indent = " " * (self.config.indent * depth)
        label = f"{quote(key)}: " if key is not None else ""
        kind = kind_of(value)

        if kind == JsonKind.OBJECT:
            out.append(RenderedLine(f"{indent}{label}{{", path))
            keys = sorted(value)
            for i, child_key in enumerate(keys):
                child_comma = "," if i < len(keys) - 1 else ""
                self._emit(out, value[child_key], path.field(child_key),
                           depth + 1, child_key, child_comma)
            out.append(RenderedLine(f"{indent}}}{comma}", path))
        elif kind == JsonKind.ARRAY:
            out.append(RenderedLine(f"{indent}{label}[", path))
            for i, item in enumerate(value):
                child_comma = "," if i < len(value) - 1 else ""
                self._emit(out, item, path.index(i), depth + 1, None, child_comma)
            out.append(RenderedLine(f"{indent}]{comma}", path))
        else:
            out.append(RenderedLine(f"{indent}{label}{format_scalar(value)}{comma}", path))


def render_diff(
    subset: Any,
    diffs: Iterable[DiffEntry],
    config: Optional[CheckerConfig] = None
) -> str:
    """
    Render the subset document annotated with failure markers.

    Args:
        subset: The subset tree that was checked
        diffs: Differences returned by ``check_subset``
        config: Optional configuration (indent width, marker)

    Returns:
        Newline-joined lines, each prefixed with the marker or a space

    Raises:
        MaxDepthExceededError: if the subset is nested beyond what the
            interpreter can walk
    """
    renderer = DiffRenderer(config)
    try:
        return renderer.render(subset, diffs)
    except RecursionError:
        raise MaxDepthExceededError(renderer.config.max_depth, "$")


render = render_diff
