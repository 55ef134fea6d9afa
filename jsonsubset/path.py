"""Structured tree paths shared by the checker and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Segment = Union[str, int]


@dataclass(frozen=True)
class Path:
    """
    A location in a JSON tree.

    Segments are field names (str) or array indices (int); the root is the
    empty sequence. The canonical string form is ``$`` for the root, with
    ``.name`` appended per field and ``[n]`` per index.
    """
    segments: tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> Path:
        return cls()

    def field(self, name: str) -> Path:
        """Descend into an object field."""
        return Path(self.segments + (name,))

    def index(self, i: int) -> Path:
        """Descend into an array element."""
        return Path(self.segments + (i,))

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def parent(self) -> Path | None:
        if not self.segments:
            return None
        return Path(self.segments[:-1])

    def ancestors(self) -> list[Path]:
        """All strict ancestors, nearest first, ending with the root."""
        return [Path(self.segments[:i]) for i in range(len(self.segments) - 1, -1, -1)]

    def is_ancestor_of(self, other: Path) -> bool:
        """True if ``other`` lies strictly below this path, segment by segment."""
        n = len(self.segments)
        return len(other.segments) > n and other.segments[:n] == self.segments

    def is_descendant_of(self, other: Path) -> bool:
        return other.is_ancestor_of(self)

    def __str__(self) -> str:
        parts = ["$"]
        for segment in self.segments:
            # bool is an int subclass but never a valid index
            if isinstance(segment, int) and not isinstance(segment, bool):
                parts.append(f"[{segment}]")
            else:
                parts.append(f".{segment}")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"

