"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A range within a tree source, 1-indexed with an inclusive end column."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"

    def to(self, other: Span) -> Span:
        """Return the span covering from the start of self to the end of other."""
        return Span(
            self.file,
            self.start_line, self.start_col,
            other.end_line, other.end_col,
        )


class SourceText:
    """Tree source held in memory with line access for diagnostics."""

    def __init__(self, content: str, filename: str = "<stdin>") -> None:
        self.filename = filename
        self.content = content
        self.lines = content.splitlines()

    @classmethod
    def from_path(cls, path: Path) -> SourceText:
        return cls(path.read_text(encoding="utf-8"), str(path))

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

