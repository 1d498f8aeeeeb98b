"""Diagnostics, the compile error hierarchy and Rust-style rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulloak.source import Span


class Severity(Enum):
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str
    style: str = "primary"  # "primary" or "secondary"


@dataclass(frozen=True)
class Suggestion:
    """A suggested fix."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and suggestions."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @classmethod
    def error(cls, code: str, message: str, span: Span | None = None,
              label: str = "") -> Diagnostic:
        labels = [DiagnosticLabel(span=span, message=label)] if span is not None else []
        return cls(severity=Severity.ERROR, code=code, message=message, labels=labels)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors.

    Source lines are looked up in ``sources`` (filename to text) first, so
    trees that never touched the filesystem still get a source excerpt.
    """

    def __init__(self, *, color: bool = True,
                 sources: dict[str, str] | None = None) -> None:
        self.color = color
        self._file_cache: dict[str, list[str]] = {
            name: text.replace("\r\n", "\n").splitlines()
            for name, text in (sources or {}).items()
        }

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def _get_source_line(self, filename: str, line_num: int) -> str | None:
        """Load and cache source file, return the 1-indexed line."""
        if filename not in self._file_cache:
            try:
                path = Path(filename)
                if path.is_file():
                    self._file_cache[filename] = path.read_text(encoding="utf-8").splitlines()
                else:
                    self._file_cache[filename] = []
            except OSError:
                self._file_cache[filename] = []
        lines = self._file_cache[filename]
        if 1 <= line_num <= len(lines):
            return lines[line_num - 1]
        return None

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E302]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            loc = f"{span.file}:{span.start_line}:{span.start_col}"
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} {loc}"
            )
            gutter = f"{span.start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            source_line = self._get_source_line(span.file, span.start_line)
            if source_line is not None:
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}"
                )

            if span.start_line == span.end_line:
                caret_len = max(1, span.end_col - span.start_col + 1)
                padding = " " * (span.start_col - 1)
                carets = "^" * caret_len
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(color)}{carets}{self._c(_RESET)}"
                )
            elif source_line is None:
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        for suggestion in diag.suggestions:
            lines.append(
                f"  {self._c(_BLUE)}try:{self._c(_RESET)} {suggestion.replacement}"
            )

        return "\n".join(lines)


class CompileError(Exception):
    """Compilation error carrying the diagnostics that stopped the pipeline."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")

    @property
    def code(self) -> str | None:
        return self.diagnostics[0].code if self.diagnostics else None

    @property
    def span(self) -> Span | None:
        for diag in self.diagnostics:
            if diag.labels:
                return diag.labels[0].span
        return None


class LexError(CompileError):
    """Malformed token: bad connector glyph, tab, unterminated code span."""


class ParseError(CompileError):
    """Grammar violation: missing root, nested action, unexpected line."""


class SemanticError(CompileError):
    """Well-formed tree that breaks a semantic rule."""


class ConfigError(CompileError):
    """Invalid contract identifier, reported with its 1-based root index."""

    def __init__(self, diagnostics: list[Diagnostic], root_index: int) -> None:
        self.root_index = root_index
        super().__init__(diagnostics)


class CombineError(CompileError):
    """Roots in one input disagree on their module (or submodule) identity."""

    def __init__(self, diagnostics: list[Diagnostic], *, expected: str,
                 found: str, root_index: int) -> None:
        self.expected = expected
        self.found = found
        self.root_index = root_index
        super().__init__(diagnostics)
