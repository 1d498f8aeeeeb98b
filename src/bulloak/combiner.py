"""Merges the per-tree ``Hir`` values of one input into a single ``Hir``.

All roots in one input must name the same module. Module consistency is
tracked with ``ModuleName``; once it reaches ``Mismatch`` the merge stops
and the mismatch is reported. Groups are appended in root order, then in
first-occurrence order within each root.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from bulloak.config import Config
from bulloak.errors import CombineError, Diagnostic
from bulloak.hir import Hir, ModifierGroup
from bulloak.source import Span
from bulloak.splitter import normalize, split_trees

logger = logging.getLogger(__name__)


# ── Module name consistency ──────────────────────────────────────


@dataclass(frozen=True)
class Empty:
    """No root seen yet."""


@dataclass(frozen=True)
class Consistent:
    name: str


@dataclass(frozen=True)
class Mismatch:
    expected: str
    found: str


ModuleName = Union[Empty, Consistent, Mismatch]


def observe_module(state: ModuleName, name: str) -> ModuleName:
    """Fold one more root's module name into the running state."""
    if isinstance(state, Empty):
        return Consistent(name)
    if isinstance(state, Consistent) and state.name != name:
        return Mismatch(state.name, name)
    return state


# ── Combiner ─────────────────────────────────────────────────────


class Combiner:
    """Combines the translated trees of one input, in source order."""

    def __init__(self, filename: str = "<stdin>") -> None:
        self.filename = filename

    def combine(self, text: str, hirs: Iterable[Hir]) -> Hir:
        """Merge ``hirs`` into one Hir. Raises CombineError.

        ``text`` is the original source, used to point diagnostics at the
        offending root.
        """
        state: ModuleName = Empty()
        first_submodule: str | None = None
        groups: list[ModifierGroup] = []
        config: Config | None = None
        count = 0

        for index, hir in enumerate(hirs, start=1):
            state = observe_module(state, hir.module)
            if isinstance(state, Mismatch):
                raise self._mismatch(text, index, state)

            if index == 1:
                first_submodule = hir.submodule
            elif (hir.submodule is None) != (first_submodule is None):
                raise self._submodule_mismatch(text, index, first_submodule, hir.submodule)

            groups.extend(hir.groups)
            if config is None:
                config = hir.config
            count = index

        if not isinstance(state, Consistent):
            raise ValueError("cannot combine an empty sequence of trees")

        submodules = {group.submodule for group in groups}
        submodule = submodules.pop() if len(submodules) == 1 else None
        logger.debug("combined %d tree(s) into module %r", count, state.name)
        return Hir(
            module=state.name,
            submodule=submodule,
            groups=groups,
            config=config or Config(),
        )

    def _root_span(self, text: str, index: int) -> Span | None:
        slices = split_trees(normalize(text), self.filename)
        if index > len(slices):
            return None
        line, root = slices[index - 1].root_line()
        start = len(root) - len(root.lstrip()) + 1
        return Span(self.filename, line, start, line, max(start, len(root.rstrip())))

    def _mismatch(self, text: str, index: int, state: Mismatch) -> CombineError:
        diag = Diagnostic.error(
            "E501",
            f"contract name mismatch at tree root #{index}: "
            f"expected '{state.expected}', found '{state.found}'",
            self._root_span(text, index),
            f"expected '{state.expected}'",
        )
        diag.notes.append("all trees in one input must share the same contract name")
        return CombineError([diag], expected=state.expected, found=state.found,
                            root_index=index)

    def _submodule_mismatch(self, text: str, index: int, expected: str | None,
                            found: str | None) -> CombineError:
        expected_text = "a submodule" if expected is not None else "no submodule"
        found_text = f"submodule '{found}'" if found is not None else "no submodule"
        diag = Diagnostic.error(
            "E502",
            f"submodule mismatch at tree root #{index}: "
            f"expected {expected_text}, found {found_text}",
            self._root_span(text, index),
        )
        diag.notes.append(
            "either every root names a submodule ('Contract::function') or none does"
        )
        return CombineError([diag], expected=expected or "", found=found or "",
                            root_index=index)
