"""High-level intermediate representation handed to code generators.

A ``Hir`` names a module and holds modifier groups in source order. Each
group is one unique precondition chain and the function entries (one per
action) that share it. Nothing here refers to spans or tokens.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from bulloak.config import Config


@dataclass(frozen=True)
class FunctionEntry:
    description: str
    preconditions: tuple[str, ...]

    @property
    def chain_text(self) -> str:
        """The precondition chain as one line, outermost first."""
        return ", ".join(self.preconditions)


@dataclass
class ModifierGroup:
    preconditions: tuple[str, ...]
    functions: list[FunctionEntry] = field(default_factory=list)
    submodule: str | None = None

    @property
    def is_unconditional(self) -> bool:
        """True for actions hanging directly off the root."""
        return not self.preconditions


@dataclass
class Hir:
    module: str
    submodule: str | None = None
    groups: list[ModifierGroup] = field(default_factory=list)
    config: Config = field(default_factory=Config)

    def contexts(self) -> dict[str | None, list[ModifierGroup]]:
        """Groups per submodule, in first-occurrence order."""
        result: dict[str | None, list[ModifierGroup]] = {}
        for group in self.groups:
            result.setdefault(group.submodule, []).append(group)
        return result

    def functions(self) -> Iterator[FunctionEntry]:
        for group in self.groups:
            yield from group.functions

    @property
    def function_count(self) -> int:
        return sum(1 for _ in self.functions())
