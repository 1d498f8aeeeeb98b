"""AST node definitions for tree notation.

Nodes own their children; there are no parent links. Spans are excluded
from equality, so two trees that differ only in layout compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from bulloak.source import Span


@dataclass(frozen=True)
class Action:
    """A leaf: one expected outcome, e.g. ``It should revert.``"""

    description: str
    span: Span = field(compare=False)


@dataclass(frozen=True)
class Condition:
    """A branching precondition, e.g. ``When the caller is not the owner``."""

    description: str
    children: list[Branch]
    span: Span = field(compare=False)


@dataclass(frozen=True)
class Root:
    """The top of one tree, naming the contract under test."""

    contract_name: str
    children: list[Branch]
    span: Span = field(compare=False)


Branch = Union[Condition, Action]
Ast = Union[Root, Condition, Action]
