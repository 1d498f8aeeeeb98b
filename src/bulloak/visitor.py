"""Top-down traversal over tree ASTs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from bulloak.ast_nodes import Action, Ast, Condition, Root

T = TypeVar("T")


class Visitor(ABC, Generic[T]):
    """Dispatches on node kind. Subclasses must handle all three kinds."""

    def visit(self, node: Ast) -> T:
        if isinstance(node, Root):
            return self.visit_root(node)
        if isinstance(node, Condition):
            return self.visit_condition(node)
        if isinstance(node, Action):
            return self.visit_action(node)
        raise TypeError(f"not a tree node: {type(node).__name__}")

    @abstractmethod
    def visit_root(self, root: Root) -> T: ...

    @abstractmethod
    def visit_condition(self, condition: Condition) -> T: ...

    @abstractmethod
    def visit_action(self, action: Action) -> T: ...
