"""Discovery of shared preconditions ("modifiers").

Actions are grouped by the exact chain of ancestor condition descriptions
leading to them. Only whole-chain equality groups actions; a shared prefix
does not. The result is a dict keyed by the chain tuple, so iteration
follows first occurrence in the tree.
"""

from __future__ import annotations

import logging

from bulloak.ast_nodes import Action, Condition, Root
from bulloak.visitor import Visitor

logger = logging.getLogger(__name__)

Chain = tuple[str, ...]
Modifiers = dict[Chain, list[Action]]


class ModifierDiscoverer(Visitor[None]):
    """Collects the actions of one tree by precondition chain."""

    def __init__(self) -> None:
        self.modifiers: Modifiers = {}
        self._chain: list[str] = []

    def discover(self, ast: Root) -> Modifiers:
        self.modifiers = {}
        self._chain = []
        self.visit(ast)
        logger.debug("discovered %d modifier(s) in %r",
                     len(self.modifiers), ast.contract_name)
        return self.modifiers

    def visit_root(self, root: Root) -> None:
        for child in root.children:
            self.visit(child)

    def visit_condition(self, condition: Condition) -> None:
        self._chain.append(condition.description)
        for child in condition.children:
            self.visit(child)
        self._chain.pop()

    def visit_action(self, action: Action) -> None:
        self.modifiers.setdefault(tuple(self._chain), []).append(action)
