"""Semantic analyzer for tree ASTs.

The grammar guarantees shape; this pass enforces the rules a tree must
also follow to produce sensible tests. Rules are plain functions taking a
node and yielding diagnostics, so callers can extend or replace the
catalogue. The first diagnostic stops the analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from bulloak.ast_nodes import Action, Ast, Condition, Root
from bulloak.errors import Diagnostic, DiagnosticLabel, SemanticError
from bulloak.utils import CONTRACT_IDENTIFIER_SEPARATOR, separator_count
from bulloak.visitor import Visitor

logger = logging.getLogger(__name__)

Rule = Callable[[Ast], Iterator[Diagnostic]]


# ── Rules ────────────────────────────────────────────────────────


def check_empty_description(node: Ast) -> Iterator[Diagnostic]:
    """A condition or action needs text after its keyword."""
    if isinstance(node, Root):
        return
    if len(node.description.split(None, 1)) < 2:
        kind = "condition" if isinstance(node, Condition) else "action"
        yield Diagnostic.error(
            "E301", f"found an empty {kind} description", node.span,
            f"'{node.description}' needs a description",
        )


def check_childless_condition(node: Ast) -> Iterator[Diagnostic]:
    """A precondition has to lead somewhere."""
    if isinstance(node, Condition) and not node.children:
        yield Diagnostic.error(
            "E302", f"found a condition with no children: {node.description!r}",
            node.span, "add a nested condition or an action",
        )


def check_duplicate_siblings(node: Ast) -> Iterator[Diagnostic]:
    """Siblings under one parent must be distinguishable."""
    if isinstance(node, Action):
        return
    seen: dict[str, Condition | Action] = {}
    for child in node.children:
        key = " ".join(child.description.split()).casefold()
        first = seen.get(key)
        if first is None:
            seen[key] = child
            continue
        diag = Diagnostic.error(
            "E303", f"found a duplicate sibling: {child.description!r}",
            child.span, "duplicated here",
        )
        diag.labels.append(DiagnosticLabel(first.span, "first defined here", "secondary"))
        yield diag


def check_empty_tree(node: Ast) -> Iterator[Diagnostic]:
    if isinstance(node, Root) and not node.children:
        yield Diagnostic.error(
            "E304", f"found an empty tree: {node.contract_name!r} has no branches",
            node.span,
        )


def check_contract_identifier(node: Ast) -> Iterator[Diagnostic]:
    """Both sides of the separator need a name.

    Identifiers with several separators are left to the separator pre-pass.
    """
    if not isinstance(node, Root) or separator_count(node.contract_name) > 1:
        return
    parts = node.contract_name.split(CONTRACT_IDENTIFIER_SEPARATOR)
    if any(not part.strip() for part in parts):
        yield Diagnostic.error(
            "E305", f"found an empty name in contract identifier {node.contract_name!r}",
            node.span, f"expected text on both sides of '{CONTRACT_IDENTIFIER_SEPARATOR}'",
        )


DEFAULT_RULES: tuple[Rule, ...] = (
    check_contract_identifier,
    check_empty_tree,
    check_empty_description,
    check_childless_condition,
    check_duplicate_siblings,
)


# ── Analyzer ─────────────────────────────────────────────────────


class SemanticAnalyzer(Visitor[None]):
    """Walks a tree pre-order and applies every rule to every node."""

    def __init__(self, rules: tuple[Rule, ...] = DEFAULT_RULES) -> None:
        self.rules = rules

    def analyze(self, ast: Root) -> Root:
        """Validate ``ast`` and return it unchanged. Raises SemanticError."""
        self.visit(ast)
        logger.debug("tree %r passed %d rule(s)", ast.contract_name, len(self.rules))
        return ast

    def _apply(self, node: Ast) -> None:
        for rule in self.rules:
            for diag in rule(node):
                raise SemanticError([diag])

    def visit_root(self, root: Root) -> None:
        self._apply(root)
        for child in root.children:
            self.visit(child)

    def visit_condition(self, condition: Condition) -> None:
        self._apply(condition)
        for child in condition.children:
            self.visit(child)

    def visit_action(self, action: Action) -> None:
        self._apply(action)
