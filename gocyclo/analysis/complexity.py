from __future__ import annotations

from typing import Iterable, Optional

from gocyclo.parsing.treesitter import LITERAL_NODE_TYPES, iter_nodes

# if/else-if, every form of for (counted, range, infinite) and every
# non-default arm of switch, type switch and select.
BRANCH_NODE_TYPES = {
    "if_statement",
    "for_statement",
    "expression_case",
    "type_case",
    "communication_case",
}

LOGICAL_OPERATORS = {"&&", "||"}


def complexity(body: Optional[object]) -> int:
    """McCabe complexity of a function body: 1 plus one per decision point.

    Function literals inside ``body`` are not entered; they are measured on
    their own. A missing body (``func f()`` backed by assembly) scores 1.
    """
    if body is None:
        return 1
    return 1 + sum(1 for _ in decision_points(body))


def decision_points(body) -> Iterable[object]:
    for node in iter_nodes(body, skip=LITERAL_NODE_TYPES):
        if node.type in BRANCH_NODE_TYPES:
            yield node
        elif node.type == "binary_expression" and _operator(node) in LOGICAL_OPERATORS:
            yield node


def _operator(node) -> str:
    operator = node.child_by_field_name("operator")
    if operator is None:
        return ""
    return operator.type
