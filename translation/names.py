"""
Qualified name resolution.

Flattens the assignment target of a top-level statement into its dotted
segments (``goog.ui.Component.prototype.render`` ->
``["goog", "ui", "Component", "prototype", "render"]``) and applies the root
allow-list and the denylist.
"""

from typing import AbstractSet, List, Optional

from translation.config import (
    IGNORED_NAMES,
    RESERVED_SUFFIX,
    RESERVED_WORDS,
    ROOT_NAMESPACES,
)
from translation.errors import UnsupportedStatementError
from translation.syntax import (
    AssignmentExpression,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    MemberExpression,
    Statement,
    ThisExpression,
    VariableDeclaration,
)


def member_expression_names(expression: Expression) -> Optional[List[str]]:
    """Flatten a member access chain into identifier segments.

    Args:
        expression: An identifier or (nested) member expression.

    Returns:
        The segments in source order, or None if the chain contains a
        computed access, a literal or any other non-identifier part.
    """
    if isinstance(expression, Identifier):
        return [expression.name]
    if isinstance(expression, ThisExpression):
        return []
    if isinstance(expression, MemberExpression):
        if expression.computed or not isinstance(expression.property, Identifier):
            return None
        head = member_expression_names(expression.object)
        if head is None:
            return None
        return head + [expression.property.name]
    return None


def _names_from_expression_statement(statement: ExpressionStatement) -> Optional[List[str]]:
    expression = statement.expression
    if isinstance(expression, AssignmentExpression):
        target = expression.left
    elif isinstance(expression, MemberExpression):
        target = expression
    elif isinstance(expression, CallExpression):
        # goog.provide('...') and friends
        return None
    else:
        raise UnsupportedStatementError(
            f"Unexpected expression: {type(expression).__name__}"
        )
    return member_expression_names(target)


def resolve_full_name(statement: Statement) -> Optional[List[str]]:
    """Resolve the dotted path a statement declares.

    Returns:
        Non-empty list of segments, or None when the statement does not
        declare a statically known name.

    Raises:
        UnsupportedStatementError: For statement or expression kinds the
            translator does not know how to name.
    """
    if isinstance(statement, ExpressionStatement):
        names = _names_from_expression_statement(statement)
    elif isinstance(statement, FunctionDeclaration):
        # Function declarations are module-local in Closure code.
        names = None
    elif isinstance(statement, VariableDeclaration):
        # Closure Library declares nothing with var at the top level.
        names = None
    else:
        kind = getattr(statement, "kind", type(statement).__name__)
        raise UnsupportedStatementError(f"Unexpected statement: {kind}")
    return names or None


def is_allowed_root(names: List[str], roots: AbstractSet[str] = ROOT_NAMESPACES) -> bool:
    return bool(names) and names[0] in roots


def is_ignored(names: List[str], ignored: AbstractSet[str] = IGNORED_NAMES) -> bool:
    return ".".join(names) in ignored


def sanitize_identifier(name: str) -> str:
    """Suffix target reserved words, e.g. ``class`` -> ``class_``."""
    if name in RESERVED_WORDS:
        return name + RESERVED_SUFFIX
    return name


def rename_reserved_segments(dotted_name: str) -> str:
    """Apply ``sanitize_identifier`` to every segment of a dotted name."""
    return ".".join(sanitize_identifier(part) for part in dotted_name.split("."))
