"""Collection of ``goog.provide('...')`` export directives."""

import logging
from typing import Iterable, List, Optional

from translation.config import PROVIDE_CALLEE
from translation.names import member_expression_names
from translation.syntax import CallExpression, ExpressionStatement, Literal, Statement

logger = logging.getLogger(__name__)


def provided_name(statement: Statement) -> Optional[str]:
    """Return the namespace a provide directive exports, or None.

    A provide directive is an expression statement calling exactly
    ``goog.provide`` with one literal argument.
    """
    if not isinstance(statement, ExpressionStatement):
        return None
    call = statement.expression
    if not isinstance(call, CallExpression) or len(call.arguments) != 1:
        return None
    argument = call.arguments[0]
    if not isinstance(argument, Literal):
        return None
    callee = member_expression_names(call.callee)
    if callee is None or tuple(callee) != PROVIDE_CALLEE:
        return None
    return str(argument.value)


def is_provide(statement: Statement) -> bool:
    return provided_name(statement) is not None


def collect_provides(statements: Iterable[Statement]) -> List[str]:
    """Collect provided namespaces in encounter order; duplicates are kept."""
    provides: List[str] = []
    for statement in statements:
        name = provided_name(statement)
        if name is not None:
            provides.append(name)
    logger.debug("Collected %d provide directives", len(provides))
    return provides
