"""
Syntax tree handed to the translator.

A deliberately small, closed subset of ESTree: only the statement and
expression kinds the translator looks at are modelled, everything else is
kept as an ``Unsupported*`` placeholder carrying the original node kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal as TypingLiteral, Optional, Union


@dataclass(frozen=True)
class Comment:
    """A source comment; ``value`` excludes the ``/* */`` or ``//`` delimiters."""

    kind: TypingLiteral["Block", "Line"]
    value: str


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class ThisExpression:
    pass


@dataclass(frozen=True)
class Literal:
    value: Any
    raw: str


@dataclass(frozen=True)
class MemberExpression:
    object: "Expression"
    property: "Expression"
    computed: bool = False


@dataclass(frozen=True)
class AssignmentExpression:
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class CallExpression:
    callee: "Expression"
    arguments: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class FunctionExpression:
    params: tuple[str, ...] = ()


@dataclass(frozen=True)
class Property:
    key: "Expression"
    value: Optional["Expression"] = None


@dataclass(frozen=True)
class ObjectExpression:
    properties: tuple[Property, ...] = ()


@dataclass(frozen=True)
class UnsupportedExpression:
    kind: str


Expression = Union[
    Identifier,
    ThisExpression,
    Literal,
    MemberExpression,
    AssignmentExpression,
    CallExpression,
    FunctionExpression,
    ObjectExpression,
    UnsupportedExpression,
]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass
class ExpressionStatement:
    expression: Expression
    line: int = 0
    text: str = ""
    leading_comments: List[Comment] = field(default_factory=list)


@dataclass
class FunctionDeclaration:
    name: str
    line: int = 0
    text: str = ""
    leading_comments: List[Comment] = field(default_factory=list)


@dataclass
class VariableDeclaration:
    names: tuple[str, ...] = ()
    line: int = 0
    text: str = ""
    leading_comments: List[Comment] = field(default_factory=list)


@dataclass
class IfStatement:
    line: int = 0
    text: str = ""
    leading_comments: List[Comment] = field(default_factory=list)


@dataclass
class TryStatement:
    line: int = 0
    text: str = ""
    leading_comments: List[Comment] = field(default_factory=list)


@dataclass
class UnsupportedStatement:
    kind: str
    line: int = 0
    text: str = ""
    leading_comments: List[Comment] = field(default_factory=list)


Statement = Union[
    ExpressionStatement,
    FunctionDeclaration,
    VariableDeclaration,
    IfStatement,
    TryStatement,
    UnsupportedStatement,
]


def is_assignment(statement: Statement) -> bool:
    """True for ``target = value;`` expression statements."""
    return isinstance(statement, ExpressionStatement) and isinstance(
        statement.expression, AssignmentExpression
    )


def assigned_value(statement: Statement) -> Optional[Expression]:
    """Right-hand side of an assignment statement, or None."""
    if is_assignment(statement):
        return statement.expression.right
    return None


def first_line(statement: Statement, limit: int = 120) -> str:
    """Short single-line rendering of the statement source for diagnostics."""
    text = statement.text.strip().splitlines()[0] if statement.text.strip() else ""
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text or type(statement).__name__
