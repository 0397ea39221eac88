"""
Data models for Closure type expressions.

The embedded annotation grammar is a closed set of node kinds. Each kind is a
small dataclass; consumers dispatch on the concrete class and treat any other
object as an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class NameExpression:
    """Reference to a named type, e.g. ``goog.events.Event``."""

    name: str


@dataclass(frozen=True)
class AllLiteral:
    """The ``*`` wildcard."""


@dataclass(frozen=True)
class NullableLiteral:
    """A lone ``?`` (unknown type)."""


@dataclass(frozen=True)
class VoidLiteral:
    pass


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class UndefinedLiteral:
    pass


@dataclass(frozen=True)
class OptionalType:
    """``T=``: an optional parameter or record field."""

    expression: Optional["TypeNode"]


@dataclass(frozen=True)
class NullableType:
    """``?T`` or ``T?``."""

    expression: "TypeNode"
    prefix: bool = True


@dataclass(frozen=True)
class NonNullableType:
    """``!T`` or ``T!``."""

    expression: "TypeNode"
    prefix: bool = True


@dataclass(frozen=True)
class UnionType:
    elements: tuple["TypeNode", ...]


@dataclass(frozen=True)
class RestType:
    """``...T``. ``expression`` is None for a bare ``...``."""

    expression: Optional["TypeNode"]


@dataclass(frozen=True)
class ArrayType:
    """``[A, B]`` tuple-like literal. Only meaningful as ``...[T]``."""

    elements: tuple["TypeNode", ...]


@dataclass(frozen=True)
class TypeApplication:
    """``Base.<A, B>``."""

    expression: "TypeNode"
    applications: tuple["TypeNode", ...]


@dataclass(frozen=True)
class FunctionType:
    """``function(this:T, A, B=): R``.

    ``this_type`` and ``new_type`` are kept out of ``params`` so positional
    indices only count ordinary parameters.
    """

    params: tuple["TypeNode", ...]
    result: Optional["TypeNode"] = None
    this_type: Optional["TypeNode"] = None
    new_type: Optional["TypeNode"] = None


@dataclass(frozen=True)
class FieldType:
    """One ``key: value`` pair of a record. ``value`` is None for ``{key}``."""

    key: str
    value: Optional["TypeNode"] = None


@dataclass(frozen=True)
class RecordType:
    fields: tuple[FieldType, ...] = field(default_factory=tuple)


TypeNode = Union[
    NameExpression,
    AllLiteral,
    NullableLiteral,
    VoidLiteral,
    NullLiteral,
    UndefinedLiteral,
    OptionalType,
    NullableType,
    NonNullableType,
    UnionType,
    RestType,
    ArrayType,
    TypeApplication,
    FunctionType,
    RecordType,
]
