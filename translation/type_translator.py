"""
Closure type expression -> TypeScript type translation.

``to_ts_type`` is a pure recursive function over the closed node set of
``jsdoc.type_nodes``. Nullability is erased, since every TypeScript type is
nullable, and optionality is left to the parameter name.

Examples:
    ``Array.<string>``            -> ``Array<string>``
    ``Object.<string, number>``   -> ``{[index: string]: number}``
    ``?goog.structs.Map``         -> ``goog.structs.Map<any, any>``
    ``function(string, number=)`` -> ``(arg0: string, arg1?: number) => void``
"""

from typing import List, Optional, Sequence, Tuple

from jsdoc.type_nodes import (
    AllLiteral,
    ArrayType,
    FieldType,
    FunctionType,
    NameExpression,
    NonNullableType,
    NullableLiteral,
    NullableType,
    NullLiteral,
    OptionalType,
    RecordType,
    RestType,
    TypeApplication,
    TypeNode,
    UndefinedLiteral,
    UnionType,
    VoidLiteral,
)
from translation.config import (
    ANY_TYPE,
    GENERIC_ARITY,
    INDEX_TYPES,
    NON_GENERIC_TYPES,
    OBJECT_TYPE,
    TYPE_RENAMES,
    VOID_TYPE,
)
from translation.errors import TypeApplicationError, UnsupportedTypeError
from translation.names import rename_reserved_segments, sanitize_identifier

UNION_SEPARATOR = "|"
FIELD_SEPARATOR = "; "


def generic_arity(name: str) -> int:
    """Number of type parameters of a known generic container, else 0."""
    return GENERIC_ARITY.get(name, 0)


def rename_type(name: str) -> str:
    """Apply reserved-segment and legacy renames to a type name."""
    renamed = rename_reserved_segments(name)
    return TYPE_RENAMES.get(renamed, renamed)


def to_ts_type(
    node: Optional[TypeNode],
    is_union_member: bool = False,
    is_rest: bool = False,
    is_application_base: bool = False,
) -> str:
    """Translate one Closure type node into a TypeScript type expression.

    Args:
        node: The type node. None (a tag whose type failed to parse)
            translates to ``any``.
        is_union_member: The node is a direct member of a union; function
            types get parenthesized.
        is_rest: The node is the element type of a rest parameter; unions
            get parenthesized.
        is_application_base: The node is the base of a type application;
            generic padding is suppressed.

    Returns:
        The TypeScript type expression.

    Raises:
        UnsupportedTypeError: For node kinds outside the supported grammar.
        TypeApplicationError: For ``Object`` applied to more than two types.
    """
    if node is None:
        return ANY_TYPE

    if isinstance(node, NameExpression):
        type_name = rename_type(node.name)
        arity = generic_arity(node.name)
        if arity and not is_application_base:
            return f"{type_name}<{', '.join([ANY_TYPE] * arity)}>"
        return type_name

    if isinstance(node, (AllLiteral, NullableLiteral)):
        return ANY_TYPE

    if isinstance(node, (VoidLiteral, NullLiteral, UndefinedLiteral)):
        return VOID_TYPE

    if isinstance(node, (OptionalType, NullableType, NonNullableType)):
        # Every TypeScript type is nullable, and optionality belongs to the
        # parameter name.
        return to_ts_type(node.expression, is_union_member=is_union_member, is_rest=is_rest)

    if isinstance(node, UnionType):
        union = UNION_SEPARATOR.join(
            to_ts_type(element, is_union_member=True) for element in node.elements
        )
        if is_rest:
            union = f"({union})"
        return union

    if isinstance(node, RestType):
        expression = node.expression
        if isinstance(expression, ArrayType) and len(expression.elements) == 1:
            expression = expression.elements[0]
        return to_ts_type(expression, is_rest=True) + "[]"

    if isinstance(node, TypeApplication):
        return _type_application(node)

    if isinstance(node, FunctionType):
        params = [
            (argument_name(f"arg{index}", param), to_ts_type(param))
            for index, param in enumerate(node.params)
        ]
        return function_type_string(params, to_ts_type(node.result) if node.result else None, is_union_member)

    if isinstance(node, RecordType):
        return record_type_string(node.fields)

    raise UnsupportedTypeError(f"Unexpected type: {type(node).__name__}")


def _type_application(node: TypeApplication) -> str:
    base = to_ts_type(node.expression, is_application_base=True)
    if base == OBJECT_TYPE:
        return object_index_signature(node.applications)
    if base in NON_GENERIC_TYPES:
        return base

    arguments = [to_ts_type(app) for app in node.applications]
    missing = generic_arity(base) - len(arguments)
    if missing > 0:
        arguments.extend([ANY_TYPE] * missing)
    return f"{base}<{', '.join(arguments)}>"


def object_index_signature(applications: Sequence[TypeNode]) -> str:
    """Translate ``Object.<V>`` / ``Object.<K, V>`` into an index signature.

    Only ``string`` and ``number`` are valid index types; anything else
    degrades to ``string``.
    """
    index_type = "string"
    if len(applications) == 1:
        value_type = to_ts_type(applications[0])
    elif len(applications) == 2:
        index_type = to_ts_type(applications[0])
        value_type = to_ts_type(applications[1])
    else:
        raise TypeApplicationError(
            f"Object cannot accept type application length: {len(applications)}"
        )

    if index_type not in INDEX_TYPES:
        index_type = "string"
    return f"{{[index: {index_type}]: {value_type}}}"


def argument_name(name: str, node: Optional[TypeNode]) -> str:
    """Build a parameter name with its optional (``x?``) or rest (``...x``) marker."""
    name = sanitize_identifier(name)
    if isinstance(node, OptionalType):
        return name + "?"
    if isinstance(node, RestType):
        return "..." + name
    return name


def arguments_string(params: List[Tuple[str, str]]) -> str:
    """``[(name, type), ...]`` -> ``(name: type, ...)``."""
    return "(" + ", ".join(f"{name}: {type_}" for name, type_ in params) + ")"


def function_type_string(
    params: List[Tuple[str, str]],
    result: Optional[str],
    is_union_member: bool = False,
) -> str:
    text = f"{arguments_string(params)} => {result or VOID_TYPE}"
    if is_union_member:
        text = f"({text})"
    return text


def record_type_string(fields: Sequence[FieldType]) -> str:
    return "{" + FIELD_SEPARATOR.join(
        f"{field.key}: {to_ts_type(field.value)}" for field in fields
    ) + "}"
