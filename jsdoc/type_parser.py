"""
Closure type expression parser.

Turns the text between the braces of a documentation tag (for example
``!Array.<string>|function(number=): boolean``) into the node tree defined in
``jsdoc.type_nodes``. The grammar is compiled once with Lark's LALR parser;
shift/reduce ambiguities (``?`` followed by ``?``, postfix operators after a
function result) resolve as shift, so modifiers bind to the nearest operand.
"""

from typing import List, NamedTuple

from lark import Lark, Token, Transformer
from lark.exceptions import (
    LarkError,
    UnexpectedCharacters,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

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

_GRAMMAR_SRC = r"""
start: "..." type_union?              -> rest
     | type_union "="                 -> optional
     | type_union

?type_union: type ("|" type)+         -> union
           | type

?type: "?" type                       -> nullable_prefix
     | "!" type                       -> non_nullable_prefix
     | "?"                            -> nullable_literal
     | postfix

?postfix: postfix "?"                 -> nullable_postfix
        | postfix "!"                 -> non_nullable_postfix
        | postfix "[" "]"             -> array_postfix
        | basic

?basic: "*"                           -> all_literal
      | "(" type ("|" type)* ")"      -> group
      | "[" _items? "]"               -> array_literal
      | "{" _fields? "}"              -> record
      | "function" "(" params ")" (":" type)?  -> function
      | NAME ".<" _items? ">"         -> application
      | NAME "<" _items? ">"          -> application
      | NAME                          -> name

_items: type_union ("," type_union)*

params: (param ("," param)*)?

?param: "..." type?                   -> rest
      | NAME ":" type                 -> context_param
      | type_union "="                -> optional
      | type_union

_fields: field ("," field)*

field: key (":" field_value)?

?field_value: type_union "="          -> optional
            | type_union

key: NAME | STRING | NUMBER

NAME: /[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*/
STRING: /'[^']*'|"[^"]*"/
NUMBER: /-?\d+(?:\.\d+)?/

%import common.WS
%ignore WS
"""

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    lexer="basic",
    start="start",
    maybe_placeholders=False,
)

_LITERAL_NAMES = {
    "null": NullLiteral,
    "undefined": UndefinedLiteral,
    "void": VoidLiteral,
}


class TypeExpressionSyntaxError(ValueError):
    """Raised when a type expression cannot be parsed."""

    def __init__(self, message: str, text: str, position: int):
        super().__init__(f"{message} at position {position} in {text!r}")
        self.text = text
        self.position = position


class _ContextParam(NamedTuple):
    """A ``this:T`` or ``new:T`` entry of a function parameter list."""

    kind: str
    type: TypeNode


class _TypeTransformer(Transformer):
    """Lowers the Lark parse tree into ``jsdoc.type_nodes``."""

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def start(self, children):
        return children[0]

    def rest(self, children):
        return RestType(children[0] if children else None)

    def optional(self, children):
        return OptionalType(children[0])

    def union(self, children):
        return UnionType(tuple(children))

    # A parenthesized group is a union even with a single member.
    group = union

    def nullable_prefix(self, children):
        return NullableType(children[0], prefix=True)

    def non_nullable_prefix(self, children):
        return NonNullableType(children[0], prefix=True)

    def nullable_postfix(self, children):
        return NullableType(children[0], prefix=False)

    def non_nullable_postfix(self, children):
        return NonNullableType(children[0], prefix=False)

    def nullable_literal(self, children):
        return NullableLiteral()

    def all_literal(self, children):
        return AllLiteral()

    def array_postfix(self, children):
        return TypeApplication(NameExpression("Array"), (children[0],))

    def array_literal(self, children):
        return ArrayType(tuple(children))

    def name(self, children):
        (token,) = children
        literal = _LITERAL_NAMES.get(str(token))
        if literal is not None:
            return literal()
        return NameExpression(str(token))

    def application(self, children):
        base, *applications = children
        return TypeApplication(NameExpression(str(base)), tuple(applications))

    def params(self, children):
        return list(children)

    def context_param(self, children):
        token, value = children
        if token not in ("this", "new"):
            raise TypeExpressionSyntaxError(
                f"Unexpected parameter label {str(token)!r}", self.text, token.start_pos
            )
        return _ContextParam(str(token), value)

    def function(self, children):
        params: List[TypeNode] = []
        this_type = new_type = None
        for param in children[0]:
            if isinstance(param, _ContextParam):
                if param.kind == "this":
                    this_type = param.type
                else:
                    new_type = param.type
            else:
                params.append(param)
        return FunctionType(
            params=tuple(params),
            result=children[1] if len(children) > 1 else None,
            this_type=this_type,
            new_type=new_type,
        )

    def record(self, children):
        return RecordType(tuple(children))

    def field(self, children):
        return FieldType(key=children[0], value=children[1] if len(children) > 1 else None)

    def key(self, children):
        (token,) = children
        if token.type == "STRING":
            return str(token)[1:-1]
        if token.type == "NAME" and "." in token:
            raise TypeExpressionSyntaxError(
                f"Unsupported record key {str(token)!r}", self.text, token.start_pos
            )
        return str(token)


def _syntax_error(err: LarkError, text: str) -> TypeExpressionSyntaxError:
    if isinstance(err, UnexpectedCharacters):
        position = err.pos_in_stream
        return TypeExpressionSyntaxError(
            f"Unexpected character {text[position]!r}", text, position
        )
    if isinstance(err, UnexpectedToken) and err.token.type != "$END":
        token: Token = err.token
        return TypeExpressionSyntaxError(f"Unexpected token {str(token)!r}", text, token.start_pos)
    if isinstance(err, UnexpectedInput):
        return TypeExpressionSyntaxError("Unexpected end of input", text, len(text))
    return TypeExpressionSyntaxError(str(err), text, 0)


def parse_type(text: str) -> TypeNode:
    """Parse a top-level Closure type expression.

    Args:
        text: The expression without surrounding braces. ``...T`` and ``T=``
            are accepted at the top level, as written in ``@param`` tags.

    Returns:
        The root type node.

    Raises:
        TypeExpressionSyntaxError: If the text is not a valid expression.

    Example:
        >>> parse_type("Array.<string>")
        TypeApplication(expression=NameExpression(name='Array'), applications=(NameExpression(name='string'),))
    """
    stripped = text.strip()
    if not stripped:
        raise TypeExpressionSyntaxError("Empty type expression", text, 0)
    try:
        tree = _PARSER.parse(stripped)
    except LarkError as err:
        raise _syntax_error(err, stripped) from err
    try:
        return _TypeTransformer(stripped).transform(tree)
    except VisitError as err:
        if isinstance(err.orig_exc, TypeExpressionSyntaxError):
            raise err.orig_exc from None
        raise
