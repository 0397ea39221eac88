"""
Tree-sitter parser initialization and lowering to the translator syntax tree.

This module parses JavaScript source with tree-sitter and converts the
top-level statements of the concrete tree into ``translation.syntax`` nodes,
attaching the comments that precede each statement.
"""

import logging
from typing import List, Tuple

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser, Tree

from translation.syntax import (
    AssignmentExpression,
    CallExpression,
    Comment,
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    Literal,
    MemberExpression,
    ObjectExpression,
    Property,
    Statement,
    ThisExpression,
    TryStatement,
    UnsupportedExpression,
    UnsupportedStatement,
    VariableDeclaration,
)

logger = logging.getLogger(__name__)

# Module-level language constant
JS_LANGUAGE = Language(tsjs.language())

COMMENT_NODE = "comment"
FUNCTION_LITERAL_NODES = {
    "function",
    "function_expression",
    "arrow_function",
    "generator_function",
}
FUNCTION_DECLARATION_NODES = {"function_declaration", "generator_function_declaration"}
VARIABLE_DECLARATION_NODES = {"variable_declaration", "lexical_declaration"}
IDENTIFIER_NODES = {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "undefined",
}


def create_parser() -> Parser:
    """Create a tree-sitter parser for JavaScript.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"goog.provide('a.b');")
    """
    parser = Parser(JS_LANGUAGE)
    logger.debug("Created tree-sitter JavaScript parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of JavaScript source code.

    Raises:
        TypeError: If source is not bytes.
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    tree = create_parser().parse(source)
    if tree.root_node.has_error:
        logger.warning("Parsed tree contains syntax errors")
    logger.debug("Parsed %d bytes of JavaScript", len(source))
    return tree


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a JavaScript file from disk.

    Returns:
        A tuple of (Tree, source_bytes).

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error("File not found: %s", file_path)
        raise
    except IOError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise

    tree = parse_bytes(source_bytes)
    if tree.root_node.has_error:
        logger.warning("File %s contains syntax errors", file_path)
    return tree, source_bytes


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def lower_comment(node: Node) -> Comment:
    """Convert a ``comment`` node, stripping its delimiters."""
    text = _text(node)
    if text.startswith("/*"):
        body = text[2:-2] if text.endswith("*/") and len(text) >= 4 else text[2:]
        return Comment(kind="Block", value=body)
    return Comment(kind="Line", value=text[2:])


def _lower_string(node: Node) -> Literal:
    raw = _text(node)
    fragments = [
        _text(child)
        for child in node.named_children
        if child.type in ("string_fragment", "escape_sequence")
    ]
    value = "".join(fragments) if fragments else raw[1:-1]
    return Literal(value=value, raw=raw)


def _lower_number(node: Node) -> Literal:
    raw = _text(node)
    try:
        value = int(raw, 0)
    except ValueError:
        try:
            value = float(raw)
        except ValueError:
            value = raw
    return Literal(value=value, raw=raw)


def _lower_property_key(node: Node) -> Expression:
    if node.type in IDENTIFIER_NODES:
        return Identifier(_text(node))
    if node.type == "string":
        return _lower_string(node)
    if node.type == "number":
        return _lower_number(node)
    return UnsupportedExpression(node.type)


def _lower_object(node: Node) -> ObjectExpression:
    properties: List[Property] = []
    for child in node.named_children:
        if child.type == "pair":
            key = child.child_by_field_name("key")
            value = child.child_by_field_name("value")
            properties.append(
                Property(
                    key=_lower_property_key(key) if key else UnsupportedExpression("pair"),
                    value=lower_expression(value) if value else None,
                )
            )
        elif child.type == "shorthand_property_identifier":
            identifier = Identifier(_text(child))
            properties.append(Property(key=identifier, value=identifier))
        elif child.type == "method_definition":
            name = child.child_by_field_name("name")
            properties.append(
                Property(
                    key=_lower_property_key(name) if name else UnsupportedExpression("method_definition"),
                    value=FunctionExpression(),
                )
            )
        elif child.type != COMMENT_NODE:
            properties.append(Property(key=UnsupportedExpression(child.type)))
    return ObjectExpression(tuple(properties))


def _lower_function(node: Node) -> FunctionExpression:
    params_node = node.child_by_field_name("parameters")
    names: List[str] = []
    if params_node is not None:
        for param in params_node.named_children:
            if param.type == "identifier":
                names.append(_text(param))
    else:
        single = node.child_by_field_name("parameter")
        if single is not None:
            names.append(_text(single))
    return FunctionExpression(params=tuple(names))


def lower_expression(node: Node) -> Expression:
    """Convert an expression node into a ``translation.syntax`` expression."""
    kind = node.type

    if kind == "parenthesized_expression" and node.named_children:
        return lower_expression(node.named_children[0])
    if kind in IDENTIFIER_NODES:
        return Identifier(_text(node))
    if kind == "this":
        return ThisExpression()
    if kind == "string":
        return _lower_string(node)
    if kind == "number":
        return _lower_number(node)
    if kind in ("true", "false"):
        return Literal(value=(kind == "true"), raw=kind)
    if kind == "null":
        return Literal(value=None, raw="null")
    if kind == "regex":
        return Literal(value=_text(node), raw=_text(node))
    if kind == "member_expression":
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        return MemberExpression(
            object=lower_expression(obj) if obj else UnsupportedExpression("member_expression"),
            property=Identifier(_text(prop)) if prop else UnsupportedExpression("member_expression"),
            computed=False,
        )
    if kind == "subscript_expression":
        obj = node.child_by_field_name("object")
        index = node.child_by_field_name("index")
        return MemberExpression(
            object=lower_expression(obj) if obj else UnsupportedExpression("subscript_expression"),
            property=lower_expression(index) if index else UnsupportedExpression("subscript_expression"),
            computed=True,
        )
    if kind == "assignment_expression":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        return AssignmentExpression(
            left=lower_expression(left) if left else UnsupportedExpression(kind),
            right=lower_expression(right) if right else UnsupportedExpression(kind),
        )
    if kind == "call_expression":
        callee = node.child_by_field_name("function")
        args_node = node.child_by_field_name("arguments")
        args: List[Expression] = []
        if args_node is not None and args_node.type == "arguments":
            args = [
                lower_expression(arg)
                for arg in args_node.named_children
                if arg.type != COMMENT_NODE
            ]
        return CallExpression(
            callee=lower_expression(callee) if callee else UnsupportedExpression(kind),
            arguments=tuple(args),
        )
    if kind in FUNCTION_LITERAL_NODES:
        return _lower_function(node)
    if kind == "object":
        return _lower_object(node)
    return UnsupportedExpression(kind)


def lower_statement(node: Node, comments: List[Comment]) -> Statement:
    """Convert one top-level statement node."""
    kind = node.type
    line = node.start_point.row + 1
    text = _text(node)

    if kind == "expression_statement":
        inner = [child for child in node.named_children if child.type != COMMENT_NODE]
        expression = lower_expression(inner[0]) if inner else UnsupportedExpression(kind)
        return ExpressionStatement(
            expression=expression, line=line, text=text, leading_comments=comments
        )
    if kind in FUNCTION_DECLARATION_NODES:
        name = node.child_by_field_name("name")
        return FunctionDeclaration(
            name=_text(name) if name else "", line=line, text=text, leading_comments=comments
        )
    if kind in VARIABLE_DECLARATION_NODES:
        names = []
        for declarator in node.named_children:
            if declarator.type == "variable_declarator":
                name = declarator.child_by_field_name("name")
                if name is not None:
                    names.append(_text(name))
        return VariableDeclaration(
            names=tuple(names), line=line, text=text, leading_comments=comments
        )
    if kind == "if_statement":
        return IfStatement(line=line, text=text, leading_comments=comments)
    if kind == "try_statement":
        return TryStatement(line=line, text=text, leading_comments=comments)
    return UnsupportedStatement(kind=kind, line=line, text=text, leading_comments=comments)


def lower_program(tree: Tree) -> List[Statement]:
    """Lower every top-level statement of a parsed program, in source order.

    Comments between two statements become the leading comments of the
    second one. Trailing comments at the end of the file are dropped.
    """
    statements: List[Statement] = []
    pending: List[Comment] = []
    for child in tree.root_node.named_children:
        if child.type == COMMENT_NODE:
            pending.append(lower_comment(child))
            continue
        if child.type == "hash_bang_line":
            continue
        statements.append(lower_statement(child, pending))
        pending = []
    return statements


def parse_statements(source: bytes) -> List[Statement]:
    """Parse JavaScript source bytes straight into translator statements."""
    return lower_program(parse_bytes(source))
