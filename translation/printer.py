"""
TypeScript declaration rendering.

Turns a ``DeclarationModel`` and the provide list of one module into the text
of a ``.d.ts`` file: one ambient ``declare module`` block per namespace,
followed by one ``'goog:<name>'`` export banner per provide.
"""

from typing import List, Optional, Sequence

from jsdoc.comment_parser import unwrap_comment
from translation.models import (
    ClassEntry,
    DeclarationModel,
    EnumEntry,
    FunctionEntry,
    NamespaceEntry,
    TypeAliasEntry,
    VariableEntry,
)
from translation.names import rename_reserved_segments, sanitize_identifier

INDENT = "    "


def _templates(names: Sequence[str]) -> str:
    return f"<{', '.join(names)}>" if names else ""


def _comment_lines(comment: Optional[str], indent: str) -> List[str]:
    if not comment:
        return []
    lines = unwrap_comment(comment).splitlines() or [""]
    return (
        [f"{indent}/**"]
        + [f"{indent} * {line}".rstrip() for line in lines]
        + [f"{indent} */"]
    )


class _Writer:
    def __init__(self, emit_comments: bool):
        self.emit_comments = emit_comments
        self.lines: List[str] = []

    def comment(self, comment: Optional[str], depth: int) -> None:
        if self.emit_comments:
            self.lines.extend(_comment_lines(comment, INDENT * depth))

    def line(self, text: str, depth: int) -> None:
        self.lines.append(f"{INDENT * depth}{text}")


def _variable(writer: _Writer, entry: VariableEntry, depth: int) -> None:
    writer.comment(entry.comment, depth)
    writer.line(f"var {entry.name}: {entry.type};", depth)


def _type_alias(writer: _Writer, entry: TypeAliasEntry, depth: int) -> None:
    writer.comment(entry.comment, depth)
    writer.line(f"type {entry.name} = {entry.type};", depth)


def _enum(writer: _Writer, entry: EnumEntry, depth: int) -> None:
    writer.comment(entry.comment, depth)
    if entry.alias_of and not entry.keys:
        writer.line(f"import {entry.name} = {rename_reserved_segments(entry.alias_of)};", depth)
        return
    writer.line(f"enum {entry.name} {{ {', '.join(entry.keys)} }}", depth)


def _function(writer: _Writer, entry: FunctionEntry, depth: int) -> None:
    writer.comment(entry.comment, depth)
    writer.line(f"function {entry.name}{_templates(entry.templates)}{entry.signature};", depth)


def _member_prefix(is_static: bool) -> str:
    return "static " if is_static else ""


def _class(writer: _Writer, entry: ClassEntry, depth: int) -> None:
    writer.comment(entry.comment, depth)
    header = f"{entry.kind} {entry.name}{_templates(entry.templates)}"
    if entry.parents:
        parents = entry.parents[:1] if entry.is_class else entry.parents
        header += f" extends {', '.join(parents)}"
    writer.line(header + " {", depth)

    if entry.constructor is not None:
        writer.line(f"constructor{entry.constructor};", depth + 1)
    for prop in entry.properties:
        writer.comment(prop.comment, depth + 1)
        writer.line(f"{_member_prefix(prop.is_static)}{prop.name}: {prop.type};", depth + 1)
    for method in entry.methods:
        writer.comment(method.comment, depth + 1)
        writer.line(
            f"{_member_prefix(method.is_static)}{method.name}"
            f"{_templates(method.templates)}{method.signature};",
            depth + 1,
        )
    writer.line("}", depth)


def render_namespace(path: str, namespace: NamespaceEntry, emit_comments: bool = True) -> str:
    """Render one ``declare module <path> { ... }`` block."""
    writer = _Writer(emit_comments)
    writer.line(f"declare module {rename_reserved_segments(path)} {{", 0)
    for variable in namespace.variables:
        _variable(writer, variable, 1)
    for alias in namespace.type_aliases:
        _type_alias(writer, alias, 1)
    for enum in namespace.enums:
        _enum(writer, enum, 1)
    for function in namespace.functions:
        _function(writer, function, 1)
    for entry in namespace.classes:
        _class(writer, entry, 1)
    writer.line("}", 0)
    return "\n".join(writer.lines)


def render_provide(name: str) -> str:
    """Render the export banner mapping ``'goog:<name>'`` to the namespace."""
    alias = sanitize_identifier(name.split(".")[-1])
    return "\n".join([
        f"declare module 'goog:{name}' {{",
        f"{INDENT}import {alias} = {rename_reserved_segments(name)};",
        f"{INDENT}export = {alias};",
        "}",
    ])


def render_declarations(
    model: DeclarationModel,
    provides: Sequence[str],
    emit_comments: bool = True,
) -> str:
    """Render a whole module's declarations.

    Namespaces without declarations are omitted. Provides are rendered in
    encounter order; duplicates are kept. Returns an empty string when there
    is nothing to declare.
    """
    blocks = [
        render_namespace(path, namespace, emit_comments)
        for path, namespace in model.namespaces.items()
        if path and not namespace.is_empty()
    ]
    blocks.extend(render_provide(name) for name in provides)
    return "\n\n".join(blocks) + "\n" if blocks else ""
