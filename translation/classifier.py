"""
Declaration classification.

Walks the top-level statements of one module and records each documented
declaration into a ``DeclarationModel``: classes and interfaces, methods and
free functions, enums, type aliases, and plain variables or properties.

Statements are expected in source order, and a class must be registered
before any statement that attaches a member to it. Members of classes never
registered in this module are dropped.
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, List, Literal, Optional

from jsdoc.comment_parser import DocComment, is_doc_block, parse_comment
from translation.config import (
    ANY_TYPE,
    CLASS_KIND,
    GLOBAL_NAMESPACE,
    IGNORED_NAMES,
    INTERFACE_KIND,
    NON_FUNCTION_TAGS,
    NOOP_FUNCTIONS,
    PROTOTYPE_SEGMENT,
    RECOGNIZED_TAGS,
    ROOT_NAMESPACES,
    SIGNATURE_TAGS,
)
from translation.errors import (
    MissingTypeAnnotationError,
    TranslationError,
    UnsupportedKeyError,
)
from translation.models import (
    ClassEntry,
    DeclarationModel,
    EnumEntry,
    FunctionEntry,
    TypeAliasEntry,
    VariableEntry,
)
from translation.names import is_allowed_root, is_ignored, member_expression_names, resolve_full_name
from translation.provides import is_provide
from translation.signature import (
    constructor_signature,
    function_signature,
    parent_types,
    template_names,
)
from translation.syntax import (
    Comment,
    FunctionExpression,
    Identifier,
    IfStatement,
    Literal as LiteralNode,
    MemberExpression,
    ObjectExpression,
    Statement,
    TryStatement,
    assigned_value,
    first_line,
    is_assignment,
)
from translation.type_translator import to_ts_type

logger = logging.getLogger(__name__)

Outcome = Literal["declared", "skipped", "fatal"]


@dataclass
class StatementResult:
    """What one statement contributed to the model.

    Attributes:
        outcome: ``declared``, ``skipped`` or ``fatal``.
        statement: The statement that was classified.
        reason: Why a statement was skipped, or the error message.
        declared_name: Dotted name of the recorded declaration.
        error: The translation error for fatal results.
    """

    outcome: Outcome
    statement: Statement
    reason: Optional[str] = None
    declared_name: Optional[str] = None
    error: Optional[TranslationError] = None

    @property
    def is_fatal(self) -> bool:
        return self.outcome == "fatal"


@dataclass
class TranslationContext:
    """State threaded through one module pass."""

    model: DeclarationModel = field(default_factory=DeclarationModel)
    roots: AbstractSet[str] = ROOT_NAMESPACES
    ignored_names: AbstractSet[str] = IGNORED_NAMES


def documentation_comment(statement: Statement) -> Optional[Comment]:
    """Last ``/** ... */`` block among the statement's leading comments."""
    docs = [c for c in statement.leading_comments if is_doc_block(c.kind, c.value)]
    return docs[-1] if docs else None


def is_empty_override(doc: DocComment) -> bool:
    """``@override`` with no signature tags and no added description."""
    if not doc.has("override"):
        return False
    if doc.has(*SIGNATURE_TAGS):
        return False
    has_description = bool(doc.description) or any(
        tag.description and tag.description != "*" for tag in doc.tags
    )
    return not has_description


def is_static_member(path: List[str], model: DeclarationModel) -> bool:
    """True if the last segment of ``path`` names a registered class.

    Interfaces have no static members.
    """
    if not path:
        return False
    entry = model.find_class(".".join(path[:-1]), path[-1])
    return entry is not None and entry.kind == CLASS_KIND


def is_function_declaration(statement: Statement, doc: DocComment) -> bool:
    if doc.has("param", "return"):
        return True

    if is_assignment(statement):
        value = assigned_value(statement)
        if isinstance(value, FunctionExpression):
            return True
        if isinstance(value, MemberExpression):
            names = member_expression_names(value)
            return names is not None and ".".join(names) in NOOP_FUNCTIONS
        return False

    return not doc.has(*NON_FUNCTION_TAGS)


def enum_keys(statement: Statement) -> List[str]:
    """Member keys of an object literal enum, in source property order.

    Raises:
        UnsupportedKeyError: For computed or otherwise non-literal keys.
    """
    value = assigned_value(statement)
    if not isinstance(value, ObjectExpression):
        return []
    keys = []
    for prop in value.properties:
        key = prop.key
        if isinstance(key, Identifier):
            keys.append(key.name)
        elif isinstance(key, LiteralNode):
            keys.append(key.raw)
        else:
            raise UnsupportedKeyError(f"Unexpected enum key: {type(key).__name__}")
    return keys


def enum_alias(statement: Statement) -> Optional[str]:
    """Dotted name of the enum this declaration re-exports, if any."""
    value = assigned_value(statement)
    if isinstance(value, (Identifier, MemberExpression)):
        names = member_expression_names(value)
        if names:
            return ".".join(names)
    return None


def variable_type(statement: Statement, doc: DocComment) -> str:
    """Declared ``@type``, or ``any`` for a plain assignment.

    Raises:
        MissingTypeAnnotationError: For an untyped declaration that is not an
            assignment, since nothing can be inferred.
    """
    type_tag = doc.find("type")
    if type_tag is not None:
        return to_ts_type(type_tag.type)
    if is_assignment(statement):
        return ANY_TYPE
    raise MissingTypeAnnotationError(
        "Unsupported type annotations: " + ", ".join(f"@{t.title}" for t in doc.tags)
    )


def _skip(statement: Statement, reason: str) -> StatementResult:
    logger.debug("Line %d skipped: %s", statement.line, reason)
    return StatementResult(outcome="skipped", statement=statement, reason=reason)


def _classify(statement: Statement, context: TranslationContext) -> StatementResult:
    if isinstance(statement, (IfStatement, TryStatement)):
        # TODO: look inside top-level if/try blocks once a corpus needs it.
        return _skip(statement, "conditional or exception-handling statement")
    if is_provide(statement):
        return _skip(statement, "provide directive")

    comment = documentation_comment(statement)
    if comment is None:
        return _skip(statement, "no documentation comment")

    doc = parse_comment(comment.value, tags=RECOGNIZED_TAGS)
    tags = doc.tags
    typedef_tag = doc.find("typedef")
    enum_tag = doc.find("enum")
    is_class = doc.has("constructor")
    is_interface = doc.has("interface")

    if doc.has("private"):
        if is_class:
            # Keep the shape available to type references.
            is_class = False
            is_interface = True
        elif typedef_tag is None and enum_tag is None:
            return _skip(statement, "private declaration")

    path = resolve_full_name(statement)
    if path is None:
        return _skip(statement, "no statically known name")
    full_name = ".".join(path)
    if not is_allowed_root(path, context.roots):
        return _skip(statement, f"root namespace of {full_name} is not translated")
    if is_ignored(path, context.ignored_names):
        return _skip(statement, f"{full_name} is on the ignore list")

    name = path.pop()
    class_name: Optional[str] = None
    is_static = False
    if path and path[-1] == PROTOTYPE_SEGMENT:
        if is_empty_override(doc):
            return _skip(statement, f"empty override {full_name}")
        path.pop()
        class_name = path.pop() if path else None
    elif is_static_member(path, context.model):
        if not (is_class or is_interface or enum_tag or typedef_tag):
            class_name = path.pop()
            is_static = True

    namespace_path = ".".join(path)
    if namespace_path == GLOBAL_NAMESPACE:
        return _skip(statement, f"{full_name} is declared on the global object")

    model = context.model
    class_entry = model.find_class(namespace_path, class_name) if class_name else None
    if class_name and class_entry is None:
        return _skip(statement, f"{full_name} belongs to unregistered class {class_name}")
    namespace = model.namespace(namespace_path)

    if is_class or is_interface:
        namespace.add_class(
            ClassEntry(
                name=name,
                kind=CLASS_KIND if is_class else INTERFACE_KIND,
                constructor=constructor_signature(tags) if is_class else None,
                parents=parent_types(tags),
                templates=template_names(tags),
                comment=comment.value,
            )
        )
    elif is_function_declaration(statement, doc):
        function = FunctionEntry(
            name=name,
            signature=function_signature(tags),
            templates=template_names(tags),
            is_static=is_static,
            comment=comment.value,
        )
        if class_entry is not None:
            class_entry.methods.append(function)
        else:
            namespace.functions.append(function)
    elif enum_tag is not None:
        namespace.enums.append(
            EnumEntry(
                name=name,
                type=to_ts_type(enum_tag.type),
                keys=enum_keys(statement),
                alias_of=enum_alias(statement),
                comment=comment.value,
            )
        )
    elif typedef_tag is not None:
        namespace.type_aliases.append(
            TypeAliasEntry(name=name, type=to_ts_type(typedef_tag.type), comment=comment.value)
        )
    else:
        variable = VariableEntry(
            name=name,
            type=variable_type(statement, doc),
            is_static=is_static,
            comment=comment.value,
        )
        if class_entry is not None:
            class_entry.properties.append(variable)
        else:
            namespace.variables.append(variable)

    return StatementResult(outcome="declared", statement=statement, declared_name=full_name)


def classify_statement(statement: Statement, context: TranslationContext) -> StatementResult:
    """Classify one statement and record it into ``context.model``.

    Translation errors are returned as a ``fatal`` result instead of being
    raised, so the caller decides whether the module pass continues.
    """
    try:
        return _classify(statement, context)
    except TranslationError as exc:
        logger.error("Line %d: %s\n    %s", statement.line, exc, first_line(statement))
        return StatementResult(
            outcome="fatal", statement=statement, reason=str(exc), error=exc
        )
