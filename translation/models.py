"""
Data models for the translated declaration tree.

A ``DeclarationModel`` maps dotted namespace paths to ``NamespaceEntry``
objects, which own the variables, type aliases, functions, enums and classes
declared directly in that namespace.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from translation.config import CLASS_KIND, ClassKind


@dataclass
class VariableEntry:
    """A namespace variable or a class property.

    Attributes:
        name: Local name.
        type: Translated TypeScript type expression.
        is_static: True for static class properties.
        comment: Originating documentation comment body.
    """

    name: str
    type: str
    is_static: bool = False
    comment: Optional[str] = None


@dataclass
class TypeAliasEntry:
    name: str
    type: str
    comment: Optional[str] = None


@dataclass
class FunctionEntry:
    """A free function or a method.

    ``signature`` is the parameter list followed by ``: <result>``, e.g.
    ``(a: string, b?: number): boolean``.
    """

    name: str
    signature: str
    templates: List[str] = field(default_factory=list)
    is_static: bool = False
    comment: Optional[str] = None


@dataclass
class EnumEntry:
    """An enumeration.

    Attributes:
        name: Local name.
        type: Translated base type of the members.
        keys: Member keys in source property order.
        alias_of: Dotted name of the aliased enum when the declaration
            re-exports another enum instead of listing members.
        comment: Originating documentation comment body.
    """

    name: str
    type: str
    keys: List[str] = field(default_factory=list)
    alias_of: Optional[str] = None
    comment: Optional[str] = None


@dataclass
class ClassEntry:
    """A class or interface.

    Interfaces have no constructor signature. ``parents`` holds every
    ``@extends`` type in declaration order.
    """

    name: str
    kind: ClassKind
    constructor: Optional[str] = None
    parents: List[str] = field(default_factory=list)
    templates: List[str] = field(default_factory=list)
    methods: List[FunctionEntry] = field(default_factory=list)
    properties: List[VariableEntry] = field(default_factory=list)
    comment: Optional[str] = None

    @property
    def is_class(self) -> bool:
        return self.kind == CLASS_KIND


@dataclass
class NamespaceEntry:
    """Everything declared directly inside one namespace."""

    variables: List[VariableEntry] = field(default_factory=list)
    type_aliases: List[TypeAliasEntry] = field(default_factory=list)
    functions: List[FunctionEntry] = field(default_factory=list)
    enums: List[EnumEntry] = field(default_factory=list)
    classes: List[ClassEntry] = field(default_factory=list)
    class_index: Dict[str, ClassEntry] = field(default_factory=dict, repr=False)

    def add_class(self, entry: ClassEntry) -> None:
        """Register a class so later statements can attach members to it."""
        self.classes.append(entry)
        self.class_index[entry.name] = entry

    def find_class(self, name: Optional[str]) -> Optional[ClassEntry]:
        if name is None:
            return None
        return self.class_index.get(name)

    def is_empty(self) -> bool:
        return not (
            self.variables or self.type_aliases or self.functions or self.enums or self.classes
        )

    def declaration_count(self) -> int:
        count = (
            len(self.variables)
            + len(self.type_aliases)
            + len(self.functions)
            + len(self.enums)
            + len(self.classes)
        )
        for entry in self.classes:
            count += len(entry.methods) + len(entry.properties)
        return count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "variables": [asdict(v) for v in self.variables],
            "type_aliases": [asdict(t) for t in self.type_aliases],
            "functions": [asdict(f) for f in self.functions],
            "enums": [asdict(e) for e in self.enums],
            "classes": [asdict(c) for c in self.classes],
        }


@dataclass
class DeclarationModel:
    """Namespace path -> NamespaceEntry, in first-seen order."""

    namespaces: Dict[str, NamespaceEntry] = field(default_factory=dict)

    def namespace(self, path: str) -> NamespaceEntry:
        """Return the entry for ``path``, creating it if needed."""
        entry = self.namespaces.get(path)
        if entry is None:
            entry = self.namespaces[path] = NamespaceEntry()
        return entry

    def get(self, path: str) -> Optional[NamespaceEntry]:
        return self.namespaces.get(path)

    def find_class(self, namespace_path: str, name: str) -> Optional[ClassEntry]:
        entry = self.get(namespace_path)
        return entry.find_class(name) if entry else None

    def declaration_count(self) -> int:
        return sum(ns.declaration_count() for ns in self.namespaces.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a dictionary suitable for JSON serialization."""
        return {path: ns.to_dict() for path, ns in self.namespaces.items()}
