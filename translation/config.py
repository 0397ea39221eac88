"""
Configuration constants for Closure annotation translation.

Defines the tag vocabulary, namespace filters, and the fixed tables used when
rewriting Closure type names into TypeScript.
"""

from typing import Dict, FrozenSet, Literal, Set

# Tags kept when a documentation comment is parsed
TRANSLATED_TAGS: FrozenSet[str] = frozenset({
    "param",
    "enum",
    "return",
    "private",
    "type",
    "template",
    "typedef",
    "constructor",
    "interface",
    "extends",
    "override",
})

# Tags only consulted when deciding whether a declaration is a function
CLASSIFICATION_TAGS: FrozenSet[str] = frozenset({
    "const",
    "define",
    "dict",
    "implements",
    "struct",
    "this",
})

RECOGNIZED_TAGS: FrozenSet[str] = TRANSLATED_TAGS | CLASSIFICATION_TAGS

# A documented statement with any of these tags is not a function
NON_FUNCTION_TAGS: FrozenSet[str] = frozenset({
    "const",
    "constructor",
    "define",
    "dict",
    "enum",
    "extends",
    "implements",
    "interface",
    "struct",
    "type",
    "typedef",
})

# Tags that give a declaration its own signature or type
SIGNATURE_TAGS: FrozenSet[str] = frozenset({
    "param",
    "return",
    "this",
    "type",
    "template",
})

# Root namespaces whose declarations are translated
ROOT_NAMESPACES: FrozenSet[str] = frozenset({
    "goog",
    "proto2",
    "osapi",
    "svgpan",
})

# Fully-qualified names that are known to break the output
IGNORED_NAMES: FrozenSet[str] = frozenset({
    "goog.debug.LogManager",
    "goog.net.BrowserChannel.LogSaver",
    "goog.net.cookies.MAX_COOKIE_LENGTH",
    "goog.ui.AbstractSpellChecker.prototype.getHandler",
})

# Path segment marking instance members
PROTOTYPE_SEGMENT: str = "prototype"

# Namespace aliasing the global object; never emitted
GLOBAL_NAMESPACE: str = "goog.global"

# Callee of the export directive
PROVIDE_CALLEE: tuple = ("goog", "provide")

# Right-hand sides that mark a placeholder function
NOOP_FUNCTIONS: FrozenSet[str] = frozenset({
    "goog.abstractMethod",
    "goog.nullFunction",
    "goog.functions.TRUE",
    "goog.functions.FALSE",
    "goog.functions.NULL",
})

# Legacy type names that clash with TypeScript's lib.d.ts
TYPE_RENAMES: Dict[str, str] = {
    "EventTarget": "goog.globalEventTarget",
}

# Known generic containers and their number of type parameters
GENERIC_ARITY: Dict[str, int] = {
    "Array": 1,
    "Map": 2,
    "NodeListOf": 1,
    "Set": 1,
    "WeakMap": 2,
    "Thenable": 1,
    "goog.Promise": 2,
    "goog.Thenable": 1,
    "goog.async.Deferred": 1,
    "goog.events.EventHandler": 1,
    "goog.events.EventId": 1,
    "goog.iter.Iterator": 1,
    "goog.structs.Heap": 2,
    "goog.structs.Map": 2,
    "goog.structs.Pool": 1,
    "goog.structs.PriorityPool": 1,
    "goog.structs.Set": 1,
    "goog.structs.TreeNode": 2,
}

# Names whose type arguments are dropped
# Iterable and ArrayLike lose their element type here.
NON_GENERIC_TYPES: FrozenSet[str] = frozenset({
    "Object",
    "goog.iter.Iterable",
    "goog.array.ArrayLike",
})

# Untyped object base turned into an index signature when applied
OBJECT_TYPE: str = "Object"
INDEX_TYPES: FrozenSet[str] = frozenset({"string", "number"})

ANY_TYPE: str = "any"
VOID_TYPE: str = "void"

# Identifiers that cannot be used as parameter names or namespace segments
RESERVED_WORDS: Set[str] = {
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with",
}
RESERVED_SUFFIX: str = "_"

# Class entry kinds
ClassKind = Literal["class", "interface"]
CLASS_KIND: ClassKind = "class"
INTERFACE_KIND: ClassKind = "interface"

# JavaScript file extension and default discovery exclusions
JS_EXTENSIONS: Set[str] = {".js"}
DEFAULT_EXCLUDE_PATTERNS: tuple = (
    "*_test.js",
    "*/demos/*",
    "*/goog/result/*",
    "*/goog/testing/*",
    "*/goog/net/mockiframeio.js",
)
SKIPPED_DIRECTORIES: Set[str] = {"node_modules", "__pycache__", "dist", "out"}

DECLARATION_SUFFIX: str = ".d.ts"
