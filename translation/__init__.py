"""
Closure-to-TypeScript declaration translation.

Parses Closure-annotated JavaScript with tree-sitter, classifies each
top-level statement into a declaration model and prints ambient ``.d.ts``
declarations. Batch file handling lives in ``translation.batch``.
"""

from translation.errors import (
    MissingTypeAnnotationError,
    ModuleTranslationError,
    TranslationError,
    TypeApplicationError,
    UnsupportedKeyError,
    UnsupportedStatementError,
    UnsupportedTypeError,
)
from translation.models import DeclarationModel, NamespaceEntry
from translation.parser import create_parser, parse_bytes, parse_file, parse_statements
from translation.generator import (
    ModuleTranslation,
    generate,
    translate_source,
    translate_statements,
)

__all__ = [
    # Errors
    "TranslationError",
    "UnsupportedTypeError",
    "TypeApplicationError",
    "UnsupportedStatementError",
    "UnsupportedKeyError",
    "MissingTypeAnnotationError",
    "ModuleTranslationError",
    # Data models
    "DeclarationModel",
    "NamespaceEntry",
    "ModuleTranslation",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "parse_statements",
    # Translation
    "translate_statements",
    "translate_source",
    "generate",
]
