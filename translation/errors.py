"""Fatal errors raised while translating a module."""

from __future__ import annotations

from typing import Optional


class TranslationError(RuntimeError):
    """Base class for errors that abort a module translation."""


class UnsupportedTypeError(TranslationError):
    """A type node of a kind the translator does not handle."""


class TypeApplicationError(TranslationError):
    """A type application the target grammar cannot express."""


class UnsupportedStatementError(TranslationError):
    """A documented top-level statement of an unexpected kind."""


class UnsupportedKeyError(TranslationError):
    """An enum object literal key that is neither identifier nor literal."""


class MissingTypeAnnotationError(TranslationError):
    """A non-assignment declaration without any ``@type`` tag."""


class ModuleTranslationError(TranslationError):
    """A fatal error with the context of the statement that caused it."""

    def __init__(
        self,
        cause: Exception,
        line: int,
        snippet: str,
        file_path: Optional[str] = None,
    ):
        location = f"{file_path}:{line}" if file_path else f"line {line}"
        super().__init__(f"{location}: {cause}\n    {snippet}")
        self.cause = cause
        self.line = line
        self.snippet = snippet
        self.file_path = file_path
