"""
Per-module translation.

Runs the provide collector and the declaration classifier over the statements
of one module and hands both results to the printer.
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, List, Optional, Sequence

from translation.classifier import StatementResult, TranslationContext, classify_statement
from translation.config import IGNORED_NAMES, ROOT_NAMESPACES
from translation.errors import ModuleTranslationError
from translation.models import DeclarationModel
from translation.parser import parse_statements
from translation.printer import render_declarations
from translation.provides import collect_provides
from translation.syntax import Statement, first_line

logger = logging.getLogger(__name__)


@dataclass
class ModuleTranslation:
    """Result of translating one module."""

    model: DeclarationModel
    provides: List[str]
    results: List[StatementResult] = field(default_factory=list)

    @property
    def fatal_results(self) -> List[StatementResult]:
        return [result for result in self.results if result.is_fatal]

    def count(self, outcome: str) -> int:
        return sum(1 for result in self.results if result.outcome == outcome)

    def render(self, emit_comments: bool = True) -> str:
        return render_declarations(self.model, self.provides, emit_comments=emit_comments)


def translate_statements(
    statements: Sequence[Statement],
    roots: AbstractSet[str] = ROOT_NAMESPACES,
    ignored_names: AbstractSet[str] = IGNORED_NAMES,
    continue_on_error: bool = False,
    file_path: Optional[str] = None,
) -> ModuleTranslation:
    """Translate one module's top-level statements in a single pass.

    Args:
        statements: Top-level statements in source order.
        roots: Root namespaces to translate.
        ignored_names: Fully-qualified names to drop.
        continue_on_error: If False (default), the first fatal statement
            aborts the module. If True, fatal statements are recorded in
            ``results`` and the pass continues.
        file_path: Source path used in error messages.

    Raises:
        ModuleTranslationError: On the first fatal statement unless
            ``continue_on_error`` is set.
    """
    provides = collect_provides(statements)
    context = TranslationContext(roots=roots, ignored_names=ignored_names)
    translation = ModuleTranslation(model=context.model, provides=provides)

    for statement in statements:
        result = classify_statement(statement, context)
        translation.results.append(result)
        if result.is_fatal and not continue_on_error:
            raise ModuleTranslationError(
                result.error, statement.line, first_line(statement), file_path
            ) from result.error

    logger.debug(
        "Translated %d statements: %d declared, %d skipped, %d fatal",
        len(translation.results),
        translation.count("declared"),
        translation.count("skipped"),
        translation.count("fatal"),
    )
    return translation


def translate_source(
    source: bytes,
    file_path: Optional[str] = None,
    roots: AbstractSet[str] = ROOT_NAMESPACES,
    ignored_names: AbstractSet[str] = IGNORED_NAMES,
    continue_on_error: bool = False,
) -> ModuleTranslation:
    """Parse JavaScript source and translate it."""
    return translate_statements(
        parse_statements(source),
        roots=roots,
        ignored_names=ignored_names,
        continue_on_error=continue_on_error,
        file_path=file_path,
    )


def generate(
    source: bytes,
    file_path: Optional[str] = None,
    roots: AbstractSet[str] = ROOT_NAMESPACES,
    ignored_names: AbstractSet[str] = IGNORED_NAMES,
    continue_on_error: bool = False,
    emit_comments: bool = True,
) -> str:
    """Translate JavaScript source into TypeScript declaration text.

    Example:
        >>> print(generate(b"goog.provide('goog.a');\\n/** @type {number} */\\ngoog.a.x = 1;"))
        declare module goog.a {
            /**
             * @type {number}
             */
            var x: number;
        }
        ...
    """
    translation = translate_source(
        source,
        file_path=file_path,
        roots=roots,
        ignored_names=ignored_names,
        continue_on_error=continue_on_error,
    )
    return translation.render(emit_comments=emit_comments)
