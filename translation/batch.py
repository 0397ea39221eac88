"""
High-level orchestrator for declaration generation.

This module provides the entry points for translating single JavaScript
files or entire directory trees into ``.d.ts`` files, combining the per-file
outputs, and optionally checking them with the TypeScript compiler.
"""

import fnmatch
import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.settings import TranslatorSettings
from core.structured_logging import module_scope
from translation.config import (
    DECLARATION_SUFFIX,
    DEFAULT_EXCLUDE_PATTERNS,
    JS_EXTENSIONS,
    SKIPPED_DIRECTORIES,
)
from translation.generator import translate_statements
from translation.parser import count_error_nodes, lower_program, parse_file

logger = logging.getLogger(__name__)


@dataclass
class FileTranslationDiagnostics:
    """Per-file translation diagnostics."""

    output_path: Optional[str]
    declarations: int
    fatal_statements: int
    parse_error_count: int


class TranslationStats:
    """Statistics for a batch translation."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.files_empty = 0
        self.declarations = 0
        self.fatal_statements = 0
        self.parse_errors = 0
        self.failures: List[Dict[str, Any]] = []

    def record_failure(self, file_path: str, error: Exception) -> None:
        self.files_failed += 1
        self.failures.append({
            "file": file_path,
            "error_type": type(error).__name__,
            "message": str(error),
        })

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "files_empty": self.files_empty,
            "declarations": self.declarations,
            "fatal_statements": self.fatal_statements,
            "parse_errors": self.parse_errors,
        }

    def __str__(self) -> str:
        return (
            f"TranslationStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, empty={self.files_empty}, "
            f"declarations={self.declarations}, fatal={self.fatal_statements}, "
            f"parse_errors={self.parse_errors})"
        )


def _posix(path: str) -> str:
    return path.replace(os.sep, "/")


def is_excluded(file_path: str, exclude_patterns: Sequence[str] = DEFAULT_EXCLUDE_PATTERNS) -> bool:
    """Match ``file_path`` (as a posix path) against glob exclusion patterns."""
    posix_path = _posix(file_path)
    return any(fnmatch.fnmatch(posix_path, pattern) for pattern in exclude_patterns)


def discover_js_files(
    directory: str,
    exclude_patterns: Sequence[str] = DEFAULT_EXCLUDE_PATTERNS,
) -> List[str]:
    """Recursively discover JavaScript source files in a directory.

    Hidden and build directories are pruned; files matching any of
    ``exclude_patterns`` are skipped.

    Returns:
        Sorted list of absolute paths.
    """
    js_files = []
    directory = os.path.abspath(directory)

    logger.info("Discovering JavaScript files in %s", directory)

    for root, dirs, files in os.walk(directory):
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in SKIPPED_DIRECTORIES]

        for file in files:
            if os.path.splitext(file)[1] not in JS_EXTENSIONS:
                continue
            path = os.path.join(root, file)
            if is_excluded(path, exclude_patterns):
                logger.debug("Excluded %s", path)
                continue
            js_files.append(path)

    logger.info("Found %d JavaScript files", len(js_files))
    return sorted(js_files)


def declaration_path(file_path: str, source_root: str, output_dir: str) -> str:
    """Map ``<source_root>/a/b.js`` to ``<output_dir>/a/b.d.ts``."""
    relative_path = os.path.relpath(os.path.abspath(file_path), os.path.abspath(source_root))
    stem = os.path.splitext(relative_path)[0]
    return os.path.join(output_dir, stem + DECLARATION_SUFFIX)


def _module_label(file_path: str, source_root: Optional[str]) -> str:
    """Log tag for a source file: its path relative to the source root."""
    file_path = os.path.abspath(file_path)
    source_root = os.path.abspath(source_root) if source_root else os.path.dirname(file_path)
    return _posix(os.path.relpath(file_path, source_root))


def _translate_file_with_diagnostics(
    file_path: str,
    output_dir: str,
    source_root: Optional[str],
    settings: TranslatorSettings,
) -> FileTranslationDiagnostics:
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    if os.path.splitext(file_path)[1] not in JS_EXTENSIONS:
        raise ValueError(
            f"File {file_path} is not a JavaScript source file. "
            f"Expected one of: {JS_EXTENSIONS}"
        )

    source_root = os.path.abspath(source_root) if source_root else os.path.dirname(file_path)
    relative_path = _module_label(file_path, source_root)
    logger.info("Translating %s", relative_path)

    tree, _ = parse_file(file_path)
    parse_error_count = count_error_nodes(tree)
    if tree.root_node.has_error:
        logger.warning(
            "File %s contains syntax errors (%d error nodes)",
            relative_path,
            parse_error_count,
        )

    translation = translate_statements(
        lower_program(tree),
        roots=settings.root_namespaces,
        ignored_names=settings.ignored_names,
        continue_on_error=settings.continue_past_fatal,
        file_path=relative_path,
    )
    text = translation.render(emit_comments=settings.emit_comments)
    declarations = translation.model.declaration_count()
    fatal_statements = len(translation.fatal_results)

    if not text:
        logger.info("No declarations in %s", relative_path)
        return FileTranslationDiagnostics(None, 0, fatal_statements, parse_error_count)

    output_path = declaration_path(file_path, source_root, output_dir)
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)

    logger.info(
        "Wrote %d declarations (%d provides) to %s",
        declarations,
        len(translation.provides),
        output_path,
    )
    return FileTranslationDiagnostics(
        output_path=output_path,
        declarations=declarations,
        fatal_statements=fatal_statements,
        parse_error_count=parse_error_count,
    )


def translate_file(
    file_path: str,
    output_dir: str,
    source_root: Optional[str] = None,
    settings: Optional[TranslatorSettings] = None,
) -> Optional[str]:
    """Translate one JavaScript file into a ``.d.ts`` file.

    Args:
        file_path: Path to the ``.js`` file.
        output_dir: Root of the declaration output tree.
        source_root: Root the output layout mirrors. Defaults to the file's
            parent directory.
        settings: Translator settings; defaults apply when None.

    Returns:
        Path of the written declaration file, or None when the module
        declares nothing.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JavaScript source file.
        ModuleTranslationError: On a fatal statement unless
            ``settings.continue_past_fatal`` is set.
    """
    settings = settings or TranslatorSettings()
    with module_scope(_module_label(file_path, source_root)):
        try:
            return _translate_file_with_diagnostics(
                file_path, output_dir, source_root, settings
            ).output_path
        except Exception as e:
            logger.error("Error translating %s: %s", file_path, e)
            raise


def translate_directory(
    directory: str,
    output_dir: str,
    settings: Optional[TranslatorSettings] = None,
    continue_on_error: bool = True,
) -> Tuple[List[str], TranslationStats]:
    """Translate every JavaScript file under ``directory``.

    Args:
        directory: Source tree root; the output tree mirrors its layout.
        output_dir: Root of the declaration output tree.
        settings: Translator settings; defaults apply when None.
        continue_on_error: If True, keep going after a file fails.
            If False, re-raise the first failure.

    Returns:
        A tuple of (written declaration paths, stats).

    Raises:
        FileNotFoundError: If ``directory`` does not exist.
    """
    settings = settings or TranslatorSettings()
    directory = os.path.abspath(directory)

    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    stats = TranslationStats()
    written: List[str] = []

    js_files = discover_js_files(directory, settings.exclude_patterns)
    if not js_files:
        logger.warning("No JavaScript files found in %s", directory)
        return written, stats

    logger.info("Processing %d JavaScript files from %s", len(js_files), directory)

    for file_path in js_files:
        relative_path = _module_label(file_path, directory)
        with module_scope(relative_path):
            try:
                diagnostics = _translate_file_with_diagnostics(
                    file_path, output_dir, directory, settings
                )
            except Exception as e:
                logger.error("Failed to translate %s: %s", relative_path, e)
                stats.record_failure(relative_path, e)
                if not continue_on_error:
                    raise
                continue

        stats.files_processed += 1
        stats.declarations += diagnostics.declarations
        stats.fatal_statements += diagnostics.fatal_statements
        stats.parse_errors += diagnostics.parse_error_count
        if diagnostics.output_path is None:
            stats.files_empty += 1
        else:
            written.append(diagnostics.output_path)

    logger.info("Translation complete: %s", stats)
    return written, stats


def combine_declarations(
    paths: Sequence[str],
    output_path: str,
    root: Optional[str] = None,
) -> str:
    """Concatenate declaration files into one, in sorted path order.

    Each file's text is preceded by a ``// <path>`` banner, relative to
    ``root`` when given.
    """
    chunks = []
    for path in sorted(paths):
        label = _posix(os.path.relpath(path, root)) if root else _posix(path)
        with open(path, "r", encoding="utf-8") as f:
            body = f.read().rstrip("\n")
        chunks.append(f"// {label}\n{body}\n")

    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write("\n".join(chunks))
    logger.info("Combined %d declaration files into %s", len(chunks), output_path)
    return output_path


def check_declarations(
    path: str,
    tsc_command: Sequence[str] = ("tsc", "--noEmit"),
    timeout_s: int = 600,
) -> Tuple[bool, str]:
    """Type-check a declaration file with the TypeScript compiler.

    Returns:
        ``(ok, output)`` where ``output`` is the compiler's combined output.
        A missing compiler or a timeout is reported as a failed check.
    """
    cmd = [*tsc_command, path]
    logger.info("Running type check: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            check=False,
            text=True,
            capture_output=True,
            timeout=timeout_s,
            stdin=subprocess.DEVNULL,
        )
    except FileNotFoundError as exc:
        logger.error("Type checker not found: %s", tsc_command[0])
        return False, str(exc)
    except subprocess.TimeoutExpired:
        logger.error("Type check timed out after %ds", timeout_s)
        return False, f"timed out after {timeout_s}s"

    output = (completed.stdout or "") + (completed.stderr or "")
    ok = completed.returncode == 0
    if ok:
        logger.info("Type check passed for %s", path)
    else:
        logger.error("Type check failed for %s (exit %d)", path, completed.returncode)
    return ok, output
