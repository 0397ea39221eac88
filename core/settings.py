"""Translator settings.

Loads an optional YAML/JSON settings file that overrides the namespace
filters, discovery exclusions and output options. Missing or malformed files
fall back to defaults unless strict validation is enabled, in which case a
``ConfigValidationError`` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from translation.config import DEFAULT_EXCLUDE_PATTERNS, IGNORED_NAMES, ROOT_NAMESPACES

logger = logging.getLogger(__name__)

# Load .env file (idempotent; does nothing if already loaded or missing)
load_dotenv()

CONFIG_PATH_ENV = "CLOSURE_DTS_CONFIG"
STRICT_ENV = "STRICT_CONFIG_VALIDATION"


class ConfigValidationError(RuntimeError):
    """Raised when strict settings validation fails."""


@dataclass(frozen=True)
class TranslatorSettings:
    """Options for a translation run."""

    root_namespaces: frozenset[str] = ROOT_NAMESPACES
    ignored_names: frozenset[str] = IGNORED_NAMES
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    continue_past_fatal: bool = False
    emit_comments: bool = True
    output_dir: str = "output/dts"
    combined_output: Optional[str] = None
    tsc_command: tuple[str, ...] = field(default=("tsc", "--noEmit"))


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag(STRICT_ENV, default=default)


def resolve_config_path(explicit: Optional[str] = None) -> Optional[str]:
    """Explicit path first, then ``CLOSURE_DTS_CONFIG``."""
    return explicit or os.getenv(CONFIG_PATH_ENV) or None


def _fail(msg: str, strict: bool, exc: Optional[Exception] = None) -> dict[str, Any]:
    if strict:
        raise ConfigValidationError(msg) from exc
    logger.warning("%s; continuing with defaults", msg)
    return {}


def _load_payload(path: str, strict: bool) -> dict[str, Any]:
    settings_path = Path(path)
    try:
        text = settings_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        return _fail(f"Settings file not found: {settings_path}", strict, exc)

    try:
        if settings_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        return _fail(f"Failed to parse settings at {settings_path}: {exc}", strict, exc)

    if payload is None:
        return _fail(f"Settings file is empty: {settings_path}", strict)
    if not isinstance(payload, dict):
        return _fail(
            f"Unexpected settings payload type: {type(payload).__name__}", strict
        )
    return payload


def _string_list(payload: dict[str, Any], key: str, strict: bool) -> Optional[list[str]]:
    raw = payload.get(key)
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(item, str) and item.strip() for item in raw):
        _fail(f"'{key}' must be a list of non-empty strings", strict)
        return None
    return [item.strip() for item in raw]


def load_settings(path: Optional[str] = None, strict: Optional[bool] = None) -> TranslatorSettings:
    """Load settings from ``path`` (or ``CLOSURE_DTS_CONFIG``) over the defaults.

    Args:
        path: Settings file; ``.json`` is read as JSON, anything else as YAML.
        strict: Raise on invalid settings instead of warning. Defaults to
            the ``STRICT_CONFIG_VALIDATION`` environment flag.

    Raises:
        ConfigValidationError: In strict mode, for a missing, unparsable or
            invalid settings file.
    """
    if strict is None:
        strict = resolve_strict_config_validation()
    settings = TranslatorSettings()
    config_path = resolve_config_path(path)
    if config_path is None:
        return settings

    payload = _load_payload(config_path, strict)
    if not payload:
        return settings

    overrides: dict[str, Any] = {}
    roots = _string_list(payload, "root_namespaces", strict)
    if roots is not None:
        if not roots:
            _fail("'root_namespaces' must not be empty", strict)
        else:
            overrides["root_namespaces"] = frozenset(roots)
    ignored = _string_list(payload, "ignored_names", strict)
    if ignored is not None:
        overrides["ignored_names"] = frozenset(ignored)
    excludes = _string_list(payload, "exclude_patterns", strict)
    if excludes is not None:
        overrides["exclude_patterns"] = tuple(excludes)
    tsc = _string_list(payload, "tsc_command", strict)
    if tsc:
        overrides["tsc_command"] = tuple(tsc)

    for key in ("continue_past_fatal", "emit_comments"):
        if key not in payload:
            continue
        if isinstance(payload[key], bool):
            overrides[key] = payload[key]
        else:
            _fail(f"'{key}' must be a boolean", strict)
    if payload.get("output_dir"):
        overrides["output_dir"] = str(payload["output_dir"]).strip()
    if payload.get("combined_output"):
        overrides["combined_output"] = str(payload["combined_output"]).strip()

    unknown = set(payload) - set(TranslatorSettings.__dataclass_fields__)
    if unknown:
        _fail(f"Unknown settings keys: {', '.join(sorted(unknown))}", strict)

    logger.info("Loaded translator settings from %s", config_path)
    return replace(settings, **overrides)
