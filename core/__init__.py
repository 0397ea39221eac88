"""Core shared utilities: settings, structured logging and run reports."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    module_scope,
    set_run_id,
)
from core.settings import (
    ConfigValidationError,
    TranslatorSettings,
    load_settings,
    resolve_strict_config_validation,
)
from core.run_artifacts import write_run_report

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "module_scope",
    "set_run_id",
    "ConfigValidationError",
    "TranslatorSettings",
    "load_settings",
    "resolve_strict_config_validation",
    "write_run_report",
]
