"""Tests for translator settings loading."""

import os
import tempfile
import unittest
from unittest import mock

from core.settings import (
    CONFIG_PATH_ENV,
    STRICT_ENV,
    ConfigValidationError,
    TranslatorSettings,
    load_settings,
    resolve_config_path,
    resolve_strict_config_validation,
)
from translation.config import ROOT_NAMESPACES


class TestSettings(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(CONFIG_PATH_ENV, None)
        os.environ.pop(STRICT_ENV, None)

    def _write(self, name: str, content: str) -> str:
        path = os.path.join(self._tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_defaults_without_file(self) -> None:
        settings = load_settings()
        self.assertEqual(settings, TranslatorSettings())
        self.assertEqual(settings.root_namespaces, ROOT_NAMESPACES)
        self.assertFalse(settings.continue_past_fatal)

    def test_yaml_overrides(self) -> None:
        path = self._write(
            "settings.yml",
            "root_namespaces: [app, lib]\n"
            "exclude_patterns: ['*/legacy/*']\n"
            "continue_past_fatal: true\n"
            "emit_comments: false\n"
            "output_dir: build/dts\n"
            "tsc_command: [npx, tsc, --noEmit]\n",
        )
        settings = load_settings(path, strict=True)
        self.assertEqual(settings.root_namespaces, frozenset({"app", "lib"}))
        self.assertEqual(settings.exclude_patterns, ("*/legacy/*",))
        self.assertTrue(settings.continue_past_fatal)
        self.assertFalse(settings.emit_comments)
        self.assertEqual(settings.output_dir, "build/dts")
        self.assertEqual(settings.tsc_command, ("npx", "tsc", "--noEmit"))

    def test_json_by_suffix(self) -> None:
        path = self._write("settings.json", '{"ignored_names": ["goog.a.b"]}')
        settings = load_settings(path, strict=True)
        self.assertEqual(settings.ignored_names, frozenset({"goog.a.b"}))

    def test_path_from_environment(self) -> None:
        path = self._write("env.yml", "combined_output: out/all.d.ts\n")
        os.environ[CONFIG_PATH_ENV] = path
        self.assertEqual(resolve_config_path(), path)
        self.assertEqual(load_settings().combined_output, "out/all.d.ts")

    def test_non_strict_missing_returns_defaults(self) -> None:
        with self.assertLogs("core.settings", level="WARNING"):
            settings = load_settings("/definitely/missing.yml", strict=False)
        self.assertEqual(settings, TranslatorSettings())

    def test_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_settings("/definitely/missing.yml", strict=True)

    def test_strict_bad_yaml_raises(self) -> None:
        path = self._write("bad.yml", "root_namespaces: [unclosed\n")
        with self.assertRaises(ConfigValidationError):
            load_settings(path, strict=True)

    def test_strict_wrong_type_raises(self) -> None:
        path = self._write("wrong.yml", "root_namespaces: goog\n")
        with self.assertRaises(ConfigValidationError):
            load_settings(path, strict=True)

    def test_strict_empty_roots_raises(self) -> None:
        path = self._write("empty_roots.yml", "root_namespaces: []\n")
        with self.assertRaises(ConfigValidationError):
            load_settings(path, strict=True)

    def test_strict_quoted_boolean_raises(self) -> None:
        path = self._write("quoted.yml", "emit_comments: 'false'\n")
        with self.assertRaises(ConfigValidationError):
            load_settings(path, strict=True)

    def test_quoted_boolean_keeps_default(self) -> None:
        path = self._write("quoted.json", '{"continue_past_fatal": "false", "emit_comments": false}')
        with self.assertLogs("core.settings", level="WARNING"):
            settings = load_settings(path, strict=False)
        self.assertFalse(settings.continue_past_fatal)
        self.assertFalse(settings.emit_comments)

    def test_unknown_keys(self) -> None:
        path = self._write("unknown.yml", "output_dir: out\nmystery: 1\n")
        with self.assertRaises(ConfigValidationError):
            load_settings(path, strict=True)
        with self.assertLogs("core.settings", level="WARNING"):
            settings = load_settings(path, strict=False)
        self.assertEqual(settings.output_dir, "out")

    def test_strict_flag_from_environment(self) -> None:
        os.environ[STRICT_ENV] = "yes"
        self.assertTrue(resolve_strict_config_validation())
        with self.assertRaises(ConfigValidationError):
            load_settings("/definitely/missing.yml")
        os.environ[STRICT_ENV] = "off"
        self.assertFalse(resolve_strict_config_validation())


if __name__ == "__main__":
    unittest.main()
