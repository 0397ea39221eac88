"""Tests for run artifact writer."""

import json
import tempfile
import unittest
from pathlib import Path

from core.run_artifacts import write_run_report


class TestRunArtifacts(unittest.TestCase):
    def test_write_run_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                report={"status": "success", "files_processed": 3},
                run_id="run-123",
                output_dir=tmpdir,
            )
            self.assertTrue(Path(path).is_file())
            self.assertEqual(Path(path).name, "run-123.json")
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "run-123")
            self.assertEqual(payload["status"], "success")
            self.assertEqual(payload["files_processed"], 3)
            self.assertEqual(payload["failures"], [])
            self.assertIn("timestamp_utc", payload)

    def test_failures_sorted_by_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                report={"status": "failed"},
                run_id="run-456",
                output_dir=f"{tmpdir}/nested",
                failures=[
                    {"file": "goog/b.js", "message": "b"},
                    {"file": "goog/a.js", "message": "a"},
                ],
            )
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual([f["file"] for f in payload["failures"]], ["goog/a.js", "goog/b.js"])


if __name__ == "__main__":
    unittest.main()
