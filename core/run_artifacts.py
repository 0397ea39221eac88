"""Run report written at the end of a batch translation."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Iterable


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
    failures: Iterable[dict[str, Any]] = (),
) -> str:
    """Write a JSON run report and return its path.

    Args:
        report: Summary counters, e.g. ``TranslationStats.to_dict()``.
        run_id: Correlation ID of the run; also the file name.
        output_dir: Directory for reports; created if missing.
        failures: Per-file failure records, sorted by ``file`` in the output.
    """
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    payload["failures"] = sorted(failures, key=lambda item: str(item.get("file", "")))
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
