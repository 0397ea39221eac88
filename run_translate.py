#!/usr/bin/env python3
"""
Generate TypeScript declaration files from Closure-annotated JavaScript.

Translates a single file or a whole source tree into ``.d.ts`` files that
mirror the source layout, optionally concatenates them into one file and
type-checks the result with ``tsc``.

Usage:
    python run_translate.py --source closure/goog
    python run_translate.py --source closure/goog --combined output/closure.d.ts --check
    python run_translate.py --source closure/goog/array/array.js --output-dir out/dts
"""

import argparse
import dataclasses
import logging
import os
import sys
import time

from core.run_artifacts import write_run_report
from core.settings import ConfigValidationError, TranslatorSettings, load_settings
from core.structured_logging import configure_structured_logging, set_run_id
from translation.batch import (
    TranslationStats,
    check_declarations,
    combine_declarations,
    translate_directory,
    translate_file,
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Closure JSDoc to TypeScript declaration generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_translate.py --source closure/goog\n"
            "  python run_translate.py --source closure/goog --combined out/closure.d.ts --check\n"
        ),
    )

    parser.add_argument(
        "--source",
        required=True,
        help="JavaScript file or source directory to translate.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Root directory for generated .d.ts files. Default: settings output_dir.",
    )
    parser.add_argument(
        "--combined",
        default=None,
        help="Also concatenate all generated declarations into this file.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML or JSON settings file. Default: $CLOSURE_DTS_CONFIG.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=False,
        help="Fail on invalid settings instead of falling back to defaults.",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        default=False,
        help="Skip untranslatable statements instead of failing the whole module.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        default=False,
        help="Type-check the combined output with the TypeScript compiler.",
    )
    parser.add_argument(
        "--report-dir",
        default="output/run_reports",
        help="Directory for the JSON run report. Default: output/run_reports",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: INFO",
    )

    return parser.parse_args(argv)


def translate(source: str, output_dir: str, settings: TranslatorSettings):
    """Translate a file or directory; returns (written paths, stats, source root)."""
    if os.path.isdir(source):
        written, stats = translate_directory(source, output_dir, settings=settings)
        return written, stats, os.path.abspath(source)

    if not os.path.isfile(source):
        raise FileNotFoundError(f"Source not found: {source}")

    stats = TranslationStats()
    source_root = os.path.dirname(os.path.abspath(source))
    written = []
    try:
        output_path = translate_file(source, output_dir, source_root, settings)
    except Exception as e:
        stats.record_failure(os.path.basename(source), e)
        return written, stats, source_root

    stats.files_processed = 1
    if output_path is None:
        stats.files_empty = 1
    else:
        written.append(output_path)
    return written, stats, source_root


def main(argv=None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)
    configure_structured_logging(level=getattr(logging, args.log_level))
    run_id = set_run_id()

    logger.info("*" * 80)
    logger.info(" Closure -> TypeScript declaration generator")
    logger.info(" Run ID: %s", run_id)
    logger.info("*" * 80)

    run_report = {
        "run_id": run_id,
        "pipeline": "closure_dts",
        "source": args.source,
        "status": "failed",
    }
    stats = TranslationStats()

    try:
        settings = load_settings(args.config, strict=args.strict_config or None)
        if args.continue_on_error:
            settings = dataclasses.replace(settings, continue_past_fatal=True)
        output_dir = args.output_dir or settings.output_dir
        combined = args.combined or settings.combined_output
        run_report["output_dir"] = os.path.abspath(output_dir)

        t0 = time.time()
        written, stats, source_root = translate(args.source, output_dir, settings)
        logger.info("Translation finished in %.2fs: %s", time.time() - t0, stats)
        run_report.update(stats.to_dict())

        check_ok = True
        if combined:
            combine_declarations(written, combined, root=os.path.abspath(output_dir))
            run_report["combined_output"] = os.path.abspath(combined)
            if args.check:
                check_ok, output = check_declarations(combined, settings.tsc_command)
                run_report["check_passed"] = check_ok
                if output.strip():
                    logger.info("tsc output:\n%s", output.rstrip())
        elif args.check:
            logger.warning("--check requires --combined (or combined_output); skipping type check")

        if stats.files_failed == 0 and check_ok:
            run_report["status"] = "success"

    except ConfigValidationError as e:
        logger.error("Invalid settings: %s", e)
        run_report["error"] = str(e)
    except FileNotFoundError as e:
        logger.error("File error: %s", e)
        run_report["error"] = str(e)
    except Exception as e:
        logger.error("Translation failed: %s", e, exc_info=True)
        run_report["error"] = str(e)

    report_path = write_run_report(
        run_report, run_id, output_dir=args.report_dir, failures=stats.failures
    )
    logger.info("Run report written: %s", report_path)
    return 0 if run_report["status"] == "success" else 1


if __name__ == "__main__":
    sys.exit(main())
