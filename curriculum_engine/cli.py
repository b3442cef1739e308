"""
Command-line entry point.

    curriculum-validate [validate] [--data-dir DIR] [--level LEVEL|all] [--week N]
                        [--materials FILE] [--json PATH]
    curriculum-validate classify [--data-dir DIR] [--level LEVEL|all] [--week N]
                        [--output PATH]

Exit status: 0 when no blocking errors, 1 when parse, lesson-count or field
errors exist, 2 when the data directory is missing.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import orjson

from .core.config import Settings, settings
from .core.constants import TOTAL_WEEKS
from .core.exceptions import DataDirectoryNotFoundError
from .pipeline import CurriculumEngine
from .schemas.lesson import Level
from .services.report import render_classification_summary, render_dashboard
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BLOCKING = 1
EXIT_NO_DATA = 2


def _week(value: str) -> int:
    week = int(value)
    if not 1 <= week <= TOTAL_WEEKS:
        raise argparse.ArgumentTypeError(f"week must be between 1 and {TOTAL_WEEKS}")
    return week


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="curriculum-validate",
        description="Validate and classify weekly curriculum lesson data",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=("validate", "classify"),
        default="validate",
        help="validate (default) or classify",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help=f"Curriculum data root (default: {settings.CURRICULUM_DATA_DIR})",
    )
    parser.add_argument(
        "--level",
        choices=[level.value for level in Level] + ["all"],
        default=Level.PRIMARY.value,
        help="Level to load, or 'all'",
    )
    parser.add_argument("--week", type=_week, default=None, help="Only load this week")
    parser.add_argument(
        "--materials",
        default=None,
        help=f"Inventory file name inside the data root (default: {settings.MATERIALS_FILE})",
    )
    parser.add_argument("--json", dest="json_path", type=Path, help="Write the report as JSON")
    parser.add_argument(
        "--output", type=Path, help="classify: write keyed classifications as JSON"
    )
    return parser


def _levels(choice: str) -> tuple[Level, ...]:
    if choice == "all":
        return tuple(Level)
    return (Level(choice),)


def run_validate(engine: CurriculumEngine, args: argparse.Namespace) -> int:
    report = asyncio.run(engine.run(_levels(args.level), week=args.week))
    print(render_dashboard(report, limit=settings.REPORT_SECTION_LIMIT))

    if args.json_path:
        args.json_path.write_bytes(report.to_json())
        logger.info(f"Report written to {args.json_path}")

    return EXIT_BLOCKING if report.has_blocking_errors else EXIT_OK


def run_classify(engine: CurriculumEngine, args: argparse.Namespace) -> int:
    results = asyncio.run(engine.classify(_levels(args.level), week=args.week))
    print(render_classification_summary(results, limit=settings.REPORT_SECTION_LIMIT))

    if args.output:
        keyed = {result.key: result for result in results}
        args.output.write_bytes(
            orjson.dumps(keyed, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
        )
        logger.info(f"Classifications written to {args.output}")

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging()

    run_settings = Settings()
    if args.data_dir is not None:
        run_settings.CURRICULUM_DATA_DIR = args.data_dir
    if args.materials:
        run_settings.MATERIALS_FILE = args.materials
    run_settings.validate_required()

    engine = CurriculumEngine(settings=run_settings)
    logger.info(f"Curriculum data: {engine.loader.data_dir}")

    try:
        if args.command == "classify":
            return run_classify(engine, args)
        return run_validate(engine, args)
    except DataDirectoryNotFoundError as e:
        logger.error(e.detail)
        print(f"ERROR: {e.detail}", file=sys.stderr)
        return EXIT_NO_DATA
    finally:
        engine.pool.shutdown()


if __name__ == "__main__":
    sys.exit(main())
