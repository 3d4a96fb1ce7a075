"""Command line interface for analysing and converting LaTeX projects."""
from __future__ import annotations

import argparse
import tempfile
from pathlib import Path
from typing import List

from pydantic import ValidationError

from .app import LatexConversionApp
from .config import load_settings
from .errors import ProjectError
from .exporters import to_json
from .logging_config import get_logger, setup_logging
from .report import render_report

logger = get_logger(__name__)


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Detect the journal template of a LaTeX project and check its assets")
    parser.add_argument("input", help="Path to a .tex/.latex file, a .zip archive, or an unpacked project directory")
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Write structured analysis results to a JSON file",
    )
    parser.add_argument(
        "--convert",
        type=Path,
        metavar="OUTPUT_DIR",
        help="Run pandoc and write output.docx into OUTPUT_DIR",
    )
    parser.add_argument(
        "--journal",
        help="Override the detected journal family when picking a template (elsevier, springer nature, ieee, acm, generic)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as exc:
        setup_logging(args.log_level)
        logger.error("Invalid configuration: %s", exc)
        return 2
    setup_logging(args.log_level or settings.log_level)
    checker = LatexConversionApp(settings=settings)

    with tempfile.TemporaryDirectory(prefix="latex-hub-") as temp_dir:
        try:
            contents = checker.load_path(args.input, temp_dir)
        except ProjectError as exc:
            logger.error("%s", exc)
            return 2

        analysis = checker.analyze_project(contents)
        conversion = None
        if args.convert:
            conversion = checker.convert(contents, args.convert, manual_journal=args.journal, analysis=analysis)

        print(render_report(analysis, conversion))

        if args.json_output:
            args.json_output.write_text(to_json(analysis, conversion))

    if conversion is not None and not conversion.success:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
