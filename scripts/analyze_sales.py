#!/usr/bin/env python
"""Run a sales analysis against a local file without starting the API.

Example usages::

    # Summarize locally, whatever credentials are configured.
    python -m scripts.analyze_sales pipeline.json --local

    # Ask Gemini for a pipeline outlook restricted to one brand.
    python -m scripts.analyze_sales pipeline.json --type pipeline \
        --filter brand=ActiveLife
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TextIO

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sales_insights.core.config import get_settings  # noqa: E402
from sales_insights.core.logging import configure_logging  # noqa: E402
from sales_insights.services import (  # noqa: E402
    AnalysisAuditLogger,
    AnalysisProvider,
    AnalysisStatus,
    LocalSummaryProvider,
    MissingSalesDataError,
    SalesAnalysisService,
    build_analysis_provider,
)
from sales_insights.schemas import AnalyzeRequest  # noqa: E402

EXIT_OK = 0
EXIT_ANALYSIS_FAILED = 1
EXIT_INPUT_ERROR = 2


def _parse_filters(pairs: list[str]) -> dict[str, str]:
    filters: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(
                f"Filters must look like key=value, got '{pair}'."
            )
        filters[key.strip()] = value.strip()
    return filters


def _read_input(source: str, stdin: TextIO) -> str:
    if source == "-":
        return stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze a sales data file with Gemini or the local summary."
    )
    parser.add_argument(
        "source",
        help="Path to a JSON or text file with sales data, or '-' for stdin.",
    )
    parser.add_argument(
        "--type",
        dest="analysis_type",
        default="trends",
        help="Analysis focus: trends, pipeline, or communications (default: trends).",
    )
    parser.add_argument(
        "--filter",
        dest="filters",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Context filter to apply; may be given several times.",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Skip Gemini and print the local summary.",
    )
    return parser


async def run(
    *,
    sales_text: str,
    analysis_type: str,
    filters: dict[str, str],
    provider: AnalysisProvider,
) -> tuple[int, str]:
    """Analyze ``sales_text`` and return the exit code with the text to print."""
    service = SalesAnalysisService(provider=provider, audit_logger=AnalysisAuditLogger(None))
    request = AnalyzeRequest(
        sales_data=sales_text,
        analysis_type=analysis_type,
        filters=filters,
    )
    try:
        outcome = await service.analyze(request)
    except MissingSalesDataError as exc:
        return EXIT_INPUT_ERROR, str(exc)

    if outcome.status is AnalysisStatus.FAILED:
        return EXIT_ANALYSIS_FAILED, "Failed to analyze data. See the log for details."
    return EXIT_OK, outcome.text


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        filters = _parse_filters(args.filters)
        sales_text = _read_input(args.source, stdin or sys.stdin)
    except argparse.ArgumentTypeError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INPUT_ERROR
    except OSError as exc:
        print(f"Unable to read sales data: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    provider = LocalSummaryProvider() if args.local else build_analysis_provider(settings)
    exit_code, text = asyncio.run(
        run(
            sales_text=sales_text,
            analysis_type=args.analysis_type,
            filters=filters,
            provider=provider,
        )
    )
    print(text, file=sys.stdout if exit_code == EXIT_OK else sys.stderr)
    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
