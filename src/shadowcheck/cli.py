"""CLI entry point for shadowcheck."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from .analyzer import analyze_dump_files
from .models import ShadowConfig
from .output import display_failures, display_results

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 3


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Report variable declarations that shadow an outer declaration of the same type"
    )
    parser.add_argument(
        "targets",
        nargs="+",
        help="Resolved package dump files (JSON) to analyze",
        type=Path,
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Whether to be strict about shadowing; can be noisy",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Run the CLI application and return the exit code."""
    console = console or Console()
    args = parse_args(argv)

    # Configure logging
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    # Validate targets
    missing = [target for target in args.targets if not target.is_file()]
    for target in missing:
        if not target.exists():
            console.print(f"[red]Error: File {target} does not exist[/red]")
        else:
            console.print(f"[red]Error: {target} is not a file[/red]")
    targets = [target for target in args.targets if target not in missing]

    results, failures = analyze_dump_files(targets, ShadowConfig(strict=args.strict))
    display_results(console, results)
    display_failures(console, failures)

    if missing or failures:
        return EXIT_ERROR
    if any(result.diagnostics for result in results):
        return EXIT_FINDINGS
    return EXIT_CLEAN


if __name__ == "__main__":
    sys.exit(main())
