"""
Command-line interface for gocyclo.

Prints the cyclomatic complexity of Go functions, most complex first, and
optionally the average and a histogram. Exits with status 1 when ``--over``
is given and at least one function exceeds it, so it can gate CI.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from gocyclo import __version__
from gocyclo.analysis.collector import analyze
from gocyclo.config import AnalysisConfig, load_analysis_config, parse_breakpoints
from gocyclo.core.exceptions import GocycloError
from gocyclo.core.stats import Stats
from gocyclo.reporting import format_json, format_text

EXIT_OK = 0
EXIT_OVER_THRESHOLD = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

LOG_FORMAT = "gocyclo: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gocyclo",
        usage="%(prog)s [flags] <Go file or directory> ...",
        description="Calculate cyclomatic complexities of Go functions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The output fields for each line are:
<complexity> <package> <function> <file:line:column>

Examples:
  gocyclo .                          # All functions, most complex first
  gocyclo --top 10 ./src             # The 10 most complex functions
  gocyclo --over 15 .                # Fail (exit 1) if any function exceeds 15
  gocyclo --avg --ignore _test.go .  # Average complexity, tests excluded
  gocyclo --report 5,10,20 .         # Histogram of complexity ranges
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Go files or directories to analyze",
    )
    parser.add_argument(
        "--over",
        type=int,
        metavar="N",
        help="show functions with complexity > N only and return exit code 1 if the output is non-empty",
    )
    parser.add_argument(
        "--under",
        type=int,
        metavar="N",
        help="show functions with complexity < N only",
    )
    parser.add_argument(
        "--top",
        type=int,
        metavar="N",
        help="show the top N most complex functions only",
    )
    parser.add_argument(
        "--avg",
        action="store_true",
        default=None,
        help="show the average complexity over all functions",
    )
    parser.add_argument(
        "--avg-short",
        action="store_true",
        default=None,
        help="show the average complexity without a label",
    )
    parser.add_argument(
        "--ignore",
        metavar="REGEX",
        help="exclude files matching the given regular expression",
    )
    parser.add_argument(
        "--report",
        metavar="N,N,...",
        help="show how many functions fall into each complexity range",
    )
    parser.add_argument(
        "--include-literals",
        action="store_true",
        default=None,
        help="also measure function literals as separate entries",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="number of parallel workers (default: 4)",
    )
    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        help="output format (default: text)",
    )
    parser.add_argument(
        "-c", "--config",
        help="path to configuration file",
    )
    parser.add_argument(
        "-o", "--output",
        help="output file (default: stdout)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="log every file as it is analyzed",
    )

    return parser


def build_config(args: argparse.Namespace) -> AnalysisConfig:
    """Load the config file (explicit or discovered) and apply flag overrides."""
    base = load_analysis_config(args.config)
    overrides: Dict[str, Any] = {
        "paths": args.paths or None,
        "ignore": args.ignore,
        "over": args.over,
        "under": args.under,
        "top": args.top,
        "breakpoints": parse_breakpoints(args.report) if args.report else None,
        "include_literals": args.include_literals,
        "max_workers": args.jobs,
        "show_average": args.avg,
        "average_short": args.avg_short,
        "output_format": args.format,
    }
    return base.merged(overrides)


def exit_code(config: AnalysisConfig, shown: Stats) -> int:
    if config.over > 0 and len(shown) > 0:
        return EXIT_OVER_THRESHOLD
    return EXIT_OK


def run(config: AnalysisConfig, output: Optional[str] = None) -> int:
    """Analyze, print and return the process exit status."""
    result = analyze(config)
    shown = result.stats.sort_and_filter(config.top, config.over, config.under)

    buckets = shown.report(config.breakpoints) if config.wants_report else None
    if config.output_format == "json":
        text = format_json(result, shown, buckets)
    else:
        average = result.stats.average_complexity() if config.show_average else None
        text = format_text(shown, average, config.average_short, buckets)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as exc:
            raise GocycloError(f"cannot write {output}: {exc.strerror or exc}") from exc
    else:
        sys.stdout.write(text)

    return exit_code(config, shown)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = build_config(args)
        if not config.paths:
            parser.print_usage(sys.stderr)
            print("gocyclo: no Go file or directory given", file=sys.stderr)
            return EXIT_USAGE
        return run(config, args.output)

    except KeyboardInterrupt:
        print("\nAnalysis interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except GocycloError as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("GOCYCLO_DEBUG"):
            raise
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
