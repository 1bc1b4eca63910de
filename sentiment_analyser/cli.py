"""
Sentiment Analyser - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line interface for the sentiment analyser.

- analyze: rate text from arguments, a file or stdin
- confirm: append a phrase/rating pair to its dataset
- serve:   run the HTTP API

============================================================
USAGE
============================================================
python -m sentiment_analyser analyze "the service was great"
python -m sentiment_analyser analyze --file reviews.txt --format json
python -m sentiment_analyser confirm "great customer service thanks so much" 4.0
python -m sentiment_analyser serve --port 8080

============================================================
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import AnalyserConfig
from .engine import SentimentEngine
from .exceptions import ConfigurationError, SentimentAnalyserError
from .models import AnalysisResult


logger = logging.getLogger(__name__)


# ============================================================
# LOGGING
# ============================================================

def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def default_log_level(command: str) -> str:
    """Level used when neither --log-level nor LOG_LEVEL is set."""
    return "INFO" if command == "serve" else "WARNING"


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sentiment-analyser",
        description="Rule-based sentiment analyser with a learned phrase corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  analyze   - Rate each input line
  confirm   - Add a confirmed phrase to the matching dataset
  serve     - Run the HTTP API

Examples:
  %(prog)s analyze "what a lovely day"
  %(prog)s analyze --file reviews.txt --format json
  %(prog)s confirm "great customer service thanks so much" 4.0
  %(prog)s serve --host 0.0.0.0 --port 8080
        """
    )

    # --------------------------------------------------------
    # Data Options
    # --------------------------------------------------------
    data_group = parser.add_argument_group("Data Options")

    data_group.add_argument(
        "--data-dir",
        type=str,
        metavar="PATH",
        help="Directory holding the lexicon files (default: bundled data)",
    )

    data_group.add_argument(
        "--corpus-dir",
        type=str,
        metavar="PATH",
        help="Directory holding the phrase datasets (default: data directory)",
    )

    # --------------------------------------------------------
    # Logging Options
    # --------------------------------------------------------
    logging_group = parser.add_argument_group("Logging Options")

    logging_group.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: LOG_LEVEL, else INFO for serve and WARNING otherwise)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version="%(prog)s 1.0.0",
    )

    # --------------------------------------------------------
    # Commands
    # --------------------------------------------------------
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    analyze = commands.add_parser("analyze", help="Rate text")
    analyze.add_argument(
        "text",
        nargs="*",
        help="Texts to rate (read from --file or stdin when omitted)",
    )
    analyze.add_argument(
        "--file", "-f",
        type=str,
        metavar="PATH",
        help="Rate every line of a file",
    )
    analyze.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    analyze.add_argument(
        "--summary",
        action="store_true",
        help="Print the calculation breakdown for each line",
    )

    confirm = commands.add_parser("confirm", help="Confirm a phrase rating")
    confirm.add_argument("phrase", help="Phrase to store")
    confirm.add_argument("rating", type=str, help="Confirmed rating")
    confirm.add_argument(
        "--raw",
        action="store_true",
        help="Store the phrase as given instead of its normalized form",
    )

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Bind address (default: 127.0.0.1)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Bind port (default: 8080)",
    )

    return parser


# ============================================================
# CLI VALIDATION
# ============================================================

def validate_args(args: argparse.Namespace) -> List[str]:
    """
    Validate CLI arguments.

    Returns:
        List of validation errors
    """
    errors = []

    if args.command == "analyze" and args.text and args.file:
        errors.append("pass either TEXT or --file, not both")

    if args.command == "confirm":
        try:
            float(args.rating)
        except ValueError:
            errors.append(f"rating must be a number, got '{args.rating}'")

    if args.command == "serve" and not 0 < args.port < 65536:
        errors.append("--port must be between 1 and 65535")

    return errors


def build_config(args: argparse.Namespace) -> AnalyserConfig:
    """Environment configuration with CLI overrides applied."""
    config = AnalyserConfig.from_env()
    if args.data_dir:
        config.data_dir = args.data_dir
    if args.corpus_dir:
        config.corpus_dir = args.corpus_dir
    if args.log_level:
        config.log_level = args.log_level
    return config.require_valid()


# ============================================================
# COMMANDS
# ============================================================

def read_inputs(args: argparse.Namespace) -> List[str]:
    if args.text:
        return list(args.text)
    if args.file:
        with open(args.file, "r", encoding="utf-8", errors="ignore") as handle:
            return handle.read().splitlines()
    return sys.stdin.read().splitlines()


def format_result(result: AnalysisResult, can_confirm: bool, summary: bool = False) -> str:
    lines = [
        f"{result.rating:.2f}\t{result.label.value}\t"
        f"{result.preferred_match_type.value}\t{result.original_text}"
    ]
    if summary:
        lines.append(result.summary())
        lines.append(f"Can confirm: {can_confirm}")
    return "\n".join(lines)


def run_analyze(engine: SentimentEngine, args: argparse.Namespace) -> int:
    results = engine.analyze_batch(read_inputs(args))

    if args.format == "json":
        rows = []
        for result in results:
            row = result.to_dict()
            row["can_confirm"] = engine.can_confirm(result)
            rows.append(row)
        print(json.dumps(rows, indent=2))
        return 0

    for result in results:
        print(format_result(result, engine.can_confirm(result), args.summary))
    return 0


def run_confirm(engine: SentimentEngine, args: argparse.Namespace) -> int:
    phrase = args.phrase if args.raw else engine.normalizer.normalize(args.phrase).flat
    path = engine.confirm_phrase(phrase, args.rating)
    print(f"Stored in {path}")
    return 0


def run_serve(engine: SentimentEngine, args: argparse.Namespace) -> int:
    from .api import run

    run(engine, host=args.host, port=args.port)
    return 0


COMMANDS = {
    "analyze": run_analyze,
    "confirm": run_confirm,
    "serve": run_serve,
}


# ============================================================
# MAIN ENTRY POINT
# ============================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    errors = validate_args(args)
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        for detail in e.details.get("errors", []):
            print(f"  {detail}", file=sys.stderr)
        return 1

    setup_logging(config.log_level or default_log_level(args.command))

    try:
        engine = SentimentEngine.initialize(config=config)
        return COMMANDS[args.command](engine, args)
    except SentimentAnalyserError as e:
        logger.error(e.message)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


# ============================================================
# MODULE EXECUTION
# ============================================================

if __name__ == "__main__":
    sys.exit(main())
