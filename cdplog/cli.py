"""cdplog: parse, correlate and inspect browser-automation protocol logs."""

import logging
import sys
from argparse import ArgumentParser
from itertools import islice

from cdplog.auto_detect import Dialect, detect_format, parse_logs
from cdplog.config import load_config
from cdplog.filters import build_filter_chain, find_line_index, jump_target
from cdplog.formatter import get_formatter, lane_width
from cdplog.reader import expand_paths, read_text
from cdplog.stats import compute_stats, format_stats_json, format_stats_text

logger = logging.getLogger("cdplog")


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="cdplog",
        description="Parse ChromeDriver, Puppeteer, WPT and Protocol Monitor logs "
                    "into correlated command/response timelines.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Log file path(s) or glob pattern(s); each file is parsed on its own",
    )
    parser.add_argument(
        "--dialect",
        choices=[d.value for d in Dialect],
        help="Skip detection and force a log dialect",
    )
    parser.add_argument(
        "--search",
        help="Keep entries whose message, tags or method contain this text; "
             ":N jumps to source line N instead",
    )
    parser.add_argument(
        "--level",
        help="Filter by log level (e.g. INFO, DEBUG, SEVERE)",
    )
    parser.add_argument(
        "--type",
        choices=["command", "response", "event"],
        help="Filter by entry kind",
    )
    parser.add_argument(
        "--from-line",
        type=int,
        help="Start output at the entry on (or closest before) this source line",
    )
    parser.add_argument(
        "--lines",
        type=int,
        help="Limit output to N entries per file",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        help="Output format (default from config: text)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize output by level and entry kind (ANSI)",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Print raw messages instead of inline summaries",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show statistics instead of log entries",
    )
    parser.add_argument(
        "--config",
        help="YAML config file (default: $CDPLOG_CONFIG)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parser decisions to stderr",
    )
    return parser


def configure_logging(config, verbose: bool = False) -> None:
    settings = config["logging"]
    level = "DEBUG" if verbose else str(settings["level"]).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=settings["format"],
        stream=sys.stderr,
    )


def run_pipeline(args, config) -> None:
    """Parse each file, then filter and print its entries or stats."""
    output = args.output or config["output"]["format"]
    color = args.color or bool(config["output"]["color"])
    summaries = not args.no_summary and bool(config["output"]["summaries"])

    formatter = get_formatter(output_format=output, color=color)
    keep = build_filter_chain(args)
    from_line = args.from_line if args.from_line is not None else jump_target(args.search)
    paths = expand_paths(args.files)

    for path in paths:
        text = read_text(path)
        dialect = Dialect(args.dialect) if args.dialect else detect_format(text)
        logger.info("%s: detected %s log", path, dialect.value)
        entries = parse_logs(text, dialect)

        if args.stats:
            stats = compute_stats(entries, dialect.value)
            if len(paths) > 1 and output != "json":
                print(f"==> {path} <==")
            print(format_stats_json(stats) if output == "json" else format_stats_text(stats))
            continue

        if len(paths) > 1 and output != "json":
            print(f"==> {path} <==")

        width = lane_width(entries)
        start = 0
        if from_line is not None:
            start = max(find_line_index(entries, from_line), 0)

        selected = (e for e in islice(entries, start, None) if keep(e))
        if args.lines:
            selected = islice(selected, args.lines)

        for entry in selected:
            print(formatter(entry, width=width, summaries=summaries))


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)
    configure_logging(config, args.verbose)

    try:
        run_pipeline(args, config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
