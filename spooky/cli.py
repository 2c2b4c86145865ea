import argparse
import sys
import time
from typing import List, Optional

from colorama import init as colorama_init

from . import __version__
from .core.fetcher import FetchError
from .core.models import ScanConfig
from .core.producer import MAJESTIC_MILLION_URL, BulkProducer, LineProducer
from .core.reporting import DEFAULT_BULK_OUTPUT, ConsoleReporter, finalize_output
from .core.scanner import DEFAULT_WORKERS, ScanContext, configure_logging, run_scan
from .patterns.registry import PATTERNS, categories


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spooky",
        description="Scan web pages, JavaScript bundles and local files for exposed credentials. "
                    "Targets are read one per line from stdin (http(s):// URLs or file:// paths).",
    )
    p.add_argument("-s", "--silent", action="store_true", help="Silent mode: no banner, findings or statistics.")
    p.add_argument("-t", "--threads", type=int, default=DEFAULT_WORKERS, help="Number of concurrent workers.")
    p.add_argument("-ua", "--user-agent", default="Spooky", help="User-Agent header sent with every request.")
    p.add_argument("-d", "--detailed", action="store_true", help="Print the matched value of each finding.")
    p.add_argument("-m", "--majestic", action="store_true", help="Scan domains from the Majestic Million list instead of stdin.")
    p.add_argument("-p", "--percent", type=int, default=100, help="Percentage of the Majestic Million to scan (1-100).")
    p.add_argument("-c", "--category", default="all",
                   help=f"Category to scan ({', '.join(categories())}, or 'all').")
    p.add_argument("-o", "--output", default=None, help="Write results to this JSON file.")
    p.add_argument("--input", default=None, help="Read targets from this file instead of stdin.")
    p.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds.")
    p.add_argument("--no-stream", action="store_true", help="Write the JSON file once at the end instead of while scanning.")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar in Majestic mode.")
    p.add_argument("--majestic-url", default=MAJESTIC_MILLION_URL, help=argparse.SUPPRESS)
    p.add_argument("--list-categories", action="store_true", help="List pattern categories and exit.")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")
    return p


def config_from_args(args: argparse.Namespace) -> ScanConfig:
    output = args.output
    if args.majestic and not output:
        output = DEFAULT_BULK_OUTPUT
    return ScanConfig(
        silent=args.silent,
        workers=args.threads,
        user_agent=args.user_agent,
        detailed=args.detailed,
        bulk=args.majestic,
        percent=args.percent,
        category=args.category,
        output=output,
        timeout=args.timeout,
        stream_output=not args.no_stream,
        verbose=args.verbose,
        no_progress=args.no_progress,
    )


def list_categories() -> int:
    for name in categories():
        count = sum(1 for d in PATTERNS if d.category == name)
        print(f"{name}: {count} pattern(s)")
    return 0


def run(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    reporter = ConsoleReporter(detailed=config.detailed)

    known = {name.lower() for name in categories()}
    if config.category.lower() != "all" and config.category.lower() not in known:
        reporter.error(f"Unknown category {config.category!r}; choose from {', '.join(categories())} or 'all'")
        return 2

    logger = configure_logging(verbose=config.verbose)
    if not config.silent and not config.bulk:
        reporter.banner(__version__)

    if config.bulk:
        targets = BulkProducer(
            args.majestic_url,
            percent=config.percent,
            show_progress=not (config.silent or config.no_progress),
            logger=logger,
        )
        source = None
    else:
        try:
            source = open(args.input, "r", encoding="utf-8") if args.input else sys.stdin
        except OSError as exc:
            reporter.error(f"Error reading targets: {exc}")
            return 1
        targets = LineProducer(source)

    context = ScanContext.for_category(config.category)
    start_time = time.monotonic()
    status = 0
    try:
        run_scan(
            config,
            targets,
            context=context,
            on_secret=reporter.secret_found if config.echo_findings else None,
            logger=logger,
        )
    except FetchError as exc:
        reporter.error(f"Error processing Majestic Million list: {exc}")
        status = 1
    except OSError as exc:
        reporter.error(f"Error opening output file: {exc}")
        return 1
    finally:
        if source is not None and source is not sys.stdin:
            source.close()

    if status == 0 and not config.silent and not config.bulk:
        reporter.summary(context.stats.snapshot(), time.monotonic() - start_time)

    try:
        written = finalize_output(context.findings, config)
    except OSError as exc:
        reporter.error(f"Error writing JSON file: {exc}")
        return 1
    if written and not config.silent and not config.bulk:
        reporter.results_written(written)
    return status


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    colorama_init()
    if args.list_categories:
        return list_categories()
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
