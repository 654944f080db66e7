import argparse
import logging
import sys
from typing import List, Optional

from latency_profiler import __version__
from latency_profiler.config import ProfilerConfig
from latency_profiler.errors import FatalProfilerError
from latency_profiler.models import Target
from latency_profiler.profiler import Profiler
from latency_profiler.stats import report_lines, summarize

logger = logging.getLogger("latency_profiler")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="latency-profiler", description="Profile website latency.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-u", "--url", required=True, help="URL to profile (http or https)")
    ap.add_argument("-p", "--profile", help="number of requests to make (defaults to 1 if omitted)")
    ap.add_argument("--connect-timeout", type=float, help="connect timeout per address in seconds")
    ap.add_argument("--io-timeout", type=float, help="read/write timeout in seconds")
    ap.add_argument("--user-agent", help="User-Agent header to send")
    ap.add_argument("--plot", metavar="PATH", help="save a latency plot (PNG) to PATH")
    ap.add_argument("-v", "--verbose", action="store_true", help="log every attempt")
    return ap


def parse_request_count(value: Optional[str]) -> int:
    # default to 1 if --profile is missing or not an integer
    if value is None:
        return 1
    try:
        return int(value)
    except ValueError:
        return 1


def build_config(args: argparse.Namespace) -> ProfilerConfig:
    overrides = {
        "connect_timeout": args.connect_timeout,
        "io_timeout": args.io_timeout,
        "user_agent": args.user_agent,
    }
    return ProfilerConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    number_of_requests = parse_request_count(args.profile)
    if number_of_requests <= 0:
        print("The value to --profile must be greater than 0")
        return 1

    try:
        target = Target.from_url(args.url)
    except ValueError as e:
        print(f"Did not receive a valid URL: error was {e}")
        return 1

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Invalid option: {e}")
        return 1

    profiler = Profiler(target, number_of_requests, config)
    try:
        run = profiler.profile()
    except FatalProfilerError as e:
        logger.error(f"Encountered unfixable error creating {target.scheme.upper()} connection: {e}")
        return 1

    for line in report_lines(summarize(run)):
        print(line)

    if args.plot:
        from latency_profiler.plot import plot_latencies

        try:
            plot_latencies(run, args.plot)
        except ValueError as e:
            logger.warning(f"Skipping plot: {e}")
        else:
            print(f"\nPlot saved as '{args.plot}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
