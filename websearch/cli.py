import argparse
import re
import sys

import dateparser
from playwright.sync_api import Error as PlaywrightError

from .config import load_defaults
from .errors import ConfigError, RunError, WebSearchError
from .logging_utils import log_error, set_log_level
from .processor import RunConfig, run_search
from .settings import (
    ACTIONS,
    DEFAULT_ACTION,
    DEFAULT_CONFIG_FILE,
    DEFAULT_ENGINE,
    DEFAULT_WEB_TIMEOUT_S,
    ENGINES,
    STDIN_SENTINEL,
    TIME_PAST_CHOICES,
)
from .timefilter import NO_TIME_FILTER, TimeFilter


DURATION_UNITS = {
    "ms": 0.001,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hour": 3600,
    "hours": 3600,
}
DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([a-z]*)\s*$")


def parse_duration(value):
    if isinstance(value, (int, float)):
        return float(value)
    match = DURATION_RE.match(str(value).lower())
    if not match or (match.group(2) or "s") not in DURATION_UNITS:
        raise argparse.ArgumentTypeError(f"invalid duration: '{value}'")
    return float(match.group(1)) * DURATION_UNITS[match.group(2) or "s"]


def parse_date(value):
    parsed = dateparser.parse(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid date: '{value}'")
    return parsed.date()


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog="websearch",
        description=(
            "Formulate search URLs for one or more queries, then open them in "
            "the browser, print them, or visit them to save result pages or "
            "extract result links."
        ),
    )
    parser.add_argument("queries", nargs="*", metavar="query", help="Search queries.")
    parser.add_argument(
        "--queries-from",
        metavar="FILE",
        help=f"Read queries from lines of a text file ('{STDIN_SENTINEL}' for stdin).",
    )

    delay_group = parser.add_argument_group("delay between queries")
    delay_group.add_argument(
        "--delay",
        type=parse_duration,
        help="Constant delay between queries, e.g. 3s, 500ms, 1m.",
    )
    delay_group.add_argument(
        "--min-delay",
        type=parse_duration,
        help="Minimum of a random delay between queries (use with --max-delay).",
    )
    delay_group.add_argument(
        "--max-delay",
        type=parse_duration,
        help="Maximum of a random delay between queries (use with --min-delay).",
    )

    parser.add_argument("--prepend", help="String to add at the beginning of each query.")
    parser.add_argument("--append", help="String to add at the end of each query.")
    parser.add_argument(
        "-n",
        "--num",
        type=positive_int,
        help="Number of results per page (default 100 where supported).",
    )

    time_group = parser.add_argument_group("time period criteria")
    time_group.add_argument("--time-start", type=parse_date, help="Start date of time period.")
    time_group.add_argument("--time-end", type=parse_date, help="End date of time period.")
    time_group.add_argument(
        "--time-past",
        choices=TIME_PAST_CHOICES,
        help="Limit time period to the past hour/24hour/day/week/month/year.",
    )

    parser.add_argument(
        "--engine",
        choices=ENGINES,
        default=DEFAULT_ENGINE,
        help=f"Search engine to use (default: {DEFAULT_ENGINE}).",
    )
    action_group = parser.add_argument_group("actions")
    action_group.add_argument(
        "--action",
        choices=ACTIONS,
        default=DEFAULT_ACTION,
        help=f"What to do with the URLs (default: {DEFAULT_ACTION}).",
    )
    for action in ACTIONS:
        action_group.add_argument(
            "--" + action.replace("_", "-"),
            dest="action",
            action="store_const",
            const=action,
            help=f"Alias for --action={action}.",
        )

    browser_group = parser.add_argument_group("browser automation")
    browser_group.add_argument(
        "--headless",
        action="store_true",
        help="Run the automation browser in headless mode.",
    )
    browser_group.add_argument(
        "--web-timeout-s",
        type=int,
        default=DEFAULT_WEB_TIMEOUT_S,
        help="Default timeout (seconds) for loading result pages.",
    )

    parser.add_argument(
        "--config-file",
        help=(
            "Path to JSON file with option defaults. "
            f"Defaults to {DEFAULT_CONFIG_FILE} if present."
        ),
    )
    parser.add_argument(
        "--log-level",
        help="Minimum log level: trace, debug, info, warn or error.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show debug logs (-vv for trace logs).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only show warnings and errors.",
    )
    return parser


def apply_config_defaults(parser, argv):
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config-file")
    for option in ("--delay", "--min-delay", "--max-delay"):
        pre_parser.add_argument(option)
    known, _ = pre_parser.parse_known_args(argv)
    defaults = load_defaults(known.config_file)
    # A delay form given on the command line replaces the other form from config
    if known.delay is not None:
        defaults.pop("min_delay", None)
        defaults.pop("max_delay", None)
    if known.min_delay is not None or known.max_delay is not None:
        defaults.pop("delay", None)
    for name in ("delay", "min_delay", "max_delay"):
        if defaults.get(name) is not None:
            try:
                defaults[name] = parse_duration(defaults[name])
            except argparse.ArgumentTypeError as exc:
                raise ConfigError(f"{name}: {exc}") from exc
    parser.set_defaults(**defaults)


def validate_args(args):
    if args.queries and args.queries_from is not None:
        raise ValueError("Specify either queries or --queries-from, not both.")
    if not args.queries and args.queries_from is None:
        raise ValueError("Please specify either queries or --queries-from.")
    if args.delay is not None and (
        args.min_delay is not None or args.max_delay is not None
    ):
        raise ValueError("--delay cannot be combined with --min-delay/--max-delay.")
    if (args.min_delay is None) != (args.max_delay is None):
        raise ValueError("--min-delay and --max-delay must be specified together.")
    if args.min_delay is not None and args.min_delay > args.max_delay:
        raise ValueError("--min-delay must be <= --max-delay.")
    if args.time_past is not None and (
        args.time_start is not None or args.time_end is not None
    ):
        raise ValueError("--time-past cannot be combined with --time-start/--time-end.")
    if (args.time_start is None) != (args.time_end is None):
        raise ValueError("--time-start and --time-end must be specified together.")
    if args.time_start is not None and args.time_start > args.time_end:
        raise ValueError("--time-start must be <= --time-end.")


def resolve_log_level(args):
    if args.log_level:
        return args.log_level
    if args.quiet:
        return "WARN"
    if args.verbose >= 2:
        return "TRACE"
    if args.verbose == 1:
        return "DEBUG"
    return None


def build_run_config(args):
    if args.time_past is not None:
        time_filter = TimeFilter.relative(args.time_past)
    elif args.time_start is not None:
        time_filter = TimeFilter.between(args.time_start, args.time_end)
    else:
        time_filter = NO_TIME_FILTER

    return RunConfig(
        queries=list(args.queries),
        queries_from=args.queries_from,
        prepend=args.prepend,
        append=args.append,
        delay=args.delay,
        min_delay=args.min_delay,
        max_delay=args.max_delay,
        num=args.num,
        time_filter=time_filter,
        engine=args.engine,
        action=args.action,
        headless=bool(args.headless),
        web_timeout_s=args.web_timeout_s,
    )


def render_result(result, stdout=None, stderr=None):
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if result.envelope is not None:
        if result.envelope.status != 200:
            print(f"{result.envelope.status} {result.envelope.message}", file=stderr)
            for item in result.envelope.failures:
                print(f"{item.item_id} {item.status} {item.message}", file=stderr)
        return 0 if result.ok else 1

    for row in result.rows:
        print(row, file=stdout)
    for item in result.errors:
        print(f"{item.item_id} {item.status} {item.message}", file=stderr)
    return 0 if result.ok else 1


def main(argv=None, **collaborators):
    parser = build_parser()
    try:
        apply_config_defaults(parser, argv)
    except ConfigError as exc:
        parser.error(exc.message)
    args = parser.parse_args(argv)

    try:
        set_log_level(resolve_log_level(args))
        validate_args(args)
        config = build_run_config(args).validate()
    except (ValueError, RunError) as exc:
        parser.error(str(exc))

    try:
        result = run_search(config, **collaborators)
    except (WebSearchError, OSError, PlaywrightError) as exc:
        log_error("Run aborted.", error=str(exc))
        return 1
    return render_result(result)


if __name__ == "__main__":
    sys.exit(main())
