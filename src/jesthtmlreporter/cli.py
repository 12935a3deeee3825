from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from jesthtmlreporter import __version__
from jesthtmlreporter.config import ConfigResolver
from jesthtmlreporter.errors import ReporterError
from jesthtmlreporter.loader import load_console_logs, load_test_results
from jesthtmlreporter.log import configure_logging, log_message
from jesthtmlreporter.reporter import HTMLReporter
from jesthtmlreporter.results import collect_console_logs
from jesthtmlreporter.sorting import SortType

# argparse dest -> option name
RENDER_OPTION_FLAGS = {
    "output": "outputPath",
    "page_title": "pageTitle",
    "theme": "theme",
    "sort": "sort",
    "status_ignore_filter": "statusIgnoreFilter",
    "date_format": "dateFormat",
    "logo": "logoPath",
    "boilerplate": "boilerplatePath",
    "style_override": "styleOverridePath",
    "custom_script": "customScriptPath",
    "warning_threshold": "executionTimeWarningThreshold",
    "include_failure_msg": "includeFailureMsg",
    "include_console_log": "includeConsoleLog",
    "append": "append",
    "use_css_file": "useCssFile",
}


def _options_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Caller options for every flag that was given on the command line."""
    options: dict[str, Any] = {}
    for dest, option in RENDER_OPTION_FLAGS.items():
        value = getattr(args, dest, None)
        if value is not None:
            options[option] = value
    return options


def _cmd_render(args: argparse.Namespace) -> int:
    """Render an HTML report from a results file."""
    test_data = load_test_results(args.results)

    if args.console_logs:
        console_logs = load_console_logs(args.console_logs)
    else:
        console_logs = collect_console_logs(test_data.test_results)

    reporter = HTMLReporter(
        test_data,
        _options_from_args(args),
        console_logs,
        cwd=args.cwd,
    )
    report = reporter.generate()
    return 0 if report is not None else 1


def _cmd_show_config(args: argparse.Namespace) -> int:
    """Show effective configuration from all sources."""
    config = ConfigResolver(cwd=args.cwd)

    print("Reporter Effective Configuration")
    print("=" * 50)
    print()
    print(f"Working directory: {config.cwd}")
    print(f"Config loaded from: {config.loaded_from or 'none (defaults and env only)'}")
    print()

    width = max(len(name) for name in config.options)
    for name, info in config.describe().items():
        print(f"  {name:<{width}}  {info['value']!r}  [{info['source']}]  ({info['env']})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jesthtmlreporter",
        description="Render test run results into a self-contained HTML report",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug output and full tracebacks on errors",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    # render
    p_render = sub.add_parser(
        "render",
        help="Render an HTML report from an aggregated results file",
    )
    p_render.add_argument("--results", required=True, help="Path to the results JSON/YAML file")
    p_render.add_argument(
        "--console-logs",
        dest="console_logs",
        help="Path to captured console logs (default: console entries in the results file)",
    )
    p_render.add_argument("--cwd", help="Directory to read config files from (default: current)")
    p_render.add_argument("--output", "-o", help="Output HTML file (outputPath)")
    p_render.add_argument("--page-title", dest="page_title", help="Page title (pageTitle)")
    p_render.add_argument("--theme", help="Built-in theme (theme)")
    p_render.add_argument(
        "--sort",
        choices=[s.value for s in SortType],
        help="Suite ordering (sort)",
    )
    p_render.add_argument(
        "--status-ignore-filter",
        dest="status_ignore_filter",
        help="Comma-separated statuses to leave out (statusIgnoreFilter)",
    )
    p_render.add_argument("--date-format", dest="date_format", help="Start time format (dateFormat)")
    p_render.add_argument("--logo", help="Logo image URL (logoPath)")
    p_render.add_argument("--boilerplate", help="Boilerplate HTML file (boilerplatePath)")
    p_render.add_argument(
        "--style-override",
        dest="style_override",
        help="Stylesheet to link instead of the theme (styleOverridePath)",
    )
    p_render.add_argument(
        "--custom-script",
        dest="custom_script",
        help="Script to include at the end of the body (customScriptPath)",
    )
    p_render.add_argument(
        "--warning-threshold",
        dest="warning_threshold",
        type=float,
        help="Suite duration in seconds that gets a warning (executionTimeWarningThreshold)",
    )
    p_render.add_argument(
        "--include-failure-msg",
        dest="include_failure_msg",
        action="store_true",
        default=None,
        help="Show failure messages under failed tests",
    )
    p_render.add_argument(
        "--include-console-log",
        dest="include_console_log",
        action="store_true",
        default=None,
        help="Show captured console output per suite",
    )
    p_render.add_argument(
        "--append",
        action="store_true",
        default=None,
        help="Append to the output file instead of overwriting it",
    )
    p_render.add_argument(
        "--use-css-file",
        dest="use_css_file",
        action="store_true",
        default=None,
        help="Link the theme stylesheet instead of inlining it",
    )
    p_render.set_defaults(func=_cmd_render)

    # show-config
    p_show_config = sub.add_parser(
        "show-config",
        help="Show effective configuration from all sources",
    )
    p_show_config.add_argument("--cwd", help="Directory to read config files from (default: current)")
    p_show_config.set_defaults(func=_cmd_show_config)

    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    if getattr(args, "cwd", None):
        args.cwd = str(Path(args.cwd).resolve())

    configure_logging(verbose=args.verbose)

    try:
        rc = args.func(args)
        raise SystemExit(rc)
    except SystemExit:
        raise
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        raise SystemExit(130)
    except ReporterError as e:
        log_message("error", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
