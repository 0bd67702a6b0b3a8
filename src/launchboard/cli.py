"""CLI entrypoint for launchboard."""

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from launchboard.config.loader import get_api_settings, load_config
from launchboard.output.console import (
    describe_state,
    render_company_json,
    render_company_summary,
    render_launches_json,
    render_launches_text,
)
from launchboard.retrieval.fixture_session import FixtureSession
from launchboard.retrieval.session import GenericSession, HttpSession
from launchboard.service.spacex_service import SpaceXService
from launchboard.state.dispatch import QueueDispatcher
from launchboard.state.fetch_state import Failed, Idle, Loading
from launchboard.state.observable import Observable
from launchboard.utils.logging import configure_logging, get_logger
from launchboard.viewmodel.launch_filter import LaunchFilter
from launchboard.viewmodel.spacex_viewmodel import SpaceXViewModel

logger = get_logger(__name__)


def _settled(*states: Observable) -> bool:
    return all(not isinstance(state.value, (Idle, Loading)) for state in states)


def build_session(args: argparse.Namespace, config: Dict[str, Any]) -> HttpSession:
    """Fixture-backed session when --fixtures is given, network session otherwise."""
    if args.fixtures:
        logger.info(f"Serving responses from fixtures in {args.fixtures}")
        return FixtureSession(fixtures_dir=args.fixtures)

    api = get_api_settings(config)
    return GenericSession(
        timeout_seconds=api["timeout_seconds"],
        user_agent=api.get("user_agent"),
        max_workers=config["executor"]["max_workers"],
    )


def build_viewmodel(
    args: argparse.Namespace,
    session: HttpSession,
    config: Dict[str, Any],
    dispatcher: QueueDispatcher,
) -> SpaceXViewModel:
    api = get_api_settings(config)
    retries = args.retries if args.retries is not None else api["retries"]
    service = SpaceXService(session, base_url=api["base_url"], retries=retries)
    return SpaceXViewModel(service, dispatcher=dispatcher)


def _watch_launches(viewmodel: SpaceXViewModel) -> None:
    viewmodel.launches_state.subscribe(lambda state: logger.info(f"launches: {describe_state(state)}"))


def _run(args: argparse.Namespace, want_launches: bool, want_info: bool) -> int:
    config = load_config(args.config)
    dispatcher = QueueDispatcher()

    with build_session(args, config) as session:
        viewmodel = build_viewmodel(args, session, config, dispatcher)
        watched: List[Observable] = []

        if want_launches:
            _watch_launches(viewmodel)
            if args.filter:
                viewmodel.apply_filter(LaunchFilter(args.filter))
            viewmodel.fetch_launches()
            watched.append(viewmodel.launches_state)
        if want_info:
            viewmodel.fetch_info()
            watched.append(viewmodel.info_state)

        dispatcher.run_until(lambda: _settled(*watched))

    exit_code = 0

    if want_info:
        info_state = viewmodel.info
        if isinstance(info_state, Failed):
            print(f"Error: could not load company info: {info_state.error}")
            exit_code = 1
        elif args.format == "json" and not want_launches:
            print(render_company_json(info_state.value))
        else:
            print(render_company_summary(info_state.value))

    if want_launches:
        launches_state = viewmodel.launches
        if isinstance(launches_state, Failed):
            print(f"Error: could not load launches: {launches_state.error}")
            exit_code = 1
        else:
            launches = viewmodel.filtered_launches
            if args.limit is not None:
                launches = launches[:args.limit]
            if args.format == "json":
                print(render_launches_json(launches))
            else:
                print(render_launches_text(launches, viewmodel.active_filter.value))

    return exit_code


def cmd_launches(args: argparse.Namespace) -> int:
    """Fetch launches and print them through the selected filter."""
    return _run(args, want_launches=True, want_info=False)


def cmd_company(args: argparse.Namespace) -> int:
    """Fetch and print company info."""
    return _run(args, want_launches=False, want_info=True)


def cmd_overview(args: argparse.Namespace) -> int:
    """Fetch both resources, as the app does on startup, and print the summary then the list."""
    return _run(args, want_launches=True, want_info=True)


def _add_launch_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--filter",
        type=str,
        choices=[mode.value for mode in LaunchFilter],
        default=None,
        help="Filter or sort order for the launch list (default: ascending)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Show at most this many launches",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchboard",
        description="Browse SpaceX launches and company info",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to launchboard config YAML (default: launchboard.config.yaml if present)",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        default=None,
        help="Directory with launches.json and company.json to serve instead of the network",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Retry each request this many extra times on failure (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    launches_parser = subparsers.add_parser("launches", help="List launches")
    _add_launch_options(launches_parser)
    launches_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    launches_parser.set_defaults(func=cmd_launches)

    company_parser = subparsers.add_parser("company", help="Show company info")
    company_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    company_parser.set_defaults(func=cmd_company)

    overview_parser = subparsers.add_parser("overview", help="Show company summary and launch list")
    _add_launch_options(overview_parser)
    overview_parser.set_defaults(func=cmd_overview, format="text")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.retries is not None and args.retries < 0:
        parser.error("--retries must be non-negative")

    if getattr(args, "limit", None) is not None and args.limit < 0:
        parser.error("--limit must be non-negative")

    configure_logging(args.verbose)

    try:
        exit_code = args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise

    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
