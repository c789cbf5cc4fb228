"""Roost CLI — render a page or follow the live timeline from a terminal.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import os
import sys


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-url",
        default=None,
        help="API server origin (default: http://localhost:3000)",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("ROOST_AUTH_TOKEN"),
        help="Auth token (default: $ROOST_AUTH_TOKEN)",
    )
    parser.add_argument("--page-size", type=int, default=None, help="Timeline page length")
    parser.add_argument("--log-level", default="info", help="Logging level")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — client runtime for a social timeline.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost view -------------------------------------------------------
    view_parser = subparsers.add_parser("view", help="Render one page and print its HTML")
    view_parser.add_argument("path", help="In-app path (e.g. / or /users/john)")
    _add_common(view_parser)

    # -- roost follow -----------------------------------------------------
    follow_parser = subparsers.add_parser("follow", help="Watch the live timeline")
    follow_parser.add_argument(
        "--auto-flush",
        action="store_true",
        help="Flush new posts into the timeline as they arrive",
    )
    _add_common(follow_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "view":
        from roost.cli._view import run_view

        run_view(args)
    elif args.command == "follow":
        from roost.cli._follow import run_follow

        run_follow(args)
