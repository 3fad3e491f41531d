"""distroute CLI — inspect a router's routes and try requests against it.

Entry point registered as ``distroute`` in ``pyproject.toml``::

    [project.scripts]
    distroute = "distroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``distroute`` command."""
    parser = argparse.ArgumentParser(
        prog="distroute",
        description="distroute — a regex-based request router with argument injection.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- distroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )

    # -- distroute match --------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which route a request hits")
    match_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )
    match_parser.add_argument("method", help="Request method (e.g. GET)")
    match_parser.add_argument("path", help="Request path (e.g. /users/42)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from distroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from distroute.cli._match import run_match

        run_match(args)
