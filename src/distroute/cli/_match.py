"""``distroute match`` — report the first route a request would hit."""

import argparse
import sys

from distroute.cli._resolve import resolve_router
from distroute.errors import NoRouteMatchedError


def run_match(args: argparse.Namespace) -> None:
    """Print the matching route and its extracted path values.

    Exits with status 1 when no route matches.
    """
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        match = router.match(args.method, args.path)
    except NoRouteMatchedError as exc:
        print(f"No match: {exc.detail}", file=sys.stderr)
        raise SystemExit(1) from exc

    route = match.route
    print(f"route:   {', '.join(sorted(route.methods)) or '*'} {route.pattern}")
    print(f"handler: {route.handler.display_name}")
    if not match.path_params:
        print("params:  (none)")
        return
    print("params:")
    width = max(len(name) for name in match.path_params)
    for name, value in match.path_params.items():
        print(f"  {name:<{width}} = {value!r}")
