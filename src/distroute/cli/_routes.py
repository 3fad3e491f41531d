"""``distroute routes`` — list registered routes."""

import argparse
import sys

from distroute.cli._resolve import resolve_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATTERN, EXPRESSION and HANDLER."""
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods)) or "*"
        handler_name = route.handler.display_name
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((methods_str, route.pattern, route.expression, handler_name))

    headers = ("METHOD", "PATTERN", "EXPRESSION", "HANDLER")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(row[3]) for row in rows)
    print("-" * min(sep_len, 100))
    for row in rows:
        print(fmt.format(*row))
