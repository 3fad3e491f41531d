"""Request matching and path value extraction.

Captured groups are assigned to parameters by content, not position:
once optional groups are involved a group's index says little about
which parameter produced it. Each declared parameter, in declaration
order, claims the first remaining captured value that satisfies its own
fragment as a whole string.
"""

from collections.abc import Set

from distroute.routing.pattern import CompiledPattern


def matches(compiled: CompiledPattern, methods: Set[str], method: str, path: str) -> bool:
    """True if *method* is accepted and *path* satisfies the whole expression.

    An empty *methods* set accepts any method.
    """
    if methods and method not in methods:
        return False
    return compiled.fullmatch(path) is not None


def extract(compiled: CompiledPattern, path: str) -> dict[str, str]:
    """Map parameter names to the values captured from *path*.

    Groups that did not participate in the match (an omitted optional
    segment) contribute no candidate. Parameters no candidate satisfies
    are left out of the result. A non-matching *path* yields ``{}``.
    """
    match = compiled.fullmatch(path)
    if match is None:
        return {}

    candidates = [value for value in match.groups() if value is not None]
    values: dict[str, str] = {}

    for param in compiled.parameters:
        for index, value in enumerate(candidates):
            if param.accepts(value):
                values[param.name] = value
                del candidates[index]
                break

    return values
