"""Path parameter definitions.

A placeholder in a route pattern looks like ``{name}``, ``{?name}``
(optional) or ``{name:(regex)}`` (custom fragment).
"""

import re
from dataclasses import dataclass

# One or more non-separator characters, captured
DEFAULT_FRAGMENT = r"([^/]+?)"

# ``{`` optional-marker name [``:`` parenthesized fragment] ``}``
PLACEHOLDER = re.compile(r"\{(\??)(\w+?)(?::(\(.+?\)))?\}")


@dataclass(frozen=True, slots=True)
class ParameterDefinition:
    """A named path parameter declared by a route pattern.

    ``{id}``          -> ParameterDefinition("id", DEFAULT_FRAGMENT)
    ``{id:(\\d+)}``    -> ParameterDefinition("id", r"(\\d+)")
    ``{?page}``       -> ParameterDefinition("page", DEFAULT_FRAGMENT, optional=True)
    """

    name: str
    fragment: str = DEFAULT_FRAGMENT
    optional: bool = False

    def accepts(self, value: str) -> bool:
        """True if *value* satisfies this parameter's fragment as a whole string."""
        return re.fullmatch(self.fragment, value) is not None


def parse_parameters(
    pattern: str, *, default_fragment: str = DEFAULT_FRAGMENT
) -> list[ParameterDefinition]:
    """Collect every placeholder of *pattern*, in order of appearance."""
    return [
        ParameterDefinition(
            name=m.group(2),
            fragment=m.group(3) or default_fragment,
            optional=m.group(1) == "?",
        )
        for m in PLACEHOLDER.finditer(pattern)
    ]


def fragment_problem(fragment: str) -> str | None:
    """Describe why *fragment* cannot stand in for a placeholder, or ``None``.

    A usable fragment is one capturing group spanning the whole fragment,
    e.g. ``(\\d+)`` or ``((\\d+)-(\\d+))``, that compiles. ``(a)|(b)`` and
    ``(a)(b)`` are two groups; ``(?:a)`` and ``[^/]+`` capture nothing.
    """
    if not is_single_group(fragment):
        return "must be a single parenthesized group"
    if fragment.startswith("(?") and not fragment.startswith("(?P<"):
        return "must be a capturing group"
    try:
        re.compile(fragment)
    except re.error as exc:
        return f"is not a valid regular expression ({exc})"
    return None


def is_single_group(fragment: str) -> bool:
    """True if *fragment* opens with ``(`` and the matching ``)`` ends it."""
    if not fragment.startswith("("):
        return False

    depth = 0
    index = 0
    end = len(fragment)
    while index < end:
        char = fragment[index]
        if char == "\\":
            index += 2
            continue
        if char == "[":
            index = _skip_class(fragment, index)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index == end - 1
        index += 1
    return False


def _skip_class(fragment: str, start: int) -> int:
    # A ``]`` right after ``[`` or ``[^`` is a literal member
    index = start + 1
    if index < len(fragment) and fragment[index] == "^":
        index += 1
    if index < len(fragment) and fragment[index] == "]":
        index += 1
    while index < len(fragment):
        char = fragment[index]
        if char == "\\":
            index += 2
            continue
        if char == "]":
            return index + 1
        index += 1
    return index
