r"""Route pattern compilation.

Turns ``/user/{id:(\d+)}/{?tab}`` into a single anchored regular
expression, ``^/user/(\d+)(?:/([^/]+?))?$``, plus the ordered list of
parameters it declares.

Compilation is deterministic: the same pattern string always yields the
same expression.
"""

import re
from dataclasses import dataclass, field

from distroute.errors import PatternSyntaxError
from distroute.routing.params import (
    DEFAULT_FRAGMENT,
    PLACEHOLDER,
    ParameterDefinition,
    fragment_problem,
    is_single_group,
    parse_parameters,
)

# ``{}``, ``{?}``, ``{:(x)}`` and friends
_EMPTY_NAME = re.compile(r"\{\??(?::[^}]*)?\}")


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A route pattern with its synthesized match expression."""

    pattern: str
    expression: str
    parameters: tuple[ParameterDefinition, ...]
    regex: re.Pattern[str] = field(repr=False, compare=False)

    def fullmatch(self, path: str) -> re.Match[str] | None:
        """Match *path* against the whole expression."""
        return self.regex.fullmatch(path)


def compile_pattern(
    pattern: str,
    *,
    default_fragment: str = DEFAULT_FRAGMENT,
    strict: bool = True,
) -> CompiledPattern:
    """Compile a route pattern.

    Required placeholders are replaced by their fragment. An optional
    placeholder swallows the ``/`` that introduces it, so ``/a/{?b}``
    matches both ``/a/x`` and ``/a`` rather than requiring ``/a/``.
    Literal text is matched verbatim and case-sensitively.

    Raises ``PatternSyntaxError`` when *strict* and the pattern contains a
    malformed placeholder, or whenever the resulting expression does not
    compile.
    """
    parameters = parse_parameters(pattern, default_fragment=default_fragment)
    if strict:
        _validate(pattern, parameters)

    parts: list[str] = ["^"]
    last = 0
    for match, param in zip(PLACEHOLDER.finditer(pattern), parameters, strict=True):
        literal = pattern[last : match.start()]
        fragment = _enclosed(param.fragment)
        if param.optional and literal.endswith("/"):
            parts.append(re.escape(literal[:-1]))
            parts.append(f"(?:/{fragment})?")
        elif param.optional:
            parts.append(re.escape(literal))
            parts.append(f"(?:{fragment})?")
        else:
            parts.append(re.escape(literal))
            parts.append(fragment)
        last = match.end()
    parts.append(re.escape(pattern[last:]))
    parts.append("$")

    expression = "".join(parts)
    try:
        regex = re.compile(expression)
    except re.error as exc:
        raise PatternSyntaxError(pattern, f"expression does not compile ({exc})") from exc

    return CompiledPattern(
        pattern=pattern,
        expression=expression,
        parameters=tuple(parameters),
        regex=regex,
    )


def _validate(pattern: str, parameters: list[ParameterDefinition]) -> None:
    if _EMPTY_NAME.search(pattern):
        raise PatternSyntaxError(pattern, "placeholder with an empty name")

    leftover = PLACEHOLDER.sub("", pattern)
    if "{" in leftover or "}" in leftover:
        raise PatternSyntaxError(
            pattern,
            "unbalanced brace or malformed placeholder "
            "(expected {name}, {?name} or {name:(regex)})",
        )

    seen: set[str] = set()
    for param in parameters:
        if param.name in seen:
            raise PatternSyntaxError(pattern, f"duplicate parameter {param.name!r}")
        seen.add(param.name)
        problem = fragment_problem(param.fragment)
        if problem is not None:
            raise PatternSyntaxError(
                pattern, f"invalid fragment {param.fragment!r} for {param.name!r}: {problem}"
            )


def _enclosed(fragment: str) -> str:
    # An alternation outside any group would split the anchored expression
    if is_single_group(fragment):
        return fragment
    return f"(?:{fragment})"
