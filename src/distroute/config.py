"""Router configuration.

Settings that shape how patterns are compiled when routes are
registered. The router reads them once per ``map()`` call.
"""

from dataclasses import dataclass

from distroute.errors import ConfigurationError
from distroute.routing.params import DEFAULT_FRAGMENT, fragment_problem


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(base_pattern="/api", strict_patterns=False)
    """

    # Prefix prepended to every pattern registered outside a group
    base_pattern: str = ""

    # Fragment used for placeholders without an explicit ``:(...)`` part
    default_fragment: str = DEFAULT_FRAGMENT

    # Reject malformed placeholders at registration time
    strict_patterns: bool = True

    def __post_init__(self) -> None:
        if not self.strict_patterns:
            return
        problem = fragment_problem(self.default_fragment)
        if problem is not None:
            msg = f"default_fragment {self.default_fragment!r} {problem}"
            raise ConfigurationError(msg)
