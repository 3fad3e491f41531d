"""Immutable HTTP request.

The router only reads ``method`` and ``path``; any object exposing those
two attributes is accepted wherever a request is expected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit


@runtime_checkable
class RequestLike(Protocol):
    """What the router needs from a request."""

    @property
    def method(self) -> str: ...

    @property
    def path(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Build one directly, or from a full URL::

        Request("GET", "/users/42")
        Request.from_url("GET", "https://example.com/users/42?tab=posts")
    """

    method: str
    path: str
    query: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: tuple[tuple[str, str], ...] = (),
    ) -> Request:
        """Split *url* into path and query. Scheme and host are dropped."""
        parts = urlsplit(url)
        return cls(method=method, path=parts.path or "/", query=parts.query, headers=headers)

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default
