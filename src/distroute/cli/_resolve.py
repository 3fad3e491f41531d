"""Locate the Router a CLI command should inspect.

``distroute routes`` and ``distroute match`` both take a target written as
``module[:attribute.path]``.
"""

import importlib
from typing import Any

from distroute.routing.router import Router


def resolve_router(target: str) -> Router:
    """Import *target* and return the Router it names.

    The part after ``:`` is a dotted attribute path walked from the
    module and defaults to ``router``, so ``"shop"``, ``"shop:router"``
    and ``"shop:api.router"`` are all accepted. Along the way:

    - a callable that is not a Router is treated as a factory and called
      with no arguments;
    - an object that is not a Router but carries one on its ``router``
      attribute (an application wrapping its router) is unwrapped.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If an attribute on the path does not exist.
        TypeError: If a factory fails or no Router is found.
    """
    module_name, _, attr_path = target.partition(":")
    obj: Any = importlib.import_module(module_name)
    for attr in (attr_path or "router").split("."):
        obj = getattr(obj, attr)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Router factory {target!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router) and isinstance(getattr(obj, "router", None), Router):
        obj = obj.router

    if not isinstance(obj, Router):
        msg = f"{target!r} resolved to {type(obj).__name__}, not a distroute.Router instance"
        raise TypeError(msg)

    return obj
