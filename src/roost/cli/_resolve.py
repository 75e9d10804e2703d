"""Declaration import resolution — resolves ``"module:attribute"`` strings.

Shared utility used by every ``roost`` subcommand to locate a route
declaration from a user-supplied import string.
"""

import importlib
from collections.abc import Mapping
from typing import Any

from roost.routing.declaration import RouteDecl


def resolve_declaration(import_string: str) -> RouteDecl | Mapping[str, Any]:
    """Resolve an import string to a route declaration.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"routes"`` (e.g. ``"myapp"`` resolves to
    ``myapp.routes``).

    Supports factory functions: if the resolved object is callable it is
    called and its result is used.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a declaration.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "routes"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (RouteDecl, Mapping)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, (RouteDecl, Mapping)):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a route declaration"
        raise TypeError(msg)

    return obj


def resolve_scope(module_path: str | None) -> dict[str, Any]:
    """Names of *module_path* for resolving view bindings; empty if None."""
    if module_path is None:
        return {}
    return vars(importlib.import_module(module_path))
