"""Route declarations — the input to the compiler.

A declaration is a strictly nested tree of :class:`RouteDecl` values.
Build one in Python with :func:`route`::

    routes = route(
        "root", "/",
        route("users", "/users",
            route("user", "/:id",
                route("details", "/details"),
            ),
        ),
    )

or load it from plain nested mappings (e.g. parsed JSON/TOML) with
:func:`from_mapping`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from roost.errors import ConfigurationError

_BINDING_KEYS = ("layout", "view", "fallback")
_ALLOWED_KEYS = frozenset({"name", "path", "pattern", "children", *_BINDING_KEYS})


@dataclass(frozen=True, slots=True)
class RouteDecl:
    """One declared route and its ordered children.

    ``layout``, ``view`` and ``fallback`` are opaque identifiers naming
    host-framework constructors. They are only resolved when the routes
    are compiled with view assembly enabled.
    """

    name: str
    pattern: str
    children: tuple[RouteDecl, ...] = ()
    layout: str | None = None
    view: str | None = None
    fallback: str | None = None

    @property
    def has_binding(self) -> bool:
        return any(getattr(self, key) is not None for key in _BINDING_KEYS)


def route(
    name: str,
    pattern: str,
    *children: RouteDecl,
    layout: str | None = None,
    view: str | None = None,
    fallback: str | None = None,
) -> RouteDecl:
    """Declare a route. Children are positional and keep their order."""
    return RouteDecl(
        name=name,
        pattern=pattern,
        children=children,
        layout=layout,
        view=view,
        fallback=fallback,
    )


def from_mapping(data: Mapping[str, Any], *, _where: str = "<root>") -> RouteDecl:
    """Build a declaration from nested mappings.

    Each mapping needs ``name`` and ``path`` (or ``pattern``) and may
    carry ``layout``, ``view``, ``fallback`` and a ``children`` list::

        {"name": "root", "path": "/", "children": [
            {"name": "users", "path": "/users"},
        ]}

    Raises:
        ConfigurationError: A mapping is missing a required key, has an
            unknown key, or a value has the wrong type.
    """
    if not isinstance(data, Mapping):
        msg = f"Route declaration at {_where} must be a mapping, got {type(data).__name__}"
        raise ConfigurationError(msg)

    unknown = sorted(set(data) - _ALLOWED_KEYS)
    if unknown:
        msg = f"Route declaration at {_where} has unknown keys: {', '.join(unknown)}"
        raise ConfigurationError(msg)

    name = data.get("name")
    if not isinstance(name, str):
        msg = f"Route declaration at {_where} needs a string 'name'"
        raise ConfigurationError(msg)
    where = name if _where == "<root>" else f"{_where} > {name}"

    pattern = data.get("path", data.get("pattern"))
    if not isinstance(pattern, str):
        msg = f"Route declaration at {where} needs a string 'path'"
        raise ConfigurationError(msg)

    bindings: dict[str, str | None] = {}
    for key in _BINDING_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            msg = f"Route declaration at {where}: {key!r} must be a string identifier"
            raise ConfigurationError(msg)
        bindings[key] = value

    raw_children = data.get("children", ())
    if isinstance(raw_children, (str, Mapping)) or not isinstance(raw_children, Iterable):
        msg = f"Route declaration at {where}: 'children' must be a list"
        raise ConfigurationError(msg)

    children = tuple(from_mapping(child, _where=where) for child in raw_children)
    return RouteDecl(name=name, pattern=pattern, children=children, **bindings)
