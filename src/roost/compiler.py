"""Compiler facade — runs every pass and returns the frozen artifact set.

Usage::

    from roost import compile_routes, route

    compiled = compile_routes(
        route("root", "/",
            route("users", "/users",
                route("user", "/:id"),
            ),
        ),
    )
    compiled.routes.users.user.materialize("42")   # "/users/42"

Passes run in order: tree (classify, build, validate), descriptors, and,
when ``with_views`` is set, assembly. Any diagnostic aborts the whole
compilation with :class:`~roost.errors.CompileError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from roost.assembly import RouteAssembly, generate_assembly
from roost.config import CompilerConfig
from roost.descriptors import RouteDescriptor, RouteIndex, generate_descriptors
from roost.errors import ConfigurationError
from roost.routing.declaration import RouteDecl, from_mapping
from roost.routing.tree import RouteTree, build_tree

logger = logging.getLogger("roost.compiler")


@dataclass(frozen=True, slots=True)
class CompiledRoutes:
    """Everything generated from one declaration.

    Attributes:
        tree: The validated route tree.
        routes: The root descriptor; children are attributes.
        index: Every descriptor by qualified or variant name.
        config: The configuration the routes were compiled with.
    """

    tree: RouteTree
    routes: RouteDescriptor
    index: RouteIndex
    config: CompilerConfig
    _assembly: RouteAssembly | None = None

    @property
    def assembly(self) -> RouteAssembly:
        """The view assembly. Raises ``ConfigurationError`` if views were not compiled."""
        if self._assembly is None:
            msg = (
                "No view assembly was generated. "
                "Use compile_routes(..., config=CompilerConfig(with_views=True), scope=...)."
            )
            raise ConfigurationError(msg)
        return self._assembly

    @property
    def has_assembly(self) -> bool:
        return self._assembly is not None


def compile_routes(
    decl: RouteDecl | Mapping[str, Any],
    *,
    config: CompilerConfig | None = None,
    scope: Mapping[str, Any] | None = None,
) -> CompiledRoutes:
    """Compile a route declaration into descriptors and, optionally, an assembly.

    Args:
        decl: A :class:`RouteDecl` tree or nested mappings accepted by
            :func:`~roost.routing.declaration.from_mapping`.
        config: Compiler options. Defaults to ``CompilerConfig()``.
        scope: Names available to layout/view/fallback identifiers.
            Only used when ``config.with_views`` is set.

    Raises:
        ConfigurationError: The configuration or a mapping declaration is
            invalid.
        CompileError: The declaration violates a route constraint.
    """
    config = config or CompilerConfig()
    config.validate()
    if not isinstance(decl, RouteDecl):
        decl = from_mapping(decl)

    tree = build_tree(decl, config)
    logger.debug("Built route tree %r with %d routes", tree.root.name, len(tree))

    routes = generate_descriptors(tree)
    index = RouteIndex(routes)
    logger.debug("Generated %d descriptors", len(index))

    assembly = None
    if config.with_views:
        assembly = generate_assembly(tree, scope or {}, config)
        logger.debug("Assembled views for %d branches", sum(1 for _ in assembly.walk()))
    elif any(node.binding is not None for node in tree.walk()):
        logger.debug("View bindings present but with_views is off; skipping assembly")

    logger.info(
        "Compiled %d routes from %r (views: %s)",
        len(index),
        tree.root.name,
        "on" if assembly is not None else "off",
    )
    return CompiledRoutes(tree=tree, routes=routes, index=index, config=config, _assembly=assembly)
