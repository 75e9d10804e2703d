"""Roost — compile route declarations into typed link builders.

Declare routes once, get a descriptor per route with its own segments
and a fixed-arity ``materialize()``, plus an optional nested assembly of
layout/view/fallback bindings for the host router.

Basic usage::

    from roost import compile_routes, route

    compiled = compile_routes(
        route("root", "/",
            route("users", "/users",
                route("user", "/:id",
                    route("details", "/details"),
                ),
            ),
        ),
    )

    routes = compiled.routes
    routes.users.user.path()                       # (Param(name='id'),)
    routes.users.user.details.materialize("42")    # "/users/42/details"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CompileError",
    "CompiledRoutes",
    "CompilerConfig",
    "ConfigurationError",
    "Diagnostic",
    "OptionalParam",
    "Param",
    "PatternError",
    "RoostError",
    "RouteDecl",
    "RouteDescriptor",
    "Static",
    "Wildcard",
    "compile_routes",
    "from_mapping",
    "route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name in ("compile_routes", "CompiledRoutes"):
        from roost import compiler

        return getattr(compiler, name)

    if name == "CompilerConfig":
        from roost.config import CompilerConfig

        return CompilerConfig

    if name in ("route", "from_mapping", "RouteDecl"):
        from roost.routing import declaration

        return getattr(declaration, name)

    if name in ("Static", "Param", "OptionalParam", "Wildcard"):
        from roost.routing import segments

        return getattr(segments, name)

    if name == "RouteDescriptor":
        from roost.descriptors import RouteDescriptor

        return RouteDescriptor

    if name == "Diagnostic":
        from roost.diagnostics import Diagnostic

        return Diagnostic

    if name in ("RoostError", "ConfigurationError", "PatternError", "CompileError"):
        from roost import errors

        return getattr(errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
