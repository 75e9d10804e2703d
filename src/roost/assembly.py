"""View assembly — the nested routing structure handed to the host router.

Only generated when routes are compiled with ``with_views=True``. Every
internal route becomes a :class:`ParentRoute` that wraps its ``layout``
around its children, tried in declared order, with ``fallback`` as the
branch taken when no child matched. Every leaf becomes a :class:`Route`
rendering its ``view``::

    RouteAssembly(not_found=NotFound)
      ParentRoute /  layout=MainLayout
        Route /welcome  view=PageWelcome
        ParentRoute /users  layout=UsersLayout
          Route /:id  view=UserPage
          Route (fallback)  view=NoUser
        Route (fallback)  view=Dashboard

Siblings are never reordered: the host router tries them first-declared,
first-matched. Layout, view and fallback identifiers are opaque names
resolved against a caller-supplied scope; the objects they resolve to are
never inspected.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from roost.config import CompilerConfig
from roost.diagnostics import DiagnosticCode, DiagnosticSink
from roost.errors import ConfigurationError
from roost.routing.segments import Segment
from roost.routing.tree import RouteNode, RouteTree

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Binding:
    """A resolved layout/view/fallback: the declared name and its target."""

    name: str
    target: Any


@dataclass(frozen=True, slots=True)
class Route:
    """A leaf branch. ``path`` is relative to the enclosing ParentRoute.

    The fallback branch of a ParentRoute is a Route with an empty path.
    """

    path: tuple[Segment, ...]
    view: Binding
    route_name: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.route_name is None


@dataclass(frozen=True, slots=True)
class ParentRoute:
    """An internal branch wrapping ``layout`` around its children."""

    path: tuple[Segment, ...]
    layout: Binding
    children: tuple[Route | ParentRoute, ...]
    fallback: Route
    route_name: str

    @property
    def branches(self) -> tuple[Route | ParentRoute, ...]:
        """Children followed by the fallback, in match order."""
        return (*self.children, self.fallback)


type Branch = Route | ParentRoute


@dataclass(frozen=True, slots=True)
class RouteAssembly:
    """Top-level assembly: the root-level branches and the global not-found."""

    routes: tuple[Branch, ...]
    not_found: Binding | None = None

    def walk(self) -> Iterator[tuple[int, Branch]]:
        """Yield ``(depth, branch)`` pairs in match order."""
        stack: list[tuple[int, Branch]] = [(0, branch) for branch in reversed(self.routes)]
        while stack:
            depth, branch = stack.pop()
            yield depth, branch
            if isinstance(branch, ParentRoute):
                stack.extend((depth + 1, child) for child in reversed(branch.branches))

    def describe(self) -> str:
        """Indented outline of the assembly, one branch per line."""
        header = "RouteAssembly"
        if self.not_found is not None:
            header += f"(not_found={self.not_found.name})"
        lines = [header]
        for depth, branch in self.walk():
            indent = "  " * (depth + 1)
            path = "/" + "/".join(str(seg) for seg in branch.path)
            match branch:
                case ParentRoute():
                    lines.append(f"{indent}ParentRoute {path}  layout={branch.layout.name}")
                case Route() if branch.is_fallback:
                    lines.append(f"{indent}Route (fallback)  view={branch.view.name}")
                case Route():
                    lines.append(f"{indent}Route {path}  view={branch.view.name}")
        return "\n".join(lines)


def resolve_identifier(name: str, scope: Mapping[str, Any]) -> Any:
    """Resolve a dotted identifier against *scope*.

    The first part is looked up in the mapping, the rest as attributes::

        resolve_identifier("pages.users.UserPage", {"pages": pages_module})

    Raises:
        LookupError: Any part of the name cannot be found.
    """
    head, *rest = name.split(".")
    target = scope.get(head, _MISSING)
    if target is _MISSING:
        raise LookupError(f"{head!r} is not defined")
    for part in rest:
        target = getattr(target, part, _MISSING)
        if target is _MISSING:
            raise LookupError(f"{part!r} not found while resolving {name!r}")
    return target


def generate_assembly(
    tree: RouteTree,
    scope: Mapping[str, Any],
    config: CompilerConfig,
) -> RouteAssembly:
    """Assemble the nested routing structure for *tree*.

    Raises:
        ConfigurationError: ``config.with_views`` is not set.
        CompileError: With every missing or unresolved binding.
    """
    if not config.with_views:
        msg = "View assembly is disabled. Compile with CompilerConfig(with_views=True)."
        raise ConfigurationError(msg)

    sink = DiagnosticSink()
    root = _assemble(tree.root, scope, sink)

    not_found = None
    if config.not_found is not None:
        not_found = _resolve(config.not_found, "not_found", tree.root, scope, sink, global_=True)

    sink.raise_if_any()
    return RouteAssembly(routes=(root,), not_found=not_found)  # type: ignore[arg-type]


def _assemble(node: RouteNode, scope: Mapping[str, Any], sink: DiagnosticSink) -> Branch | None:
    binding = node.binding
    layout = binding.layout if binding else None
    view = binding.view if binding else None
    fallback = binding.fallback if binding else None

    if node.is_leaf:
        if view is None:
            sink.report(
                DiagnosticCode.MISSING_VIEW,
                "a leaf route requires a 'view'",
                location=node.location,
                position=node.position,
            )
            return None
        resolved = _resolve(view, "view", node, scope, sink)
        if resolved is None:
            return None
        return Route(path=node.segments, view=resolved, route_name=node.name)

    children = tuple(_assemble(child, scope, sink) for child in node.children)

    if layout is None:
        sink.report(
            DiagnosticCode.MISSING_LAYOUT,
            "a route with children requires a 'layout' to wrap them",
            location=node.location,
            position=node.position,
        )
    if fallback is None:
        sink.report(
            DiagnosticCode.MISSING_FALLBACK,
            "a route with children requires a 'fallback' for when no child matches",
            location=node.location,
            position=node.position,
        )
    resolved_layout = _resolve(layout, "layout", node, scope, sink) if layout else None
    resolved_fallback = _resolve(fallback, "fallback", node, scope, sink) if fallback else None

    if resolved_layout is None or resolved_fallback is None or any(c is None for c in children):
        return None
    return ParentRoute(
        path=node.segments,
        layout=resolved_layout,
        children=children,  # type: ignore[arg-type]
        fallback=Route(path=(), view=resolved_fallback),
        route_name=node.name,
    )


def _resolve(
    name: str,
    role: str,
    node: RouteNode,
    scope: Mapping[str, Any],
    sink: DiagnosticSink,
    *,
    global_: bool = False,
) -> Binding | None:
    try:
        target = resolve_identifier(name, scope)
    except LookupError as exc:
        sink.report(
            DiagnosticCode.UNRESOLVED_BINDING,
            f"cannot resolve {role} {name!r}: {exc.args[0]}",
            location=() if global_ else node.location,
            position=() if global_ else node.position,
        )
        return None
    return Binding(name=name, target=target)
