"""Canonical route tree — built once from a declaration, immutable after.

Construction runs in two passes:

1. Build: classify every node's pattern, derive identifiers, link
   children in declared order. Problems local to one node (or one set
   of siblings) are reported here.
2. Validate: walk every root-to-node path and check the constraints a
   purely local check cannot see, such as a parameter name reused by an
   ancestor.

Both passes report into one :class:`~roost.diagnostics.DiagnosticSink`.
If anything was reported, :class:`~roost.errors.CompileError` is raised
and no tree is returned.

Nodes hold no parent pointers. Each node carries its ``position`` (child
indices from the root) and ancestry is recovered by index lookups.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from roost.config import CompilerConfig
from roost.diagnostics import DiagnosticCode, DiagnosticSink
from roost.errors import PatternError
from roost.routing.declaration import RouteDecl
from roost.routing.segments import (
    RESERVED_PREFIX,
    DynamicSegment,
    Segment,
    parse_pattern,
    python_identifier,
)


def to_pascal_case(identifier: str) -> str:
    """``multiple_static`` -> ``MultipleStatic``, ``_2fa`` -> ``_2fa``."""
    name = "".join(part[:1].upper() + part[1:] for part in identifier.split("_") if part)
    if name[:1].isdigit():
        name = f"_{name}"
    return name


@dataclass(frozen=True, slots=True)
class ViewBinding:
    """Host-framework constructors bound to a route.

    Attributes:
        layout: Wraps the children of an internal route.
        view: Rendered by a leaf route.
        fallback: Rendered by an internal route when no child matched.
    """

    layout: str | None = None
    view: str | None = None
    fallback: str | None = None


@dataclass(frozen=True, slots=True)
class RouteNode:
    """One route in the canonical tree.

    Attributes:
        name: The declared name.
        identifier: Python attribute name derived from ``name``.
        class_name: PascalCase form of ``identifier``.
        pattern: The declared pattern, relative to the parent.
        segments: Classified local segments, in declaration order.
        children: Child routes, in declaration order.
        binding: Layout/view/fallback identifiers, if any were declared.
        position: Child indices from the root (root is ``()``).
        location: Declared names from the root (root is ``(name,)``).
    """

    name: str
    identifier: str
    class_name: str
    pattern: str
    segments: tuple[Segment, ...]
    children: tuple[RouteNode, ...] = ()
    binding: ViewBinding | None = None
    position: tuple[int, ...] = ()
    location: tuple[str, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def dynamic_segments(self) -> tuple[DynamicSegment, ...]:
        return tuple(seg for seg in self.segments if seg.is_dynamic)  # type: ignore[misc]


class RouteTree:
    """A validated, frozen route tree.

    Usage::

        tree = build_tree(decl)
        node = tree.find("root.users.user")
        [p.name for p in tree.parameter_chain(node)]   # ["id"]
    """

    __slots__ = ("_by_name", "root")

    def __init__(self, root: RouteNode) -> None:
        self.root = root
        self._by_name = {self.qualified_name(node): node for node in self.walk()}

    def walk(self) -> Iterator[RouteNode]:
        """Yield every node, pre-order, siblings in declaration order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def node_at(self, position: tuple[int, ...]) -> RouteNode:
        """Return the node at *position*. Raises ``IndexError`` if absent."""
        node = self.root
        for index in position:
            node = node.children[index]
        return node

    def ancestry(self, node: RouteNode) -> tuple[RouteNode, ...]:
        """The nodes from the root down to *node*, both included."""
        return tuple(self.node_at(node.position[:depth]) for depth in range(len(node.position) + 1))

    def parent(self, node: RouteNode) -> RouteNode | None:
        if not node.position:
            return None
        return self.node_at(node.position[:-1])

    def parameter_chain(self, node: RouteNode) -> tuple[DynamicSegment, ...]:
        """All dynamic segments from the root down to *node*, in order."""
        return tuple(seg for ancestor in self.ancestry(node) for seg in ancestor.dynamic_segments)

    def qualified_name(self, node: RouteNode) -> str:
        """Dotted identifiers from the root, e.g. ``root.users.user``."""
        return ".".join(n.identifier for n in self.ancestry(node))

    def full_pattern(self, node: RouteNode) -> str:
        """The pattern of *node* including every ancestor's segments."""
        parts = [str(seg) for ancestor in self.ancestry(node) for seg in ancestor.segments]
        return "/" + "/".join(parts)

    def find(self, qualified_name: str) -> RouteNode:
        """Look up a node by qualified name. Raises ``KeyError`` if absent."""
        try:
            return self._by_name[qualified_name]
        except KeyError:
            msg = f"No route named {qualified_name!r}"
            raise KeyError(msg) from None

    def __iter__(self) -> Iterator[RouteNode]:
        return self.walk()

    def __len__(self) -> int:
        return len(self._by_name)


def build_tree(decl: RouteDecl, config: CompilerConfig | None = None) -> RouteTree:
    """Build and validate the canonical tree for *decl*.

    Raises:
        CompileError: With every diagnostic found. No partial tree is
            returned.
    """
    config = config or CompilerConfig()
    sink = DiagnosticSink()

    root = _build_node(decl, position=(), location=(), config=config, sink=sink)
    _validate_chains(root, seen={}, variants={}, prefix="", config=config, sink=sink)
    sink.raise_if_any()

    return RouteTree(root)


# -- Pass 1: build ----------------------------------------------------------


def _build_node(
    decl: RouteDecl,
    *,
    position: tuple[int, ...],
    location: tuple[str, ...],
    config: CompilerConfig,
    sink: DiagnosticSink,
) -> RouteNode:
    location = (*location, decl.name)

    try:
        segments = parse_pattern(decl.pattern, optional_wildcards=config.optional_wildcards)
    except PatternError as exc:
        sink.report(
            DiagnosticCode.MALFORMED_PATTERN,
            exc.reason,
            location=location,
            position=position,
            pattern=decl.pattern,
        )
        segments = ()

    identifier = python_identifier(decl.name)
    if not identifier:
        sink.report(
            DiagnosticCode.INVALID_IDENTIFIER,
            "route names must not be empty",
            location=location,
            position=position,
        )
    elif not to_pascal_case(identifier):
        sink.report(
            DiagnosticCode.INVALID_IDENTIFIER,
            f"route name {decl.name!r} has no letters or digits to build a class name from",
            location=location,
            position=position,
        )

    children = tuple(
        _build_node(child, position=(*position, i), location=location, config=config, sink=sink)
        for i, child in enumerate(decl.children)
    )
    _check_sibling_identifiers(children, sink)

    binding = None
    if decl.has_binding:
        binding = ViewBinding(layout=decl.layout, view=decl.view, fallback=decl.fallback)

    return RouteNode(
        name=decl.name,
        identifier=identifier,
        class_name=to_pascal_case(identifier),
        pattern=decl.pattern,
        segments=segments,
        children=children,
        binding=binding,
        position=position,
        location=location,
    )


def _check_sibling_identifiers(children: tuple[RouteNode, ...], sink: DiagnosticSink) -> None:
    first_by_identifier: dict[str, RouteNode] = {}
    for child in children:
        if not child.identifier:
            continue
        first = first_by_identifier.setdefault(child.identifier, child)
        if first is not child:
            sink.report(
                DiagnosticCode.DUPLICATE_IDENTIFIER,
                f"route name {child.name!r} becomes identifier {child.identifier!r}, "
                f"already used by sibling {first.name!r}",
                location=child.location,
                position=child.position,
            )


# -- Pass 2: validate root-to-node paths -------------------------------------


def _validate_chains(
    node: RouteNode,
    *,
    seen: dict[str, RouteNode],
    variants: dict[str, RouteNode],
    prefix: str,
    config: CompilerConfig,
    sink: DiagnosticSink,
) -> None:
    variant = prefix + node.class_name
    _check_variant(node, variant, variants, sink)

    # Parameter names and their Python identifiers share one namespace
    seen = dict(seen)
    for seg in node.dynamic_segments:
        if seg.identifier.startswith(RESERVED_PREFIX):
            sink.report(
                DiagnosticCode.INVALID_IDENTIFIER,
                f"parameter {seg.name!r} uses the reserved prefix {RESERVED_PREFIX!r}",
                location=node.location,
                position=node.position,
                pattern=node.pattern,
            )
            continue
        for key in dict.fromkeys((seg.name, seg.identifier)):
            owner = seen.get(key)
            if owner is not None:
                if owner is node:
                    where = "earlier in this pattern"
                else:
                    where = f"by {' > '.join(owner.location)}"
                sink.report(
                    DiagnosticCode.DUPLICATE_PARAMETER,
                    f"parameter {seg.name!r} shadows {key!r}, already declared {where}",
                    location=node.location,
                    position=node.position,
                    pattern=node.pattern,
                )
                break
        else:
            seen[seg.name] = node
            seen[seg.identifier] = node

    binding = node.binding or ViewBinding()
    if node.children and binding.view is not None and binding.fallback is None:
        sink.report(
            DiagnosticCode.MISSING_FALLBACK,
            "a route with children sets 'view' without 'fallback'; "
            "'view' is for leaf routes, use 'fallback' for the no-child-matched case",
            location=node.location,
            position=node.position,
        )
    if config.with_views and node.is_leaf and binding.view is None:
        sink.report(
            DiagnosticCode.MISSING_VIEW,
            "every leaf route needs a 'view' when view assembly is enabled",
            location=node.location,
            position=node.position,
        )

    for child in node.children:
        _validate_chains(
            child, seen=seen, variants=variants, prefix=variant, config=config, sink=sink
        )


def _check_variant(
    node: RouteNode,
    variant: str,
    variants: dict[str, RouteNode],
    sink: DiagnosticSink,
) -> None:
    # Variant names are global: "user_details" and "user" > "details" both
    # become RootUserDetails
    if not node.class_name:
        return
    owner = variants.setdefault(variant, node)
    if owner is node:
        return
    if owner.position[:-1] == node.position[:-1] and owner.identifier == node.identifier:
        return  # already reported as a duplicate sibling
    sink.report(
        DiagnosticCode.DUPLICATE_IDENTIFIER,
        f"route {node.name!r} generates the name {variant!r}, "
        f"already generated by {' > '.join(owner.location)}",
        location=node.location,
        position=node.position,
    )
