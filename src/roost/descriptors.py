"""Route descriptors — local accessors and fixed-arity materializers.

Every node of a :class:`~roost.routing.tree.RouteTree` gets a
:class:`RouteDescriptor`. Descriptors mirror the tree, so children are
reached as attributes::

    routes = generate_descriptors(tree)
    routes.users.user.path()                  # (Param("id"),)
    routes.users.user.details.materialize("42")   # "/users/42/details"

``materialize`` is a real Python function generated from source for the
node's parameter chain. Its signature names exactly the chain's
parameters, in chain order, so a wrong argument count fails like any
other Python call instead of being checked at runtime.

Links never contain ``//``: an empty value, required or optional, drops
its token, so ``details.materialize("")`` is ``"/users/details"``. Callers
that can produce empty values must check them before building links.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from roost.routing.segments import (
    RESERVED_PREFIX,
    DynamicSegment,
    OptionalParam,
    Segment,
    Static,
    Wildcard,
)
from roost.routing.tree import RouteNode, RouteTree

_TAB_STR = " " * 4

# Names used inside generated source. The tree builder rejects parameters
# whose identifiers start with this prefix.
_PREFIX = RESERVED_PREFIX

# (kind, identifier) per token; statics carry no identifier
type _Shape = tuple[tuple[str, str | None], ...]

# One compiled factory per distinct chain shape, filled during generation
_FACTORIES: dict[_Shape, Callable[..., Callable[..., str]]] = {}


def _text(value: object) -> str:
    return str(value)


def _rest(value: object) -> str:
    return str(value).strip("/")


def _token_kind(seg: Segment) -> str:
    match seg:
        case Static():
            return "static"
        case OptionalParam():
            return "optional"
        case Wildcard(optional=True):
            return "optional-rest"
        case Wildcard():
            return "rest"
        case _:
            return "param"


def materializer_body(
    shape: _Shape,
    static_exprs: list[str],
    *,
    text: str = f"{_PREFIX}text",
    rest: str = f"{_PREFIX}rest",
    parts: str = f"{_PREFIX}parts",
) -> list[str]:
    """Generate the unindented body lines of a materializer for *shape*.

    *static_exprs* holds one expression per static token, in order.
    Tokens after the first optional one are appended one by one so an
    omitted optional value never shifts the ones that follow.
    Empty tokens are filtered out when joining.
    """
    leading: list[str] = []
    trailing: list[tuple[str | None, str]] = []  # (guard identifier, expression)
    statics = iter(static_exprs)

    for kind, ident in shape:
        if kind == "static":
            expr = next(statics)
        elif kind.endswith("rest"):
            expr = f"{rest}({ident})"
        else:
            expr = f"{text}({ident})"

        guard = ident if kind.startswith("optional") else None
        if guard is None and not trailing:
            leading.append(expr)
        else:
            trailing.append((guard, expr))

    lines = [f"{parts} = [{', '.join(leading)}]"]
    for guard, expr in trailing:
        if guard is None:
            lines.append(f"{parts}.append({expr})")
        else:
            lines.append(f"if {guard} is not None:")
            lines.append(_TAB_STR + f"{parts}.append({expr})")
    lines.append(f'return "/" + "/".join([p for p in {parts} if p])')
    return lines


def materializer_source(shape: _Shape) -> str:
    """Generate the source of a materializer factory for *shape*.

    The factory takes the tuple of static literals and returns the
    materializer, e.g. for ``/users/:id/details``::

        def _roost_factory(_roost_statics, _roost_text, _roost_rest):
            def materialize(id):
                _roost_parts = [_roost_statics[0], _roost_text(id), _roost_statics[1]]
                return "/" + "/".join([p for p in _roost_parts if p])
            return materialize
    """
    params = [ident for kind, ident in shape if kind != "static"]
    static_count = sum(1 for kind, _ in shape if kind == "static")
    static_exprs = [f"{_PREFIX}statics[{i}]" for i in range(static_count)]

    src_lines = [
        f"def {_PREFIX}factory({_PREFIX}statics, {_PREFIX}text, {_PREFIX}rest):",
        _TAB_STR + f"def materialize({', '.join(params)}):",
    ]
    src_lines.extend(_TAB_STR * 2 + line for line in materializer_body(shape, static_exprs))
    src_lines.append(_TAB_STR + "return materialize")
    return "\n".join(src_lines)


def chain_shape(tree: RouteTree, node: RouteNode) -> tuple[_Shape, tuple[str, ...]]:
    """The token shape and static literals of *node*'s full ancestor path."""
    segments = [seg for ancestor in tree.ancestry(node) for seg in ancestor.segments]
    shape: _Shape = tuple(
        (_token_kind(seg), None if isinstance(seg, Static) else seg.identifier)
        for seg in segments
    )
    statics = tuple(seg.literal for seg in segments if isinstance(seg, Static))
    return shape, statics


def _compile_factory(shape: _Shape) -> Callable[..., Callable[..., str]]:
    factory = _FACTORIES.get(shape)
    if factory is None:
        scope: dict[str, Any] = {}
        exec(compile(materializer_source(shape), "<roost-materializer>", "exec"), scope)
        factory = scope[f"{_PREFIX}factory"]
        _FACTORIES[shape] = factory
    return factory


def build_materializer(tree: RouteTree, node: RouteNode) -> Callable[..., str]:
    """Generate the materializer for *node*.

    The returned function takes one argument per entry of the node's
    parameter chain. Optional segments accept ``None`` to omit the token.
    """
    shape, statics = chain_shape(tree, node)
    materialize = _compile_factory(shape)(statics, _text, _rest)
    materialize.__qualname__ = f"{tree.qualified_name(node)}.materialize"
    materialize.__doc__ = f"Build a link for {tree.full_pattern(node)!r}."
    return materialize


class RouteDescriptor:
    """Generated accessors for one route.

    Attributes:
        name: The declared route name.
        qualified_name: Dotted identifiers from the root.
        variant: PascalCase name unique across the whole tree.
        pattern: The route's own pattern.
        full_pattern: The pattern including every ancestor's segments.
        params: The parameter chain, root first.
        arity: ``len(params)``.
        materialize: The generated link builder.
    """

    __slots__ = (
        "_by_identifier",
        "_children",
        "_segments",
        "arity",
        "full_pattern",
        "materialize",
        "name",
        "node",
        "params",
        "pattern",
        "qualified_name",
        "variant",
    )

    def __init__(
        self,
        node: RouteNode,
        *,
        qualified_name: str,
        variant: str,
        full_pattern: str,
        params: tuple[DynamicSegment, ...],
        materialize: Callable[..., str],
        children: tuple[RouteDescriptor, ...],
    ) -> None:
        self.node = node
        self.name = node.name
        self.pattern = node.pattern
        self.qualified_name = qualified_name
        self.variant = variant
        self.full_pattern = full_pattern
        self.params = params
        self.arity = len(params)
        self.materialize = materialize
        self._segments = node.segments
        self._children = children
        self._by_identifier = {child.node.identifier: child for child in children}

    def path(self) -> tuple[Segment, ...]:
        """The route's own segments, relative to its parent."""
        return self._segments

    @property
    def children(self) -> tuple[RouteDescriptor, ...]:
        return self._children

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def __getattr__(self, name: str) -> RouteDescriptor:
        # Only reached for names that are not slots; members shadow children
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._by_identifier[name]
        except KeyError:
            msg = f"Route {self.qualified_name!r} has no child route {name!r}"
            raise AttributeError(msg) from None

    def __getitem__(self, identifier: str) -> RouteDescriptor:
        """Child lookup that is never shadowed by descriptor members."""
        return self._by_identifier[identifier]

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return iter(self._children)

    def __repr__(self) -> str:
        return f"<RouteDescriptor {self.qualified_name} {self.full_pattern!r}>"


def generate_descriptors(tree: RouteTree) -> RouteDescriptor:
    """Derive the descriptor hierarchy for *tree*. Returns the root descriptor."""
    return _describe(tree, tree.root)


def _describe(tree: RouteTree, node: RouteNode) -> RouteDescriptor:
    children = tuple(_describe(tree, child) for child in node.children)
    return RouteDescriptor(
        node,
        qualified_name=tree.qualified_name(node),
        variant="".join(n.class_name for n in tree.ancestry(node)),
        full_pattern=tree.full_pattern(node),
        params=tree.parameter_chain(node),
        materialize=build_materializer(tree, node),
        children=children,
    )


class RouteIndex(Mapping[str, RouteDescriptor]):
    """Flat, declaration-ordered view of every descriptor.

    Keys are qualified names (``root.users.user``). Variant names
    (``RootUsersUser``) are accepted for lookup as well::

        index = RouteIndex(routes)
        index["root.users.user"] is index["RootUsersUser"]   # True
    """

    __slots__ = ("_by_name", "_by_variant")

    def __init__(self, root: RouteDescriptor) -> None:
        self._by_name: dict[str, RouteDescriptor] = {}
        self._by_variant: dict[str, RouteDescriptor] = {}
        stack = [root]
        while stack:
            descriptor = stack.pop()
            self._by_name[descriptor.qualified_name] = descriptor
            self._by_variant[descriptor.variant] = descriptor
            stack.extend(reversed(descriptor.children))

    def __getitem__(self, key: str) -> RouteDescriptor:
        if key in self._by_name:
            return self._by_name[key]
        return self._by_variant[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    @property
    def variants(self) -> tuple[str, ...]:
        return tuple(self._by_variant)
