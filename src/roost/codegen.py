"""Source emitter — renders compiled routes as a standalone Python module.

The emitted module needs only ``roost.routing.segments`` at import time.
Each route becomes a class with ``path()`` and a fixed-arity
``materialize()``; children are class attributes, so the module mirrors
the route tree::

    from myapp.routes_generated import routes, Route

    routes.users.user.details.materialize("42")   # "/users/42/details"
    Route.RootUsersUserDetails.value.path()        # (Static(literal='details'),)

Rendered with kida from a template kept in this module.
"""

from __future__ import annotations

from dataclasses import dataclass

from kida import Environment

from roost.compiler import CompiledRoutes
from roost.descriptors import RouteDescriptor, chain_shape, materializer_body
from roost.errors import ConfigurationError
from roost.routing.segments import RESERVED_PREFIX

# Module-level names in the generated source besides the route classes
_SEGMENTS = f"{RESERVED_PREFIX}segments"
_ENUM_NAME = "Route"

MODULE_TEMPLATE = '''\
"""Route descriptors generated by roost.

Do not edit. Regenerate with ``roost generate``.
"""

import enum as _roost_enum

from roost.routing import segments as _roost_segments

__all__ = ["Route", "{{ root_name }}"]


def _roost_text(value: object) -> str:
    return str(value)


def _roost_rest(value: object) -> str:
    return str(value).strip("/")
{% for cls in classes %}


class {{ cls.class_name }}:
    {{ cls.doc }}

    __slots__ = ()
{% for child in cls.children %}
    {{ child.identifier }} = {{ child.class_name }}()
{% end %}

    def path(self) -> {{ cls.path_type }}:
        return {{ cls.path_value }}

    @staticmethod
    def materialize({{ cls.signature }}) -> str:
{% for line in cls.body %}
        {{ line }}
{% end %}
{% end %}


{{ root_name }} = {{ root_class }}()


class Route(_roost_enum.Enum):
    """Every route, by variant name."""

{% for cls in classes_in_order %}
    {{ cls.class_name }} = {{ cls.class_name }}()
{% end %}
'''


@dataclass(frozen=True, slots=True)
class EmittedChild:
    identifier: str
    class_name: str


@dataclass(frozen=True, slots=True)
class EmittedClass:
    """Everything the template needs to write one route class."""

    class_name: str
    doc: str
    children: tuple[EmittedChild, ...]
    path_type: str
    path_value: str
    signature: str
    body: tuple[str, ...]


def create_environment() -> Environment:
    """A kida environment for Python source: no HTML escaping."""
    return Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)


def render_module(compiled: CompiledRoutes, env: Environment | None = None) -> str:
    """Render *compiled* as Python module source.

    Raises:
        ConfigurationError: The namespace name or a route class would
            overwrite another top-level name of the module.
    """
    env = env or create_environment()
    post_order = _post_order(compiled.routes)
    _check_module_names(compiled)
    emitted = {d.variant: _emit_class(compiled, d) for d in post_order}

    template = env.from_string(MODULE_TEMPLATE)
    return template.render({
        "root_name": compiled.config.root_name,
        "root_class": compiled.routes.variant,
        "classes": [emitted[d.variant] for d in post_order],
        "classes_in_order": [emitted[name] for name in compiled.index.variants],
    })


def _check_module_names(compiled: CompiledRoutes) -> None:
    root_name = compiled.config.root_name
    variants = compiled.index.variants
    if _ENUM_NAME in variants:
        msg = (
            f"Route {compiled.index[_ENUM_NAME].qualified_name!r} generates the class "
            f"{_ENUM_NAME!r}, which is reserved for the route enum; rename it"
        )
        raise ConfigurationError(msg)
    if root_name == _ENUM_NAME or root_name in variants or root_name.startswith(RESERVED_PREFIX):
        msg = f"root_name {root_name!r} collides with a generated name; choose another"
        raise ConfigurationError(msg)


def _post_order(root: RouteDescriptor) -> list[RouteDescriptor]:
    # Children first so class bodies can instantiate them
    result: list[RouteDescriptor] = []
    for child in root.children:
        result.extend(_post_order(child))
    result.append(root)
    return result


def _emit_class(compiled: CompiledRoutes, descriptor: RouteDescriptor) -> EmittedClass:
    segments = descriptor.path()
    if segments:
        path_type = f"tuple[{', '.join(f'{_SEGMENTS}.{type(seg).__name__}' for seg in segments)}]"
        path_value = "(" + "".join(f"{_SEGMENTS}.{seg!r}, " for seg in segments).rstrip(" ") + ")"
    else:
        path_type = "tuple[()]"
        path_value = "()"

    params = []
    for seg in descriptor.params:
        annotation = "str | None" if seg.optional else "str"
        params.append(f"{seg.identifier}: {annotation}")
    signature = ", ".join(params)

    shape, statics = chain_shape(compiled.tree, descriptor.node)
    body = materializer_body(
        shape,
        [repr(literal) for literal in statics],
        text=f"{RESERVED_PREFIX}text",
        rest=f"{RESERVED_PREFIX}rest",
        parts=f"{RESERVED_PREFIX}parts",
    )

    return EmittedClass(
        class_name=descriptor.variant,
        doc=repr(descriptor.full_pattern),
        children=tuple(
            EmittedChild(identifier=child.node.identifier, class_name=child.variant)
            for child in descriptor.children
        ),
        path_type=path_type,
        path_value=path_value,
        signature=signature,
        body=tuple(body),
    )
