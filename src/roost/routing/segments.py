"""Segment classification for route path patterns.

A pattern like ``/complex/:foo/:type?/*rest`` is split into typed
segments::

    "/users"          -> (Static("users"),)
    "/users/:id"      -> (Static("users"), Param("id"))
    "/posts/:page?"   -> (Static("posts"), OptionalParam("page"))
    "/files/*path"    -> (Static("files"), Wildcard("path"))
    "/"               -> ()

Only the node's own pattern is classified here. Ancestor segments are
joined later by the descriptor generator.
"""

import keyword
import re
from dataclasses import dataclass

from roost.errors import PatternError

# Characters not allowed in a Python identifier. ASCII only: "²" matches
# a Unicode \w but is not valid in a name.
_NON_IDENT_RE = re.compile(r"\W", re.ASCII)

# Names generated code keeps for itself
RESERVED_PREFIX = "_roost_"


def python_identifier(name: str) -> str:
    """Turn a segment or route name into a usable Python identifier.

    ``user-id`` -> ``user_id``, ``type`` -> ``type_``, ``2fa`` -> ``_2fa``,
    ``x²`` -> ``x_``.
    """
    ident = _NON_IDENT_RE.sub("_", name)
    if ident and ident[0].isdigit():
        ident = f"_{ident}"
    if keyword.iskeyword(ident) or keyword.issoftkeyword(ident):
        ident = f"{ident}_"
    return ident


@dataclass(frozen=True, slots=True)
class Static:
    """A literal chunk, passed through unchanged when materializing."""

    literal: str

    @property
    def is_dynamic(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.literal


@dataclass(frozen=True, slots=True)
class Param:
    """A required named parameter, ``:name``."""

    name: str

    @property
    def is_dynamic(self) -> bool:
        return True

    @property
    def optional(self) -> bool:
        return False

    @property
    def identifier(self) -> str:
        return python_identifier(self.name)

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True, slots=True)
class OptionalParam:
    """A named parameter that may be omitted, ``:name?``."""

    name: str

    @property
    def is_dynamic(self) -> bool:
        return True

    @property
    def optional(self) -> bool:
        return True

    @property
    def identifier(self) -> str:
        return python_identifier(self.name)

    def __str__(self) -> str:
        return f":{self.name}?"


@dataclass(frozen=True, slots=True)
class Wildcard:
    """A trailing catch-all, ``*name``.

    When ``optional`` is set the wildcard may match zero segments and
    its materializer argument accepts ``None``.
    """

    name: str
    optional: bool = False

    @property
    def is_dynamic(self) -> bool:
        return True

    @property
    def identifier(self) -> str:
        return python_identifier(self.name)

    def __str__(self) -> str:
        return f"*{self.name}?" if self.optional else f"*{self.name}"


type Segment = Static | Param | OptionalParam | Wildcard
type DynamicSegment = Param | OptionalParam | Wildcard


def parse_pattern(pattern: str, *, optional_wildcards: bool = False) -> tuple[Segment, ...]:
    """Classify a path pattern into its ordered segments.

    Args:
        pattern: The node's own pattern, e.g. ``"/users/:id"``.
        optional_wildcards: Treat every wildcard as optional, not only
            those written as ``*name?``.

    Raises:
        PatternError: The pattern does not start with ``/``, a dynamic
            chunk has no name, or a wildcard is not the last chunk.
    """
    if not pattern.startswith("/"):
        raise PatternError(pattern, "patterns must start with '/'")

    chunks = [chunk for chunk in pattern[1:].split("/") if chunk]
    segments: list[Segment] = []

    for index, chunk in enumerate(chunks):
        if chunk.startswith(":"):
            name = chunk[1:]
            if name.endswith("?"):
                name = name[:-1]
                _require_name(pattern, chunk, name)
                segments.append(OptionalParam(name))
            else:
                _require_name(pattern, chunk, name)
                segments.append(Param(name))
        elif chunk.startswith("*"):
            if index != len(chunks) - 1:
                raise PatternError(pattern, f"wildcard {chunk!r} must be the last segment")
            name = chunk[1:]
            optional = optional_wildcards
            if name.endswith("?"):
                name = name[:-1]
                optional = True
            _require_name(pattern, chunk, name)
            segments.append(Wildcard(name, optional=optional))
        else:
            segments.append(Static(chunk))

    return tuple(segments)


def _require_name(pattern: str, chunk: str, name: str) -> None:
    if not name:
        raise PatternError(pattern, f"dynamic segment {chunk!r} has an empty name")
