"""Roost exception hierarchy.

Shared across the classifier, tree builder, descriptor and assembly
generators so every pass raises and catches the same types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roost.diagnostics import Diagnostic


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when compiler configuration is invalid.

    Also raised when an artifact of a disabled pass is requested, e.g.
    the assembly of routes compiled without ``with_views``.
    """


class PatternError(RoostError):
    """A single path pattern could not be classified.

    Raised by :func:`roost.routing.segments.parse_pattern`. The tree
    builder catches it and turns it into a located diagnostic.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid path pattern {pattern!r}: {reason}")


class CompileError(RoostError):
    """Generation aborted. Carries every diagnostic found by the pass.

    No partial artifact is ever produced alongside this error::

        try:
            compiled = compile_routes(decl)
        except CompileError as exc:
            for diagnostic in exc.diagnostics:
                print(diagnostic.format())
    """

    def __init__(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        self.diagnostics = diagnostics
        count = len(diagnostics)
        noun = "problem" if count == 1 else "problems"
        lines = [f"Route generation failed with {count} {noun}:"]
        lines.extend(f"  {d.format()}" for d in diagnostics)
        super().__init__("\n".join(lines))
