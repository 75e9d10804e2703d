"""Located generation-time diagnostics.

Every problem found while compiling a route declaration is recorded as
a :class:`Diagnostic` pointing at the offending node. Passes collect
diagnostics into a :class:`DiagnosticSink` and abort with
:class:`~roost.errors.CompileError` once the pass is complete, so a
single run reports everything that is wrong.
"""

from dataclasses import dataclass, field
from enum import Enum

from roost.errors import CompileError


class DiagnosticCode(Enum):
    """Category of a generation-time problem."""

    MALFORMED_PATTERN = "malformed-pattern"
    DUPLICATE_PARAMETER = "duplicate-parameter"
    DUPLICATE_IDENTIFIER = "duplicate-identifier"
    INVALID_IDENTIFIER = "invalid-identifier"
    MISSING_VIEW = "missing-view"
    MISSING_FALLBACK = "missing-fallback"
    MISSING_LAYOUT = "missing-layout"
    UNRESOLVED_BINDING = "unresolved-binding"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single problem, located to a node of the declaration tree.

    Attributes:
        code: Problem category.
        message: Human-readable explanation.
        location: Declared names from the root down to the node.
        position: Child indices from the root down to the node.
        pattern: The node's declared path pattern, when known.
    """

    code: DiagnosticCode
    message: str
    location: tuple[str, ...] = ()
    position: tuple[int, ...] = ()
    pattern: str | None = None

    @property
    def where(self) -> str:
        """The location as ``root > users > user``."""
        return " > ".join(self.location) or "<root>"

    def format(self) -> str:
        text = f"{self.where}: [{self.code.value}] {self.message}"
        if self.pattern is not None:
            text += f" (pattern {self.pattern!r})"
        return text


@dataclass(slots=True)
class DiagnosticSink:
    """Collects diagnostics during a single pass."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(
        self,
        code: DiagnosticCode,
        message: str,
        *,
        location: tuple[str, ...] = (),
        position: tuple[int, ...] = (),
        pattern: str | None = None,
    ) -> None:
        self.diagnostics.append(
            Diagnostic(
                code=code,
                message=message,
                location=location,
                position=position,
                pattern=pattern,
            )
        )

    def __bool__(self) -> bool:
        return bool(self.diagnostics)

    def raise_if_any(self) -> None:
        """Abort the pass with every collected diagnostic."""
        if self.diagnostics:
            raise CompileError(tuple(self.diagnostics))
