"""Compiler configuration.

CompilerConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from roost.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Configuration for one compilation pass. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CompilerConfig(with_views=True, not_found="NotFoundPage")
    """

    # Assembly pass — only runs when enabled
    with_views: bool = False
    not_found: str | None = None  # Global branch when no root-level pattern matches

    # Wildcards match zero or more segments when True, one or more otherwise
    optional_wildcards: bool = False

    # Name of the top-level namespace in generated module source
    root_name: str = "routes"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if the combination of options is invalid."""
        if self.not_found is not None and not self.with_views:
            msg = (
                f"not_found={self.not_found!r} has no effect without with_views=True. "
                "Enable view assembly or drop the not-found binding."
            )
            raise ConfigurationError(msg)
        if not self.root_name.isidentifier():
            msg = f"root_name must be a valid Python identifier, got {self.root_name!r}"
            raise ConfigurationError(msg)
