"""``roost check`` — route declaration validation command.

Compiles the declaration and prints every diagnostic.  Exits with code 1
if generation fails.
"""

import argparse
import sys

from roost.cli._resolve import resolve_declaration, resolve_scope
from roost.compiler import compile_routes
from roost.config import CompilerConfig
from roost.errors import CompileError, ConfigurationError


def run_check(args: argparse.Namespace) -> None:
    """Validate a route declaration, optionally with view assembly."""
    try:
        decl = resolve_declaration(args.decl)
        scope = resolve_scope(args.scope)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = CompilerConfig(with_views=args.with_views, not_found=args.not_found)
    try:
        compiled = compile_routes(decl, config=config, scope=scope)
    except CompileError as exc:
        for diagnostic in exc.diagnostics:
            print(f"error: {diagnostic.format()}")
        count = len(exc.diagnostics)
        print(f"\n{count} problem{'s' if count != 1 else ''} found.")
        raise SystemExit(1) from exc
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"OK: {len(compiled.index)} routes")
    if compiled.has_assembly:
        print(compiled.assembly.describe())
