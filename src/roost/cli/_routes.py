"""``roost routes`` — list compiled routes.

Compiles the declaration and prints every route with its qualified
name, full pattern, and materializer parameters.
"""

import argparse
import sys

from roost.cli._resolve import resolve_declaration
from roost.compiler import compile_routes
from roost.errors import RoostError


def run_routes(args: argparse.Namespace) -> None:
    """List compiled routes for a declaration."""
    try:
        decl = resolve_declaration(args.decl)
        compiled = compile_routes(decl)
    except (ModuleNotFoundError, AttributeError, TypeError, RoostError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # Build rows: (qualified_name, full_pattern, params)
    rows: list[tuple[str, str, str]] = []
    for descriptor in compiled.index.values():
        params = ", ".join(seg.identifier for seg in descriptor.params) or "-"
        rows.append((descriptor.qualified_name, descriptor.full_pattern, params))

    # Column widths
    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_name}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("NAME", "PATH", "PARAMS"))
    sep_len = max_name + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for name, path, params in rows:
        print(fmt.format(name, path, params))
