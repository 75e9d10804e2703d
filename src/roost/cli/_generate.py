"""``roost generate`` — write a standalone descriptor module."""

import argparse
import logging
import sys
from pathlib import Path

from roost.cli._resolve import resolve_declaration
from roost.codegen import render_module
from roost.compiler import compile_routes
from roost.config import CompilerConfig
from roost.errors import RoostError

logger = logging.getLogger("roost.cli")


def run_generate(args: argparse.Namespace) -> None:
    """Render the compiled declaration and write it to ``args.output`` or stdout."""
    config = CompilerConfig(
        root_name=args.root_name,
        optional_wildcards=args.optional_wildcards,
    )
    try:
        decl = resolve_declaration(args.decl)
        compiled = compile_routes(decl, config=config)
        source = render_module(compiled)
    except (ModuleNotFoundError, AttributeError, TypeError, RoostError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.output is None:
        sys.stdout.write(source)
        return

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source, encoding="utf-8")
    logger.info("Wrote %d routes to %s", len(compiled.index), output)
    print(f"Wrote {output}")
