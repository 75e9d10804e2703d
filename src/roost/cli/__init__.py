"""Roost CLI — list, check, and generate route descriptors.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — compile route declarations into typed link builders.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each compiler pass",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes")
    routes_parser.add_argument(
        "decl",
        help="Import string of a route declaration (e.g. myapp.routes:ROUTES)",
    )

    # -- roost check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a route declaration")
    check_parser.add_argument("decl", help="Import string of a route declaration")
    _add_view_options(check_parser)

    # -- roost generate ---------------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Write a descriptor module")
    generate_parser.add_argument("decl", help="Import string of a route declaration")
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: stdout)",
    )
    generate_parser.add_argument(
        "--root-name",
        default="routes",
        help="Name of the top-level namespace in the generated module",
    )
    generate_parser.add_argument(
        "--optional-wildcards",
        action="store_true",
        help="Let every wildcard match zero segments",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from roost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from roost.cli._check import run_check

        run_check(args)
    elif args.command == "generate":
        from roost.cli._generate import run_generate

        run_generate(args)


def _add_view_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--with-views",
        action="store_true",
        help="Also assemble layout/view/fallback bindings",
    )
    parser.add_argument(
        "--scope",
        default=None,
        help="Module whose names resolve view bindings (e.g. myapp.views)",
    )
    parser.add_argument(
        "--not-found",
        default=None,
        help="Global not-found binding (requires --with-views)",
    )
