"""Perch CLI: route table inspection.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch: convention-based REST resource routing.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log discovery and registration details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List resource routes")
    routes_parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Controllers directory to discover (default: ./controllers)",
    )
    routes_parser.add_argument(
        "--app",
        default=None,
        help="Import string of an app or resource registry (e.g. myapp:app); overrides directory",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
