"""``perch routes``: list resource routes.

Either discovers a controllers directory into a fresh App, or imports a
resource registry by ``module:attribute`` string, then prints each
resource's ``METHOD<TAB>action<TAB>path`` lines under a ``name:`` header.
"""

import argparse
import importlib
import sys
from collections.abc import Mapping

import anyio

from perch.app import App
from perch.errors import ControllerLoadError
from perch.resources.manager import render_resources
from perch.resources.resource import Resource


def resolve_resources(import_string: str) -> Mapping[str, Resource]:
    """Import the resource registry named by *import_string*.

    The target is ``module:attribute`` (attribute defaults to ``app``). It
    may be a registry mapping, such as the return value of
    ``create_router()``, or any object with a ``resources`` registry, such
    as an :class:`~perch.app.App` or a ``ResourceManager``.

    Raises ``TypeError`` if the target holds no registry of resources.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name or "app")

    resources = obj if isinstance(obj, Mapping) else getattr(obj, "resources", None)
    if not isinstance(resources, Mapping) or not all(
        isinstance(resource, Resource) for resource in resources.values()
    ):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, "
            "which holds no resource registry"
        )
        raise TypeError(msg)
    return resources


def run_routes(args: argparse.Namespace) -> None:
    """Print the resource table for a directory or an imported registry."""
    if args.app:
        try:
            resources = resolve_resources(args.app)
        except (ModuleNotFoundError, AttributeError, TypeError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
    else:
        app = App()
        try:
            anyio.run(app.load_resources, args.directory)
        except (OSError, ControllerLoadError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        resources = app.resources

    if not resources:
        print("No resources registered.")
        return

    sys.stdout.write(render_resources(resources))
