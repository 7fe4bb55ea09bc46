"""Controller discovery and resource registration.

Controllers come from an explicit list, from a directory of Python
modules, or both. Directory discovery is a convenience layered on top of
the explicit list; registration never touches the filesystem.

A controller module is either a module defining a ``controller`` mapping::

    # controllers/photos_controller.py
    controller = {"index": list_photos, "show": get_photo}

or a module whose top-level names are the actions themselves::

    # controllers/users_controller.py
    def index(request): ...
    def show(request): ...
    id = "user_id"

The resource name is the leading run of the file stem before the first
underscore: ``photos_controller.py`` registers ``photos``.
"""

import importlib.util
import itertools
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, TypeAlias

import anyio

from perch.errors import ConfigurationError, ControllerLoadError
from perch.resources.actions import OVERRIDE_KEYS, Action
from perch.resources.naming import resource_name_from_filename
from perch.resources.protocol import HostRouter
from perch.resources.resource import ControllerDefinition, Resource

logger = logging.getLogger("perch.resources")

ResourceRegistry: TypeAlias = dict[str, Resource]

Controllers: TypeAlias = Mapping[str, ControllerDefinition] | Iterable[tuple[str, ControllerDefinition]]

# Module attributes collected when a module has no ``controller`` mapping
_MODULE_KEYS = (*(action.value for action in Action), *sorted(OVERRIDE_KEYS))

# Suffix for synthetic module names, unique for the life of the process
_module_ids = itertools.count()


def is_registered(name: str, *registries: Mapping[str, Resource]) -> bool:
    """Return True, with a warning, if *name* is already in any of *registries*.

    Callers skip the later definition before it registers any route.
    """
    if any(name in registry for registry in registries):
        logger.warning("resource %r registered twice; keeping the first definition", name)
        return True
    return False


def render_resources(resources: Mapping[str, Resource]) -> str:
    """Render a registry as a ``name:`` header plus route lines per resource."""
    return "".join(f"{name}:\n{resource}\n" for name, resource in resources.items())


def controller_from_module(module: ModuleType) -> dict[str, Any]:
    """Turn a loaded controller module into a controller mapping."""
    explicit = getattr(module, "controller", None)
    if isinstance(explicit, Mapping):
        return dict(explicit)

    namespace = vars(module)
    return {key: namespace[key] for key in _MODULE_KEYS if key in namespace}


def load_controller(path: Path) -> dict[str, Any]:
    """Import a controller file and return its controller mapping.

    Raises ``ControllerLoadError`` (chained to the original exception) if
    the module cannot be imported.
    """
    module_name = f"_perch_controller_{path.stem}_{next(_module_ids)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ControllerLoadError(path, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ControllerLoadError(path, f"{type(exc).__name__}: {exc}") from exc
    return controller_from_module(module)


def discover_controllers(directory: str | Path) -> dict[str, ControllerDefinition]:
    """Load every controller module in *directory*.

    Only ``.py`` files are considered; names starting with ``_`` or ``.``
    are skipped. Entries are visited in sorted order, so when two files
    derive the same name the one sorting first wins and the other is not
    imported.

    An unreadable directory raises the underlying ``OSError``.
    """
    root = Path(directory)
    controllers: dict[str, ControllerDefinition] = {}

    for item in sorted(root.iterdir()):
        if not item.is_file() or item.suffix != ".py":
            continue
        if item.name.startswith(("_", ".")):
            continue

        name = resource_name_from_filename(item.name)
        if name in controllers:
            logger.warning(
                "controller %r defined by more than one file; skipping %s", name, item.name
            )
            continue
        controllers[name] = load_controller(item)

    logger.info("discovered %d controller(s) in %s", len(controllers), root)
    return controllers


class ResourceManager:
    """Collects controllers and registers one Resource per controller.

    Usage::

        manager = ResourceManager("controllers")
        manager.discover()
        manager.register(app)
        print(manager)
    """

    __slots__ = ("controllers", "directory", "resources")

    def __init__(
        self,
        directory: str | Path | None = None,
        controllers: Controllers | None = None,
    ) -> None:
        self.directory: Path | None = Path(directory) if directory is not None else None
        self.controllers: dict[str, ControllerDefinition] = {}
        self.resources: ResourceRegistry = {}

        if isinstance(controllers, Mapping):
            controllers = controllers.items()
        for name, definition in controllers or ():
            self.add(name, definition)

    def add(self, name: str, controller: ControllerDefinition) -> None:
        """Add a controller to the registration list.

        The first controller added under a name keeps it.
        """
        if name in self.controllers:
            logger.warning("controller %r added twice; keeping the first definition", name)
            return
        self.controllers[name] = controller

    def _require_directory(self) -> Path:
        if self.directory is None:
            msg = "ResourceManager has no directory to discover controllers in."
            raise ConfigurationError(msg)
        return self.directory

    def discover(self) -> dict[str, ControllerDefinition]:
        """Load the controllers in :attr:`directory` and add them."""
        found = discover_controllers(self._require_directory())
        for name, controller in found.items():
            self.add(name, controller)
        return found

    async def discover_async(self) -> dict[str, ControllerDefinition]:
        """Like :meth:`discover`, with listing and imports in a worker thread."""
        found = await anyio.to_thread.run_sync(discover_controllers, self._require_directory())
        for name, controller in found.items():
            self.add(name, controller)
        return found

    def register(self, host: HostRouter) -> ResourceRegistry:
        """Build a Resource per controller and register its routes with *host*.

        Resources are stored in :attr:`resources` and, when *host* has a
        ``resources`` mapping, in that mapping as well. A name already
        present in either is skipped without touching *host*.
        """
        host_registry = getattr(host, "resources", None)
        registries = [self.resources]
        if isinstance(host_registry, dict):
            registries.append(host_registry)

        added = 0
        for name, controller in self.controllers.items():
            if is_registered(name, *registries):
                continue
            resource = Resource(name, controller, host)
            for registry in registries:
                registry[name] = resource
            added += 1
        logger.info("registered %d resource(s)", added)
        return self.resources

    async def load(self, host: HostRouter) -> "ResourceManager":
        """Discover asynchronously, then register with *host*.

        Returns once every route is registered.
        """
        await self.discover_async()
        self.register(host)
        return self

    def __str__(self) -> str:
        return render_resources(self.resources)


def create_router(host: HostRouter, controllers: Controllers) -> ResourceRegistry:
    """Register *controllers* with *host* and return the resource registry.

    Composition entry point: works with any :class:`HostRouter`, no
    directory scan, no changes to the host type::

        registry = create_router(app, {"photos": {"index": list_photos}})
    """
    return ResourceManager(controllers=controllers).register(host)
