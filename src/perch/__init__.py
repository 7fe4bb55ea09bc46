"""Perch: convention-based REST resources for a small routing core.

Maps the fixed actions ``index``, ``new``, ``create``, ``show``,
``edit``, ``update``, ``destroy`` (and the catch-all ``all``) of a
controller onto HTTP verbs and path templates.

Basic usage::

    from perch import App

    app = App()
    app.resource("photos", {"index": list_photos, "show": get_photo})

    match = app.match("GET", "/photos/42.json")
    match.path_params  # {"photo": "42", "format": "json"}

Directory discovery::

    app = App()
    manager = await app.load_resources("controllers")
    print(manager)
"""

__version__ = "0.1.0"
__all__ = [
    "Action",
    "App",
    "AppConfig",
    "ConfigurationError",
    "ControllerLoadError",
    "HTTPError",
    "HostRouter",
    "MethodNotAllowed",
    "NotFound",
    "PerchError",
    "RegisteredRoute",
    "Resource",
    "ResourceManager",
    "create_router",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "Action": "perch.resources.actions",
    "App": "perch.app",
    "AppConfig": "perch.config",
    "ConfigurationError": "perch.errors",
    "ControllerLoadError": "perch.errors",
    "HTTPError": "perch.errors",
    "HostRouter": "perch.resources.protocol",
    "MethodNotAllowed": "perch.errors",
    "NotFound": "perch.errors",
    "PerchError": "perch.errors",
    "RegisteredRoute": "perch.resources.resource",
    "Resource": "perch.resources.resource",
    "ResourceManager": "perch.resources.manager",
    "create_router": "perch.resources.manager",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
