"""Roost — client runtime for a social timeline.

A minimal router that lazily loads and mounts pages, and a timeline
page that reconciles a paginated feed with a live update stream.

Basic usage::

    from roost import App, AppConfig

    async with App(AppConfig(base_url="http://localhost:3000", auth_token=token)) as app:
        await app.start()
        await app.dispatch("flush")
        print(app.html())
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "History",
    "Link",
    "MountPoint",
    "MountRenderer",
    "Page",
    "RequestError",
    "RoostError",
    "Router",
    "Session",
    "Timeline",
    "ValidationError",
    "guard",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from roost.app import App

        return App

    if name == "AppConfig":
        from roost.config import AppConfig

        return AppConfig

    if name in ("Router", "History", "guard"):
        from roost.routing import guard as _guard
        from roost.routing import history as _history
        from roost.routing import router as _router

        return {"Router": _router.Router, "History": _history.History, "guard": _guard.guard}[name]

    if name in ("Link", "MountPoint", "MountRenderer", "Page"):
        from roost import pages as _pages

        return getattr(_pages, name)

    if name == "Session":
        from roost.http.session import Session

        return Session

    if name == "Timeline":
        from roost.timeline.reconciler import Timeline

        return Timeline

    if name in ("RoostError", "ConfigurationError", "RequestError", "ValidationError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
