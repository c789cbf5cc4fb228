"""Lazy view loading with a per-router cache.

A view is a page module (``<package>.<name>_page``) exporting
``render(app, **params) -> Page``.  The first navigation to a view
imports its module off the event loop; the render function is cached
for the life of the loader.  Concurrent first navigations share one
in-flight load.
"""

import asyncio
import importlib
import logging
from collections.abc import Awaitable, Callable
from types import ModuleType
from typing import Any

from roost._internal.invoke import invoke
from roost.pages.types import Page

logger = logging.getLogger("roost.router")

Importer = Callable[[str], Awaitable[ModuleType]]


async def import_module(module_name: str) -> ModuleType:
    """Import *module_name* in a worker thread."""
    return await asyncio.to_thread(importlib.import_module, module_name)


class ViewLoader:
    """Resolves view names to cached render functions.

    Args:
        app: Passed as the first argument to every view's ``render``.
        package: Package holding the ``<name>_page`` modules.
        importer: Async module importer, swappable for tests.
    """

    __slots__ = ("_app", "_cache", "_importer", "_loading", "_package")

    def __init__(
        self,
        app: Any = None,
        *,
        package: str = "roost.pages",
        importer: Importer | None = None,
    ) -> None:
        self._app = app
        self._package = package
        self._importer = importer or import_module
        self._cache: dict[str, Callable[..., Any]] = {}
        self._loading: dict[str, asyncio.Task[Callable[..., Any]]] = {}

    def module_name(self, name: str) -> str:
        return f"{self._package}.{name.replace('-', '_')}_page"

    def cached(self, name: str) -> bool:
        return name in self._cache

    def view(self, name: str) -> Callable[..., Awaitable[Page]]:
        """Return a page producer for the named view."""

        async def produce(**params: Any) -> Page:
            render = self._cache.get(name)
            if render is None:
                render = await self.load(name)
            return await invoke(render, self._app, **params)

        produce.__name__ = f"view_{name.replace('-', '_')}"
        return produce

    async def load(self, name: str) -> Callable[..., Any]:
        """Load and cache the named view's render function.

        At most one load per name is in flight; later callers await it.
        A failed load is not cached, so the next navigation retries.
        """
        if name in self._cache:
            return self._cache[name]
        task = self._loading.get(name)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._load(name))
            self._loading[name] = task
        return await asyncio.shield(task)

    async def _load(self, name: str) -> Callable[..., Any]:
        module_name = self.module_name(name)
        try:
            module = await self._importer(module_name)
            render = module.render
        finally:
            del self._loading[name]
        self._cache[name] = render
        logger.debug("Loaded view %r from %s", name, module_name)
        return render
