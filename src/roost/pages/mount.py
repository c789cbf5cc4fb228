"""The mount point and the render pipeline feeding it.

The router hands every navigation's pending Page to a ``MountRenderer``,
which tears down the outgoing page, awaits the new one (substituting an
error page on failure), mounts it, and marks the links pointing at the
current path.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from roost.pages.error_page import render_error_page
from roost.pages.types import Link, Page

if TYPE_CHECKING:
    from roost.routing.route import Location

logger = logging.getLogger("roost.router")


class MountPoint:
    """The fixed element pages are appended to.

    Holds at most one page once the render pipeline settles.
    """

    __slots__ = ("_children", "element_id")

    def __init__(self, element_id: str = "main") -> None:
        self.element_id = element_id
        self._children: list[Page] = []

    @property
    def page(self) -> Page | None:
        return self._children[-1] if self._children else None

    @property
    def children(self) -> tuple[Page, ...]:
        return tuple(self._children)

    def append(self, page: Page) -> None:
        self._children.append(page)

    def clear(self) -> None:
        self._children.clear()

    def links(self) -> list[Link]:
        return [link for page in self._children for link in page.links]

    def html(self) -> str:
        """Render every mounted page inside the mount element."""
        inner = "".join(page.render() for page in self._children)
        return f'<main id="{self.element_id}">{inner}</main>'


def activate_links(links: Iterable[Link], path: str) -> None:
    """Mark links whose path equals *path* as the current page."""
    for link in links:
        link.current = urlsplit(link.href).path == path


def disconnect(page: Page) -> None:
    """Disconnect *page*, logging a failing teardown hook instead of raising."""
    try:
        page.disconnect()
    except Exception:
        logger.exception("Teardown failed for page %r", page.title)


class MountRenderer:
    """Renderer sink that owns the page mounted into one MountPoint.

    Each call gets a generation number.  A page that finishes producing
    after a newer navigation has started is disconnected and never
    mounted, so the mount point always ends up showing the latest
    navigation.
    """

    __slots__ = ("_current", "_generation", "target")

    def __init__(self, target: MountPoint) -> None:
        self.target = target
        self._current: Page | None = None
        self._generation = 0

    @property
    def current(self) -> Page | None:
        return self._current

    async def __call__(self, result: Awaitable[Page], location: Location) -> None:
        self._generation += 1
        generation = self._generation

        self._unmount()

        try:
            page = await result
        except Exception as exc:
            logger.exception("Page for %s failed", location.href)
            page = render_error_page(exc)

        if generation != self._generation:
            logger.debug("Dropping stale page for %s", location.href)
            disconnect(page)
            return

        self._current = page
        self.target.append(page)
        activate_links(self.target.links(), location.path)

    def _unmount(self) -> None:
        if self._current is not None:
            disconnect(self._current)
            self._current = None
        self.target.clear()
