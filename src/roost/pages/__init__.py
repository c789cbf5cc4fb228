"""Pages — the displayable units the router mounts.

Each ``<name>_page`` module exports ``render(app, **params) -> Page``
and is imported lazily the first time its view is navigated to.

Public API::

    from roost.pages import Link, MountPoint, MountRenderer, Page
"""

from roost.pages.mount import MountPoint, MountRenderer, activate_links
from roost.pages.types import Link, Page

__all__ = [
    "Link",
    "MountPoint",
    "MountRenderer",
    "Page",
    "activate_links",
]
