"""Access page, shown at ``/`` to anonymous visitors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roost.pages.templates import render as render_template
from roost.pages.types import Page

if TYPE_CHECKING:
    from roost.app import App


def render(app: App) -> Page:
    links = app.nav_links()
    return Page(
        title="Access",
        render=lambda: render_template("access.html", links=links),
        links=links,
    )
