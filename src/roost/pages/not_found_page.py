"""Catch-all page for paths no other route matches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roost.pages.templates import render as render_template
from roost.pages.types import Page

if TYPE_CHECKING:
    from roost.app import App


def render(app: App) -> Page:
    path = app.history.location.path
    links = app.nav_links()
    return Page(
        title="Not Found",
        render=lambda: render_template("not-found.html", links=links, path=path),
        links=links,
    )
