"""User profile page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roost.pages.templates import render as render_template
from roost.pages.types import Page
from roost.timeline.models import User

if TYPE_CHECKING:
    from roost.app import App


async def render(app: App, username: str) -> Page:
    user = User.from_json(await app.http.get(f"/api/users/{username}"))
    links = app.nav_links()
    return Page(
        title=user.username,
        render=lambda: render_template("user.html", links=links, user=user),
        links=links,
    )
