"""Single post page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roost.pages.home_page import item_context
from roost.pages.templates import render as render_template
from roost.pages.types import Page
from roost.timeline.models import Post, TimelineItem

if TYPE_CHECKING:
    from roost.app import App


async def render(app: App, post_id: int) -> Page:
    post = Post.from_json(await app.http.get(f"/api/posts/{post_id}"))
    item = item_context(TimelineItem(id=post_id, post=post))
    links = app.nav_links()
    return Page(
        title=f"Post {post.id}",
        render=lambda: render_template("post.html", links=links, item=item),
        links=links,
    )
