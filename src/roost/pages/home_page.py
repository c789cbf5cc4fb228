"""Home page: the authenticated user's timeline.

Owns one ``Timeline`` and its live subscription for as long as the page
is mounted.  Disconnecting the page cancels the subscription.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from roost.pages.templates import render as render_template
from roost.pages.types import Page
from roost.timeline.api import TimelineAPI
from roost.timeline.models import TimelineItem
from roost.timeline.reconciler import Timeline

if TYPE_CHECKING:
    from roost.app import App


def item_context(item: TimelineItem) -> dict[str, Any]:
    """Flatten a timeline item for the post template."""
    post = item.post
    return {
        "id": item.id,
        "post_id": post.id,
        "username": post.user.username if post.user else "",
        "created_at": post.created_at.isoformat() if post.created_at else "",
        "content": post.content,
        "likes_count": post.likes_count,
        "comments_count": post.comments_count,
    }


async def render(app: App) -> Page:
    config = app.config
    timeline = Timeline(
        TimelineAPI(app.http, page_size=config.page_size),
        page_size=config.page_size,
        max_post_length=config.max_post_length,
        notify=app.notify,
    )
    await timeline.initial_load()
    timeline.subscribe()

    links = app.nav_links()

    def html() -> str:
        return render_template(
            "home.html",
            links=links,
            compose=timeline.compose,
            max_length=config.max_post_length,
            pending_label=timeline.pending_label or "",
            busy="true" if timeline.loading_more else "false",
            items=[item_context(item) for item in timeline.visible],
            load_more=timeline.load_more_visible,
            loading_more=timeline.loading_more,
        )

    async def submit() -> TimelineItem | None:
        if not timeline.compose.can_submit:
            return None
        return await timeline.publish(timeline.compose.value)

    return Page(
        title="Timeline",
        render=html,
        links=links,
        teardown=timeline.close,
        handlers={
            "input": timeline.compose.input,
            "submit": submit,
            "flush": timeline.flush,
            "load-more": timeline.load_more,
        },
        state=timeline,
    )
