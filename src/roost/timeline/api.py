"""Timeline HTTP surface.

Paths are a stable contract with the server:

- ``GET /api/timeline?before={cursor}&last={page_size}``: a page, newest first
- ``POST /api/posts`` with ``{"content": ...}``: publish, returns a TimelineItem
- ``GET /api/timeline`` as an event stream: live TimelineItems
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol

from roost.http.client import HTTPClient
from roost.realtime.subscription import Subscription
from roost.timeline.models import TimelineItem, User

logger = logging.getLogger("roost.timeline")


def _decode_page(data: Any) -> list[TimelineItem]:
    if data is None:
        return []
    if not isinstance(data, list):
        msg = f"expected a list of timeline items, got {type(data).__name__}"
        raise TypeError(msg)
    return [TimelineItem.from_json(entry) for entry in data]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class TimelineSource(Protocol):
    """What the timeline reconciler needs from the server."""

    async def timeline(self, before: int | None = None) -> list[TimelineItem]: ...

    async def publish_post(self, content: str) -> TimelineItem: ...

    def subscribe(self, on_item: Callable[[TimelineItem], Any]) -> Cancellable: ...


class TimelineAPI:
    """``TimelineSource`` backed by the HTTP client."""

    __slots__ = ("_http", "page_size")

    def __init__(self, http: HTTPClient, *, page_size: int = 10) -> None:
        self._http = http
        self.page_size = page_size

    async def timeline(self, before: int | None = None) -> list[TimelineItem]:
        """Fetch up to ``page_size`` items strictly older than *before*.

        ``before=None`` fetches from the newest item.
        """
        cursor = 0 if before is None else before
        return await self._http.get(
            f"/api/timeline?before={cursor}&last={self.page_size}",
            decode=_decode_page,
        )

    async def publish_post(self, content: str) -> TimelineItem:
        item = await self._http.post(
            "/api/posts",
            {"content": content},
            decode=TimelineItem.from_json,
        )
        # The create response does not embed the author.
        auth_user = self._http.session.user
        if auth_user is not None:
            author = User(
                username=auth_user.username,
                avatar_url=auth_user.avatar_url,
                id=auth_user.id,
                me=True,
            )
            item = item.with_user(author)
        return item

    def subscribe(self, on_item: Callable[[TimelineItem], Any]) -> Subscription:
        def on_message(message: Any) -> None:
            try:
                item = TimelineItem.from_json(message)
            except (KeyError, TypeError, ValueError):
                logger.debug("Dropping undecodable timeline message: %r", message)
                return
            on_item(item)

        return self._http.subscribe("/api/timeline", on_message)
