"""Timeline reconciliation: paginated history plus a staged live queue.

``visible`` is the list on screen, newest first.  Live items are staged
in ``pending`` and only reach ``visible`` through ``flush()`` (or a
publish, which flushes first), so content never reflows under the
reader.  ``load_more()`` extends ``visible`` backwards from its oldest
item.

Every mutation of ``visible`` and ``pending`` happens between awaits,
so on a single event loop each one is atomic with respect to live
deliveries and other operations.  After every operation the ids in
``visible`` are strictly descending and no id appears in both lists.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from roost.errors import RequestError
from roost.timeline.api import Cancellable, TimelineSource
from roost.timeline.compose import ComposeForm, validate_content
from roost.timeline.models import TimelineItem

logger = logging.getLogger("roost.timeline")

Notifier = Callable[[str], Any]
"""Shows a blocking, alert-style message to the user."""


def _log_notice(message: str) -> None:
    logger.warning("%s", message)


class Timeline:
    """State of one timeline page.

    Args:
        source: Where pages, publishes and live items come from.
        page_size: Items per page; a short page means history is exhausted.
        max_post_length: Compose length bound.
        notify: Reports request errors to the user.
    """

    __slots__ = (
        "_listeners",
        "_notify",
        "_source",
        "_subscription",
        "closed",
        "compose",
        "has_more",
        "loading_more",
        "page_size",
        "pending",
        "publishing",
        "visible",
    )

    def __init__(
        self,
        source: TimelineSource,
        *,
        page_size: int = 10,
        max_post_length: int = 480,
        notify: Notifier | None = None,
    ) -> None:
        self._source = source
        self._notify = notify or _log_notice
        self._subscription: Cancellable | None = None
        self._listeners: list[Callable[[Timeline], Any]] = []
        self.page_size = page_size
        self.visible: list[TimelineItem] = []
        self.pending: list[TimelineItem] = []
        self.has_more = False
        self.loading_more = False
        self.publishing = False
        self.closed = False
        self.compose = ComposeForm(max_length=max_post_length)

    # -- Derived state --

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def pending_label(self) -> str | None:
        """Text of the pending-count indicator, ``None`` while hidden."""
        if not self.pending:
            return None
        return f"{len(self.pending)} new posts"

    @property
    def load_more_visible(self) -> bool:
        return self.has_more and not self.closed

    def on_change(self, listener: Callable[[Timeline], Any]) -> None:
        """Call *listener* after every state change."""
        self._listeners.append(listener)

    # -- Operations --

    async def initial_load(self) -> list[TimelineItem]:
        """Fetch the newest page into ``visible``."""
        items = await self._source.timeline(None)
        if self.closed:
            return []
        self.visible = list(items)
        self.has_more = len(items) == self.page_size
        self._changed()
        return self.visible

    def subscribe(self) -> None:
        """Start staging live items from the source."""
        if self._subscription is None and not self.closed:
            self._subscription = self._source.subscribe(self.on_live_item)

    def on_live_item(self, item: TimelineItem) -> None:
        """Stage a live item at the front of ``pending``."""
        if self.closed:
            return
        if self._known(item.id):
            logger.debug("Ignoring duplicate live item %s", item.id)
            return
        self.pending.insert(0, item)
        self._changed()

    def flush(self) -> int:
        """Move every pending item to the front of ``visible``.

        ``pending`` is already newest first, so it is spliced in as is.
        Returns the number of items moved.
        """
        if not self.pending:
            return 0
        moved = len(self.pending)
        self.visible[:0] = self.pending
        self.pending.clear()
        self._changed()
        return moved

    async def publish(self, content: str) -> TimelineItem | None:
        """Publish a post and put it at the very front of ``visible``.

        The trimmed content is what gets posted.  Raises ``ValidationError``
        for empty or over-long content before any request is issued.
        Request errors are reported through the notifier and return
        ``None``; the compose control is re-enabled and focused so the
        user can retry.  Failures after ``close()`` are not reported.
        """
        content = validate_content(content, self.compose.max_length)
        if self.publishing:
            logger.debug("Publish already in flight")
            return None

        self.publishing = True
        self.compose.disabled = True
        self._changed()
        try:
            item = await self._source.publish_post(content)
        except RequestError as exc:
            if self.closed:
                return None
            logger.warning("Publish failed: %s", exc.name)
            self._notify(exc.message)
            asyncio.get_running_loop().call_soon(self._refocus)
            return None
        finally:
            self.publishing = False
            self.compose.disabled = False

        if self.closed:
            return item

        self.pending = [i for i in self.pending if i.id != item.id]
        self.flush()
        self.visible = [item, *(i for i in self.visible if i.id != item.id)]
        self.compose.reset()
        self._changed()
        return item

    async def load_more(self) -> list[TimelineItem]:
        """Append the next page of older items to ``visible``.

        A no-op while history is exhausted or another load is in flight.
        On failure ``has_more`` is left untouched so the load can be retried.
        """
        if not self.has_more or self.loading_more or self.closed:
            return []

        self.loading_more = True
        self._changed()
        try:
            cursor = self.visible[-1].id if self.visible else None
            items = await self._source.timeline(cursor)
        except RequestError as exc:
            if self.closed:
                return []
            logger.warning("Load more failed: %s", exc.name)
            self._notify(exc.message)
            return []
        finally:
            self.loading_more = False

        if self.closed:
            return []

        tail = self.visible[-1].id if self.visible else None
        older = [item for item in items if tail is None or item.id < tail]
        self.visible.extend(older)
        self.has_more = len(items) == self.page_size
        self._changed()
        return older

    def close(self) -> None:
        """Cancel the live subscription and ignore late responses. Idempotent."""
        if self.closed:
            return
        self.closed = True
        if self._subscription is not None:
            self._subscription.cancel()
        self._listeners.clear()

    # -- Internals --

    def _known(self, item_id: int) -> bool:
        return any(i.id == item_id for i in self.visible) or any(
            i.id == item_id for i in self.pending
        )

    def _refocus(self) -> None:
        if not self.closed:
            self.compose.focus()
            self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)
