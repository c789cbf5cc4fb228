"""Cancellable server-push subscriptions over an httpx event stream.

A ``Subscription`` reads ``text/event-stream`` responses in a background
task, decodes each message's data as JSON, and calls ``on_message``
synchronously for every decoded message.  Malformed messages are
dropped.  A dropped connection is reopened after the retry delay until
the subscription is cancelled, resuming from the last seen event id
(sent back as ``Last-Event-ID``).
"""

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from roost.realtime.events import SSEDecoder, SSEEvent

logger = logging.getLogger("roost.realtime")


class Subscription:
    """One live push channel.

    ``cancel()`` is idempotent; once it returns, ``on_message`` is never
    called again.

    Args:
        client: The shared ``httpx.AsyncClient``.
        url: Stream URL, relative to the client's base URL.
        on_message: Called with every decoded JSON message.
        params: Extra query parameters (e.g. ``auth_token``).
        retry: Seconds to wait before reconnecting, or ``None`` to stop
            when the stream ends.  A server ``retry:`` field overrides it.
    """

    __slots__ = (
        "_cancelled",
        "_client",
        "_on_message",
        "_params",
        "_retry",
        "_task",
        "delivered",
        "last_event_id",
        "url",
    )

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        on_message: Callable[[Any], Any],
        *,
        params: Mapping[str, str] | None = None,
        retry: float | None = 3.0,
    ) -> None:
        self._client = client
        self.url = url
        self._on_message = on_message
        self._params = dict(params or {})
        self._retry = retry
        self._cancelled = False
        self._task: asyncio.Task[None] | None = None
        self.delivered = 0
        self.last_event_id: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        """Open the stream in a background task. Must run inside an event loop."""
        if self._task is None and not self._cancelled:
            self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        """Close the stream. Safe to call any number of times."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("Unsubscribed from %s", self.url)

    __call__ = cancel

    async def wait(self) -> None:
        """Wait for the reader task to finish (stream ended or cancelled)."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _run(self) -> None:
        retry = self._retry
        while not self._cancelled:
            decoder = SSEDecoder()
            headers = {"Accept": "text/event-stream", "Cache-Control": "no-cache"}
            if self.last_event_id is not None:
                headers["Last-Event-ID"] = self.last_event_id
            try:
                async with self._client.stream(
                    "GET",
                    self.url,
                    params=self._params,
                    headers=headers,
                ) as response:
                    if not response.is_success:
                        logger.warning(
                            "Stream %s rejected with %d %s",
                            self.url,
                            response.status_code,
                            response.reason_phrase,
                        )
                        return
                    async for line in response.aiter_lines():
                        event = decoder.feed(line)
                        if decoder.last_event_id is not None:
                            self.last_event_id = decoder.last_event_id
                        if decoder.retry is not None:
                            retry = decoder.retry / 1000
                        if event is not None:
                            self._deliver(event)
            except httpx.HTTPError as exc:
                logger.warning("Stream %s failed: %s", self.url, exc)

            if retry is None or self._cancelled:
                return
            logger.debug("Reconnecting to %s in %.1fs", self.url, retry)
            await asyncio.sleep(retry)

    def _deliver(self, event: SSEEvent) -> None:
        if self._cancelled:
            return
        if event.event == "error":
            logger.debug("Dropping error event from %s: %s", self.url, event.data)
            return
        try:
            message = event.json()
        except json.JSONDecodeError:
            logger.debug("Dropping malformed message from %s", self.url)
            return
        self.delivered += 1
        try:
            self._on_message(message)
        except Exception:
            logger.exception("Message handler for %s failed", self.url)
