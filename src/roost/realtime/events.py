"""SSEEvent type and an incremental event-stream decoder.

The decoder consumes the stream one line at a time (as yielded by
``httpx.Response.aiter_lines()``) and hands back complete events.
"""

import contextlib
import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class SSEEvent:
    """One decoded event-stream message.

    ``retry`` carries the reconnection delay in milliseconds in effect when
    the event was dispatched.
    """

    data: str
    event: str | None = None
    id: str | None = None
    retry: int | None = None

    def json(self) -> Any:
        """Decode ``data`` as JSON. Raises ``json.JSONDecodeError``."""
        return json.loads(self.data)

    def encode(self) -> str:
        """Serialize back to wire format, terminated by a blank line."""
        fields = [("event", self.event), ("id", self.id)]
        if self.retry is not None:
            fields.append(("retry", str(self.retry)))
        head = "".join(f"{name}: {value}\n" for name, value in fields if value)
        body = "".join(f"data: {line}\n" for line in self.data.split("\n"))
        return head + body + "\n"


class SSEDecoder:
    """Line-oriented event-stream parser.

    Feed lines without their terminators.  A blank line dispatches the
    buffered event if it carried any ``data``.  ``retry`` persists across
    events; ``last_event_id`` tracks the most recent ``id`` field.
    """

    __slots__ = ("_data", "_event", "_id", "last_event_id", "retry")

    def __init__(self) -> None:
        self._data: list[str] = []
        self._event: str | None = None
        self._id: str | None = None
        self.last_event_id: str | None = None
        self.retry: int | None = None

    def feed(self, line: str) -> SSEEvent | None:
        """Consume one line; return an event when one is complete."""
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None

        field, _, value = line.partition(":")
        value = value.removeprefix(" ")

        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            self._id = value
            self.last_event_id = value
        elif field == "retry":
            with contextlib.suppress(ValueError):
                self.retry = int(value)
        return None

    def _dispatch(self) -> SSEEvent | None:
        data, event, event_id = self._data, self._event, self._id
        self._data, self._event, self._id = [], None, None
        if not data:
            return None
        return SSEEvent(
            data="\n".join(data),
            event=event,
            id=event_id,
            retry=self.retry,
        )
