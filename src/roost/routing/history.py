"""Host navigation: the location stack and link-click interception.

Stands in for the browser's ``location``/``history`` pair.  Listeners
are called synchronously on every location change, in registration
order, exactly like ``popstate`` handlers.
"""

from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from roost.routing.route import Location

Listener = Callable[[Location], Any]


class History:
    """A linear history of in-app locations with back/forward.

    ``origin`` decides which clicked links stay in-app: relative hrefs
    and hrefs on the same scheme and host are intercepted, anything
    else is left to the host.
    """

    __slots__ = ("_entries", "_index", "_listeners", "_origin")

    def __init__(self, origin: str = "http://localhost", initial: str = "/") -> None:
        parts = urlsplit(origin)
        self._origin = (parts.scheme, parts.netloc)
        self._entries: list[Location] = [Location.parse(initial)]
        self._index = 0
        self._listeners: list[Listener] = []

    @property
    def location(self) -> Location:
        return self._entries[self._index]

    @property
    def length(self) -> int:
        return len(self._entries)

    def listen(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that removes it."""
        self._listeners.append(listener)

        def unlisten() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unlisten

    def push(self, href: str) -> Location:
        """Navigate to *href*, dropping any forward entries."""
        location = Location.parse(href)
        del self._entries[self._index + 1 :]
        self._entries.append(location)
        self._index += 1
        self._notify()
        return location

    def back(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        self._notify()
        return True

    def forward(self) -> bool:
        if self._index == len(self._entries) - 1:
            return False
        self._index += 1
        self._notify()
        return True

    def is_internal(self, href: str) -> bool:
        """True when *href* points inside this application."""
        parts = urlsplit(href)
        if not parts.scheme and not parts.netloc:
            return not href.startswith("#")
        return (parts.scheme, parts.netloc) == self._origin

    def click(self, href: str) -> bool:
        """Handle a link click. Returns True if it was intercepted."""
        if not self.is_internal(href):
            return False
        parts = urlsplit(href)
        path = parts.path or "/"
        self.push(f"{path}?{parts.query}" if parts.query else path)
        return True

    def _notify(self) -> None:
        location = self.location
        for listener in list(self._listeners):
            listener(location)
