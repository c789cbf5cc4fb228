"""Data models for mounted pages.

A Page is what a page producer yields and what the mount point owns:
a render handle, the navigation links it shows, and an optional
teardown hook fired when the page is replaced.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from roost._internal.invoke import invoke


@dataclass(slots=True)
class Link:
    """An in-page navigation link.

    ``current`` is owned by the mount point's post-mount pass; templates
    turn it into ``aria-current="page"``.
    """

    href: str
    label: str
    current: bool = False


@dataclass(slots=True, eq=False)
class Page:
    """A displayable unit with an optional teardown hook.

    Attributes:
        title: Human-readable page title.
        render: Returns the page's current markup.  Called on every
            repaint, so stateful pages re-render from live state.
        links: Navigation links shown by the page.
        teardown: Called once when the page is disconnected.
        handlers: User actions the page responds to, by name
            (``"submit"``, ``"flush"``, ...).
        state: Page-owned state object, if any.
    """

    title: str
    render: Callable[[], str]
    links: list[Link] = field(default_factory=list)
    teardown: Callable[[], Any] | None = None
    handlers: dict[str, Callable[..., Any]] = field(default_factory=dict)
    state: Any = None
    connected: bool = True

    def disconnect(self) -> None:
        """Fire the teardown hook. Idempotent."""
        if not self.connected:
            return
        self.connected = False
        if self.teardown is not None:
            self.teardown()

    async def dispatch(self, action: str, *args: Any) -> Any:
        """Run the handler registered for *action*.

        Raises ``KeyError`` for an action the page does not handle.
        Actions on a disconnected page are ignored.
        """
        if not self.connected:
            return None
        return await invoke(self.handlers[action], *args)
