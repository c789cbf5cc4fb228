"""The App: configuration, session, transport, router and mount point, wired.

Usage::

    async with App(AppConfig(base_url="http://localhost:3000", auth_token=token)) as app:
        await app.start()
        print(app.html())
        await app.navigate("/users/john")
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from roost.config import AppConfig
from roost.http.client import HTTPClient
from roost.http.session import Session
from roost.pages.mount import MountPoint, MountRenderer
from roost.pages.types import Link, Page
from roost.routing.guard import guard
from roost.routing.history import History
from roost.routing.router import Router
from roost.routing.views import Importer, ViewLoader
from roost.timeline.reconciler import Notifier

logger = logging.getLogger("roost.app")


def _log_notice(message: str) -> None:
    logger.warning("%s", message)


class App:
    """One running client: a single router bound to a single mount point.

    Route table::

        /                     home when authenticated, access otherwise
        /users/{username}     user profile
        /posts/{post_id}      single post
        (anything else)       not found
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        notify: Notifier | None = None,
        importer: Importer | None = None,
        initial: str = "/",
    ) -> None:
        self.config = config or AppConfig()
        self.config.validate()
        self.session = session or Session(token=self.config.auth_token)
        self.http = HTTPClient(self.config, self.session, transport=transport)
        self.notify: Notifier = notify or _log_notice
        self.history = History(self.config.base_url, initial)
        self.mount = MountPoint()
        self.renderer = MountRenderer(self.mount)
        views = ViewLoader(self, package=self.config.views_package, importer=importer)
        self.router = Router(self.renderer, history=self.history, views=views)
        self._register_routes()

    def _register_routes(self) -> None:
        r = self.router
        r.route("/", guard(r.view("home"), r.view("access"), self.session.is_authenticated))
        r.route("/users/{username:username}", r.view("user"))
        r.route("/posts/{post_id:int}", r.view("post"))
        r.route(re.compile(r"/"), r.view("not-found"))

    # -- Lifecycle --

    async def start(self) -> None:
        """Install the router and wait for the first page."""
        await self.router.install()

    async def aclose(self) -> None:
        """Disconnect the mounted page and close the transport."""
        page = self.renderer.current
        if page is not None:
            page.disconnect()
        await self.http.aclose()

    async def __aenter__(self) -> App:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- Navigation --

    async def navigate(self, href: str) -> None:
        await self.router.navigate(href)

    async def click(self, href: str) -> bool:
        """Follow a link click; returns False when it leaves the app."""
        intercepted = self.history.click(href)
        await self.router.settle()
        return intercepted

    # -- Page access --

    @property
    def page(self) -> Page | None:
        return self.renderer.current

    async def dispatch(self, action: str, *args: Any) -> Any:
        """Send a user action to the mounted page."""
        page = self.page
        if page is None:
            msg = "No page is mounted."
            raise LookupError(msg)
        return await page.dispatch(action, *args)

    def html(self) -> str:
        return self.mount.html()

    def nav_links(self) -> list[Link]:
        """Fresh navigation links for a page about to be produced."""
        links = [Link("/", "Home")]
        if self.session.is_authenticated() and self.session.user is not None:
            username = self.session.user.username
            links.append(Link(f"/users/{username}", "Profile"))
        return links
