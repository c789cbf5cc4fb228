"""Client-side router: ordered route table, navigation dispatch, view loading.

Routes are registered during setup and matched in registration order;
the first match wins.  ``install()`` binds the router to the host
history and renders the current location once.
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

from roost._internal.invoke import invoke
from roost.errors import ConfigurationError
from roost.pages.types import Page
from roost.routing.history import History
from roost.routing.params import CONVERTERS
from roost.routing.route import Location, PageProducer, PathSegment, Route, RouteMatch
from roost.routing.views import ViewLoader

logger = logging.getLogger("roost.router")

Renderer = Callable[[Awaitable[Page], Location], Awaitable[None]]
"""The single sink receiving each navigation's pending Page."""


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path template into segments.

    Examples::

        "/users"               -> [PathSegment("users")]
        "/users/{username}"    -> [PathSegment("users"), PathSegment("{username}", is_param=True, ...)]
        "/posts/{post_id:int}" -> [..., PathSegment("{post_id:int}", is_param=True, param_type="int")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> syntax. "
                "Roost expects {param} (e.g. /users/{username})."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown converter {param_type!r} in route path {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def compile_route(pattern: str | re.Pattern[str], resolver: PageProducer) -> Route:
    """Compile a matcher into a Route.

    - ``re.Pattern``: searched against the path, named groups become params.
    - ``str`` containing ``{param}`` segments: compiled to an anchored regex.
    - any other ``str``: exact path match.
    """
    if isinstance(pattern, re.Pattern):
        return Route(pattern=pattern, resolver=resolver, regex=pattern)

    segments = parse_path(pattern)
    if not any(seg.is_param for seg in segments):
        return Route(pattern=pattern, resolver=resolver)

    parts: list[str] = []
    converters: list[tuple[str, str]] = []
    for seg in segments:
        if seg.is_param:
            regex = CONVERTERS[seg.param_type].regex
            parts.append(f"(?P<{seg.param_name}>{regex})")
            converters.append((seg.param_name or "", seg.param_type))
        else:
            parts.append(re.escape(seg.value))
    return Route(
        pattern=pattern,
        resolver=resolver,
        regex=re.compile("^/" + "/".join(parts) + "$"),
        converters=tuple(converters),
    )


class Router:
    """Ordered route table bound to one history and one renderer sink.

    Usage::

        router = Router(history=History("http://localhost:3000"))
        router.route("/", guard(router.view("home"), router.view("access"), session.is_authenticated))
        router.route("/posts/{post_id:int}", router.view("post"))
        router.route(re.compile(r"/"), router.view("not-found"))
        router.subscribe(MountRenderer(MountPoint()))
        await router.install()

    The last registered route is the catch-all: any path no route matches
    resolves to it, so ``resolve()`` never fails to find a producer.
    """

    __slots__ = ("_history", "_in_flight", "_installed", "_renderer", "_routes", "_tasks", "_views")

    def __init__(
        self,
        renderer: Renderer | None = None,
        *,
        history: History | None = None,
        views: ViewLoader | None = None,
    ) -> None:
        self._routes: list[Route] = []
        self._renderer = renderer
        self._history = history or History()
        self._views = views or ViewLoader()
        self._installed = False
        self._in_flight = 0
        self._tasks: set[asyncio.Task[None]] = set()

    # -- Setup --

    def route(self, pattern: str | re.Pattern[str], resolver: PageProducer) -> None:
        """Register a route. Must be called before install()."""
        if self._installed:
            msg = "Cannot add routes after install()."
            raise ConfigurationError(msg)
        self._routes.append(compile_route(pattern, resolver))

    def subscribe(self, renderer: Renderer) -> None:
        """Bind the renderer sink. Exactly one sink is supported."""
        if self._renderer is not None:
            msg = "Router already has a renderer sink."
            raise ConfigurationError(msg)
        self._renderer = renderer

    def view(self, name: str) -> PageProducer:
        """Return a producer that lazily loads the named view."""
        return self._views.view(name)

    def install(self) -> asyncio.Task[None]:
        """Start listening to history and render the current location.

        Must run inside an event loop.  Returns the task rendering the
        current location; awaiting it waits for the first page.
        """
        if self._installed:
            msg = "Router is already installed."
            raise ConfigurationError(msg)
        if not self._routes:
            msg = "Cannot install a router without routes; register a catch-all last."
            raise ConfigurationError(msg)
        if self._renderer is None:
            msg = "Cannot install a router without a renderer; call subscribe() first."
            raise ConfigurationError(msg)
        self._installed = True
        self._history.listen(self._on_location)
        return self._on_location(self._history.location)

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in match order."""
        return list(self._routes)

    @property
    def history(self) -> History:
        return self._history

    @property
    def state(self) -> str:
        """``"navigating"`` while any navigation is in flight, else ``"idle"``."""
        return "navigating" if self._in_flight else "idle"

    # -- Matching --

    def match(self, path: str) -> RouteMatch:
        """Find the first route matching *path*, falling back to the last route."""
        if not self._routes:
            msg = "No routes registered."
            raise ConfigurationError(msg)
        for route in self._routes:
            params = route.match(path)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return RouteMatch(route=self._routes[-1], path_params={})

    async def resolve(self, location: Location | str) -> Page:
        """Match *location* and produce its Page."""
        if isinstance(location, str):
            location = Location.parse(location)
        found = self.match(location.path)
        return await invoke(found.route.resolver, **found.path_params)

    # -- Navigation --

    async def navigate(self, href: str) -> None:
        """Push *href* onto the history and wait until it has rendered."""
        self._history.push(href)
        await self.settle()

    async def settle(self) -> None:
        """Wait for every in-flight navigation to finish."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def _on_location(self, location: Location) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(self._dispatch(location))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _dispatch(self, location: Location) -> None:
        assert self._renderer is not None
        self._in_flight += 1
        logger.debug("Navigating to %s", location.href)
        try:
            await self._renderer(self.resolve(location), location)
        except Exception:
            logger.exception("Renderer failed for %s", location.href)
        finally:
            self._in_flight -= 1

    def __repr__(self) -> str:
        patterns: list[Any] = [r.pattern for r in self._routes]
        return f"<Router routes={patterns!r} state={self.state}>"
