"""Route, RouteMatch and Location frozen dataclasses."""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

from roost.pages.types import Page
from roost.routing.params import convert_param

PageProducer = Callable[..., Page | Awaitable[Page]]
"""Called with a route's captured parameters, returns a Page (or awaitable)."""


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{username}``   (is_param=True, param_name="username")
    Typed:   ``/{post_id:int}`` (is_param=True, param_name="post_id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition: a compiled matcher and its resolver.

    ``pattern`` is the matcher as registered (exact path, ``{param}``
    template, or compiled regex); ``regex`` is ``None`` for exact paths.
    """

    pattern: str | re.Pattern[str]
    resolver: PageProducer
    regex: re.Pattern[str] | None = None
    converters: tuple[tuple[str, str], ...] = ()

    def match(self, path: str) -> dict[str, Any] | None:
        """Return captured parameters if *path* matches, else ``None``."""
        if self.regex is None:
            return {} if path == self.pattern else None
        m = self.regex.search(path)
        if m is None:
            return None
        types = dict(self.converters)
        params: dict[str, Any] = {}
        for name, value in m.groupdict().items():
            if value is None:
                continue
            try:
                params[name] = convert_param(value, types.get(name, "str"))
            except ValueError:
                return None
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a route lookup."""

    route: Route
    path_params: dict[str, Any]


@dataclass(frozen=True, slots=True)
class Location:
    """The current in-app location: a path plus its query string."""

    path: str = "/"
    query: str = ""
    params: dict[str, list[str]] = field(default_factory=dict, compare=False)

    @classmethod
    def parse(cls, href: str) -> Location:
        """Build a Location from a path-relative or absolute href."""
        parts = urlsplit(href)
        path = parts.path or "/"
        return cls(path=path, query=parts.query, params=parse_qs(parts.query))

    @property
    def href(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path
