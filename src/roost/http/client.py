"""HTTP transport facade over ``httpx.AsyncClient``.

``get``/``post`` return decoded JSON and normalize non-2xx responses
into ``RequestError``.  A ``decode`` callable turns the JSON into a
model; a body it cannot decode is an ``InvalidResponseError``.
``subscribe`` opens a live push channel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from roost.config import AppConfig
from roost.errors import RequestError, error_name
from roost.http.session import Session
from roost.realtime.subscription import Subscription

logger = logging.getLogger("roost.http")


def parse_response(response: httpx.Response) -> Any:
    """Decode *response* or raise ``RequestError`` for a non-2xx status.

    The error kind is derived from the lower-cased body text, falling
    back to the reason phrase when the body is empty.
    """
    if not response.is_success:
        message = response.text.strip().lower() or response.reason_phrase.lower()
        raise RequestError(
            name=error_name(message),
            message=message,
            status_code=response.status_code,
            status_text=response.reason_phrase,
            url=str(response.request.url),
        )
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HTTPClient:
    """API client bound to one base URL and one session.

    Usage::

        async with HTTPClient(config, session) as http:
            items = await http.get("/api/timeline?last=10")
            cancel = http.subscribe("/api/timeline", on_item)
    """

    __slots__ = ("_client", "_config", "session")

    def __init__(
        self,
        config: AppConfig,
        session: Session,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.request_timeout,
            transport=transport,
        )

    async def get(
        self,
        path: str,
        headers: dict[str, str] | None = None,
        *,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        return await self._request("GET", path, headers=headers, decode=decode)

    async def post(
        self,
        path: str,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        *,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        return await self._request("POST", path, body=body, headers=headers, decode=decode)

    def subscribe(self, path: str, on_message: Callable[[Any], Any]) -> Subscription:
        """Open a push channel on *path*; returns its Subscription.

        The auth token travels as the ``auth_token`` query parameter,
        since event streams cannot carry an Authorization header.
        """
        params: dict[str, str] = {}
        if self.session.is_authenticated() and self.session.token:
            params["auth_token"] = self.session.token
        subscription = Subscription(
            self._client,
            path,
            on_message,
            params=params,
            retry=self._config.sse_retry,
        )
        subscription.start()
        return subscription

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.session.is_authenticated():
            headers["Authorization"] = f"Bearer {self.session.token}"
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                json=body,
                headers=self._headers(headers),
            )
        except httpx.TransportError as exc:
            message = (str(exc) or type(exc).__name__).strip().lower()
            logger.warning("%s %s failed: %s", method, path, message)
            raise RequestError(
                name=error_name(message),
                message=message,
                status_code=0,
                url=str(self._client.base_url.join(path)),
            ) from exc
        try:
            data = parse_response(response)
        except RequestError as exc:
            logger.warning("%s %s -> %d %s", method, path, exc.status_code, exc.name)
            raise
        if decode is None:
            return data
        try:
            return decode(data)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("%s %s -> %d undecodable body: %r", method, path, response.status_code, exc)
            message = "invalid response"
            raise RequestError(
                name=error_name(message),
                message=message,
                status_code=response.status_code,
                status_text=response.reason_phrase,
                url=str(response.request.url),
            ) from exc
