"""Application configuration.

AppConfig is frozen: build one per App, overriding fields at construction.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from roost.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(base_url="https://nakama.example", page_size=20)
    """

    # Server
    base_url: str = "http://localhost:3000"
    request_timeout: float = 30.0

    # Timeline
    page_size: int = 10
    max_post_length: int = 480  # Counted in code points

    # Live stream
    sse_retry: float | None = 3.0  # None disables reconnection

    # Views
    views_package: str = "roost.pages"

    # Initial session (e.g. a token restored by the host)
    auth_token: str | None = None

    # Logging
    log_level: str = "info"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any field is out of range."""
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            msg = f"base_url must be an absolute http(s) URL, got {self.base_url!r}"
            raise ConfigurationError(msg)
        if self.page_size < 1:
            msg = f"page_size must be positive, got {self.page_size}"
            raise ConfigurationError(msg)
        if self.max_post_length < 1:
            msg = f"max_post_length must be positive, got {self.max_post_length}"
            raise ConfigurationError(msg)
        if self.sse_retry is not None and self.sse_retry < 0:
            msg = f"sse_retry must be non-negative, got {self.sse_retry}"
            raise ConfigurationError(msg)
