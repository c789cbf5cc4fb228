"""Roost exception hierarchy.

Shared across Router, pages, transport, and timeline so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when app configuration or router setup is invalid.

    Typically raised while building the ``App`` or calling ``Router.install()``.
    """


class ValidationError(RoostError):
    """Raised when user input is rejected before any request is issued."""


@dataclass(frozen=True, slots=True)
class RequestError(RoostError):
    """A failed HTTP request, normalized from the server response.

    ``name`` is the machine-derived error kind (``InvalidContentError``),
    ``message`` the lower-cased text it was derived from.  Transport
    failures that never produced a response carry ``status_code=0``.
    """

    name: str
    message: str
    status_code: int
    status_text: str = ""
    url: str = ""

    def __str__(self) -> str:
        return self.message


def error_name(text: str) -> str:
    """Derive an error-kind name from error text.

    Examples::

        "invalid content"      -> "InvalidContentError"
        "unauthenticated"      -> "UnauthenticatedError"
        ""                     -> "Error"
    """
    return "".join(word[:1].upper() + word[1:] for word in text.split(" ")) + "Error"
