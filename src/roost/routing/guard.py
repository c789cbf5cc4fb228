"""Authentication-guarded page producers."""

from collections.abc import Callable
from typing import Any

from roost.routing.route import PageProducer


def guard(
    authenticated: PageProducer,
    fallback: PageProducer,
    is_authenticated: Callable[[], bool],
) -> PageProducer:
    """Compose two producers behind an authentication check.

    The predicate runs on every call, never at registration time, so a
    login or logout between navigations is honoured::

        router.route("/", guard(view("home"), view("access"), session.is_authenticated))
    """

    def guarded(**params: Any) -> Any:
        if is_authenticated():
            return authenticated(**params)
        return fallback(**params)

    return guarded
