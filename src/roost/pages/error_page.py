"""Error placeholder page, built by the render pipeline from a failure."""

from roost.errors import RequestError
from roost.pages.templates import render
from roost.pages.types import Page


def render_error_page(exc: BaseException) -> Page:
    """Build a Page describing *exc*."""
    name = exc.name if isinstance(exc, RequestError) else type(exc).__name__
    message = str(exc)
    html = render("error.html", name=name, message=message)
    return Page(title="Error", render=lambda: html)
