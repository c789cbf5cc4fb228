"""Path parameter converters for route templates.

``{name}`` captures one segment as ``str``; ``{name:type}`` picks one of
the converters below.  ``username`` follows the server's signup rule.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Converter:
    """Regex fragment a capture must match, and its value conversion."""

    regex: str
    convert: Callable[[str], str | int]


CONVERTERS: dict[str, Converter] = {
    "str": Converter(r"[^/]+", str),
    "int": Converter(r"\d+", int),
    "username": Converter(r"[a-zA-Z][a-zA-Z0-9_-]{0,17}", str),
    "path": Converter(r".+", str),
}


def convert_param(value: str, param_type: str) -> str | int:
    """Convert a captured path segment with the named converter.

    Raises ``ValueError`` if the value cannot be converted, ``KeyError``
    for an unknown converter.
    """
    return CONVERTERS[param_type].convert(value)
