"""Invoke helpers — call sync or async page producers uniformly.

Page producers can be ``def`` or ``async def``, and a producer can also
hand back an awaitable it built itself (``guard`` and ``view`` do).  This
module keeps the sync/async check in exactly one place.

Usage::

    from roost._internal.invoke import invoke

    page = await invoke(producer, **params)
"""

import inspect
from typing import Any


async def invoke(producer: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a producer and await the result if it is awaitable."""
    result = producer(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
