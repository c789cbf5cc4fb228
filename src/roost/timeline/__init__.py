"""Timeline — paginated feed reconciled with a live update stream.

Public API::

    from roost.timeline import Timeline, TimelineAPI, TimelineItem
"""

from roost.timeline.api import TimelineAPI, TimelineSource
from roost.timeline.compose import ComposeForm, validate_content
from roost.timeline.models import Post, TimelineItem, User
from roost.timeline.reconciler import Notifier, Timeline

__all__ = [
    "ComposeForm",
    "Notifier",
    "Post",
    "Timeline",
    "TimelineAPI",
    "TimelineItem",
    "TimelineSource",
    "User",
    "validate_content",
]
