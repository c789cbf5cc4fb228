"""Timeline data models, decoded from the API's JSON.

Frozen dataclasses: items are shared between the visible list, the
pending queue and rendered pages, and never mutated in place.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


@dataclass(frozen=True, slots=True)
class User:
    """A post author or profile."""

    username: str
    avatar_url: str | None = None
    id: str | None = None
    followers_count: int = 0
    followees_count: int = 0
    following: bool = False
    followeed: bool = False
    me: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> User:
        return cls(
            username=data["username"],
            avatar_url=data.get("avatarURL"),
            id=data.get("id"),
            followers_count=data.get("followersCount", 0),
            followees_count=data.get("followeesCount", 0),
            following=data.get("following", False),
            followeed=data.get("followeed", False),
            me=data.get("me", False),
        )


@dataclass(frozen=True, slots=True)
class Post:
    """A published post."""

    id: str
    content: str
    created_at: datetime | None = None
    user: User | None = None
    spoiler_of: str | None = None
    nsfw: bool = False
    likes_count: int = 0
    comments_count: int = 0
    mine: bool = False
    liked: bool = False
    subscribed: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Post:
        user = data.get("user")
        return cls(
            id=str(data["id"]),
            content=data["content"],
            created_at=_parse_time(data.get("createdAt")),
            user=User.from_json(user) if user else None,
            spoiler_of=data.get("spoilerOf"),
            nsfw=data.get("NSFW", False),
            likes_count=data.get("likesCount", 0),
            comments_count=data.get("commentsCount", 0),
            mine=data.get("mine", False),
            liked=data.get("liked", False),
            subscribed=data.get("subscribed", False),
        )


@dataclass(frozen=True, slots=True)
class TimelineItem:
    """One entry of the authenticated user's timeline.

    ``id`` orders the timeline: larger is newer, and it doubles as the
    pagination cursor.
    """

    id: int
    post: Post

    @property
    def created_at(self) -> datetime | None:
        return self.post.created_at

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TimelineItem:
        return cls(id=int(data["id"]), post=Post.from_json(data["post"]))

    def with_user(self, user: User) -> TimelineItem:
        """Return a copy whose post is attributed to *user*."""
        return dataclasses.replace(self, post=dataclasses.replace(self.post, user=user))
