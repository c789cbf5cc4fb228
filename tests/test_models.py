"""Tests for roost.timeline.models — JSON decoding."""

from datetime import UTC, datetime

import pytest

from roost.timeline.models import Post, TimelineItem, User

ITEM = {
    "id": "42",
    "post": {
        "id": "p1",
        "content": "hello",
        "createdAt": "2026-01-01T12:00:00+00:00",
        "user": {"username": "john", "avatarURL": "http://img/john"},
        "likesCount": 3,
        "commentsCount": 1,
        "NSFW": True,
    },
}


class TestTimelineItem:
    def test_from_json(self) -> None:
        item = TimelineItem.from_json(ITEM)
        assert item.id == 42
        assert item.post.id == "p1"
        assert item.post.content == "hello"
        assert item.post.user == User(username="john", avatar_url="http://img/john")
        assert item.post.likes_count == 3
        assert item.post.comments_count == 1
        assert item.post.nsfw is True
        assert item.created_at == datetime(2026, 1, 1, 12, tzinfo=UTC)

    def test_numeric_id_accepted(self) -> None:
        assert TimelineItem.from_json({**ITEM, "id": 7}).id == 7

    def test_non_numeric_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            TimelineItem.from_json({**ITEM, "id": "abc"})

    def test_missing_post_rejected(self) -> None:
        with pytest.raises(KeyError):
            TimelineItem.from_json({"id": "1"})

    def test_with_user_returns_copy(self) -> None:
        item = TimelineItem.from_json(ITEM)
        me = User(username="me", me=True)
        updated = item.with_user(me)
        assert updated.post.user == me
        assert item.post.user is not None
        assert item.post.user.username == "john"


class TestPost:
    def test_defaults(self) -> None:
        post = Post.from_json({"id": 1, "content": "x"})
        assert post.id == "1"
        assert post.user is None
        assert post.created_at is None
        assert post.likes_count == 0


class TestUser:
    def test_profile_fields(self) -> None:
        user = User.from_json({
            "username": "jane",
            "followersCount": 5,
            "followeesCount": 2,
            "following": True,
        })
        assert user.followers_count == 5
        assert user.followees_count == 2
        assert user.following is True
        assert user.me is False
