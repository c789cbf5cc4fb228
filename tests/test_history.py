"""Tests for roost.routing.history — location stack and link interception."""

from roost.routing.history import History
from roost.routing.route import Location


class TestLocation:
    def test_parse_path_and_query(self) -> None:
        loc = Location.parse("/users/john?tab=posts")
        assert loc.path == "/users/john"
        assert loc.query == "tab=posts"
        assert loc.params == {"tab": ["posts"]}
        assert loc.href == "/users/john?tab=posts"

    def test_parse_absolute_url(self) -> None:
        loc = Location.parse("http://localhost:3000/posts/1")
        assert loc.path == "/posts/1"
        assert loc.href == "/posts/1"

    def test_empty_path_is_root(self) -> None:
        assert Location.parse("").path == "/"


class TestHistory:
    def test_initial_location(self) -> None:
        assert History(initial="/posts/1").location.path == "/posts/1"

    def test_push_notifies_listeners(self) -> None:
        history = History()
        seen: list[str] = []
        history.listen(lambda loc: seen.append(loc.path))
        history.push("/users/john")
        assert seen == ["/users/john"]
        assert history.length == 2

    def test_unlisten(self) -> None:
        history = History()
        seen: list[str] = []
        unlisten = history.listen(lambda loc: seen.append(loc.path))
        unlisten()
        unlisten()
        history.push("/a")
        assert seen == []

    def test_back_and_forward(self) -> None:
        history = History()
        seen: list[str] = []
        history.push("/a")
        history.push("/b")
        history.listen(lambda loc: seen.append(loc.path))

        assert history.back() is True
        assert history.back() is True
        assert history.back() is False
        assert history.forward() is True

        assert seen == ["/a", "/", "/a"]

    def test_push_drops_forward_entries(self) -> None:
        history = History()
        history.push("/a")
        history.push("/b")
        history.back()
        history.push("/c")
        assert history.forward() is False
        assert history.length == 3


class TestClick:
    def test_relative_link_is_intercepted(self) -> None:
        history = History("http://localhost:3000")
        assert history.click("/posts/1") is True
        assert history.location.path == "/posts/1"

    def test_same_origin_absolute_link_is_intercepted(self) -> None:
        history = History("http://localhost:3000")
        assert history.click("http://localhost:3000/users/john?tab=posts") is True
        assert history.location.href == "/users/john?tab=posts"

    def test_foreign_origin_is_not_intercepted(self) -> None:
        history = History("http://localhost:3000")
        assert history.click("https://example.com/") is False
        assert history.location.path == "/"
        assert history.length == 1

    def test_fragment_only_is_not_intercepted(self) -> None:
        history = History("http://localhost:3000")
        assert history.click("#top") is False
