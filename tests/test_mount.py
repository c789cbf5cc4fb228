"""Tests for roost.pages.mount — the render pipeline and link activation."""

import asyncio

import pytest

from roost.errors import RequestError
from roost.pages.mount import MountPoint, MountRenderer, activate_links
from roost.pages.types import Link, Page
from roost.routing.route import Location


def _page(title: str, log: list[str] | None = None, links: list[Link] | None = None) -> Page:
    def teardown() -> None:
        if log is not None:
            log.append(f"teardown:{title}")

    return Page(title=title, render=lambda: f"<p>{title}</p>", links=links or [], teardown=teardown)


async def _ready(page: Page) -> Page:
    return page


class TestActivateLinks:
    def test_marks_matching_path_only(self) -> None:
        links = [Link("/", "Home"), Link("/users/john", "Profile"), Link("/users/john?tab=posts", "Posts")]
        activate_links(links, "/users/john")
        assert [link.current for link in links] == [False, True, True]

    def test_clears_stale_marks(self) -> None:
        link = Link("/", "Home", current=True)
        activate_links([link], "/posts/1")
        assert link.current is False


class TestMountPoint:
    def test_html_wraps_children(self) -> None:
        mount = MountPoint()
        mount.append(_page("a"))
        assert mount.html() == '<main id="main"><p>a</p></main>'

    def test_clear(self) -> None:
        mount = MountPoint()
        mount.append(_page("a"))
        mount.clear()
        assert mount.page is None
        assert mount.children == ()


class TestMountRenderer:
    @pytest.mark.asyncio
    async def test_mounts_page_and_activates_links(self) -> None:
        mount = MountPoint()
        renderer = MountRenderer(mount)
        links = [Link("/", "Home"), Link("/posts/1", "Post")]

        await renderer(_ready(_page("post", links=links)), Location.parse("/posts/1"))

        assert mount.page is renderer.current
        assert [link.current for link in links] == [False, True]

    @pytest.mark.asyncio
    async def test_previous_page_torn_down_before_new_one_is_produced(self) -> None:
        log: list[str] = []
        mount = MountPoint()
        renderer = MountRenderer(mount)
        await renderer(_ready(_page("first", log)), Location.parse("/"))

        async def second() -> Page:
            log.append("produce:second")
            return _page("second", log)

        await renderer(second(), Location.parse("/second"))

        assert log == ["teardown:first", "produce:second"]
        assert [p.title for p in mount.children] == ["second"]

    @pytest.mark.asyncio
    async def test_failure_renders_error_page(self) -> None:
        mount = MountPoint()
        renderer = MountRenderer(mount)

        async def failing() -> Page:
            raise RequestError(
                name="UnauthenticatedError",
                message="unauthenticated",
                status_code=401,
                status_text="Unauthorized",
                url="http://localhost:3000/api/timeline",
            )

        await renderer(failing(), Location.parse("/"))

        assert mount.page is not None
        assert mount.page.title == "Error"
        html = mount.html()
        assert "UnauthenticatedError" in html
        assert "unauthenticated" in html

    @pytest.mark.asyncio
    async def test_teardown_runs_once_per_page(self) -> None:
        log: list[str] = []
        mount = MountPoint()
        renderer = MountRenderer(mount)
        page = _page("only", log)
        await renderer(_ready(page), Location.parse("/"))
        await renderer(_ready(_page("next")), Location.parse("/next"))
        page.disconnect()
        assert log == ["teardown:only"]

    @pytest.mark.asyncio
    async def test_failing_teardown_does_not_block_next_page(self) -> None:
        mount = MountPoint()
        renderer = MountRenderer(mount)

        def explode() -> None:
            raise RuntimeError("teardown bug")

        await renderer(_ready(Page(title="bad", render=lambda: "", teardown=explode)), Location.parse("/"))
        await renderer(_ready(_page("next")), Location.parse("/next"))
        assert mount.page is not None
        assert mount.page.title == "next"

    @pytest.mark.asyncio
    async def test_stale_page_is_dropped_and_disconnected(self) -> None:
        log: list[str] = []
        mount = MountPoint()
        renderer = MountRenderer(mount)
        gate = asyncio.Event()

        async def slow() -> Page:
            await gate.wait()
            return _page("slow", log)

        slow_task = asyncio.create_task(renderer(slow(), Location.parse("/slow")))
        await asyncio.sleep(0)
        await renderer(_ready(_page("fast", log)), Location.parse("/fast"))
        gate.set()
        await slow_task

        assert [p.title for p in mount.children] == ["fast"]
        assert log == ["teardown:slow"]
