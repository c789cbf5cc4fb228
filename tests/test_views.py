"""Tests for roost.routing.views — lazy view loading and the view cache."""

import asyncio
import types

import pytest

from roost.pages.types import Page
from roost.routing.views import ViewLoader


class CountingImporter:
    """Async importer serving fake page modules, counting each load."""

    def __init__(self, fail: set[str] | None = None) -> None:
        self.loads: list[str] = []
        self.fail = fail or set()
        self.gate = asyncio.Event()
        self.gate.set()

    async def __call__(self, module_name: str) -> types.ModuleType:
        self.loads.append(module_name)
        await self.gate.wait()
        if module_name in self.fail:
            raise ModuleNotFoundError(module_name)
        module = types.ModuleType(module_name)

        def render(app: object, **params: object) -> Page:
            return Page(title=module_name, render=lambda: module_name, state=(app, params))

        module.render = render  # type: ignore[attr-defined]
        return module


class TestModuleName:
    def test_dashes_become_underscores(self) -> None:
        loader = ViewLoader(package="roost.pages")
        assert loader.module_name("not-found") == "roost.pages.not_found_page"
        assert loader.module_name("home") == "roost.pages.home_page"


class TestViewLoading:
    @pytest.mark.asyncio
    async def test_first_navigation_loads_then_caches(self) -> None:
        importer = CountingImporter()
        loader = ViewLoader("app", package="pkg", importer=importer)
        produce = loader.view("home")

        first = await produce()
        second = await produce()

        assert importer.loads == ["pkg.home_page"]
        assert loader.cached("home") is True
        assert first.title == second.title == "pkg.home_page"

    @pytest.mark.asyncio
    async def test_app_and_params_are_forwarded(self) -> None:
        loader = ViewLoader("app", package="pkg", importer=CountingImporter())
        page = await loader.view("user")(username="john")
        assert page.state == ("app", {"username": "john"})

    @pytest.mark.asyncio
    async def test_concurrent_first_navigations_share_one_load(self) -> None:
        importer = CountingImporter()
        importer.gate.clear()
        loader = ViewLoader(package="pkg", importer=importer)
        produce = loader.view("post")

        first = asyncio.create_task(produce(post_id=1))
        second = asyncio.create_task(produce(post_id=2))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        importer.gate.set()
        pages = await asyncio.gather(first, second)

        assert importer.loads == ["pkg.post_page"]
        assert [p.state[1] for p in pages] == [{"post_id": 1}, {"post_id": 2}]

    @pytest.mark.asyncio
    async def test_separate_views_load_separately(self) -> None:
        importer = CountingImporter()
        loader = ViewLoader(package="pkg", importer=importer)
        await loader.view("home")()
        await loader.view("access")()
        assert importer.loads == ["pkg.home_page", "pkg.access_page"]

    @pytest.mark.asyncio
    async def test_failed_load_is_not_cached(self) -> None:
        importer = CountingImporter(fail={"pkg.home_page"})
        loader = ViewLoader(package="pkg", importer=importer)
        produce = loader.view("home")

        with pytest.raises(ModuleNotFoundError):
            await produce()
        assert loader.cached("home") is False

        importer.fail.clear()
        page = await produce()
        assert page.title == "pkg.home_page"
        assert importer.loads == ["pkg.home_page", "pkg.home_page"]

    @pytest.mark.asyncio
    async def test_isolated_caches_per_loader(self) -> None:
        importer = CountingImporter()
        await ViewLoader(package="pkg", importer=importer).view("home")()
        await ViewLoader(package="pkg", importer=importer).view("home")()
        assert importer.loads == ["pkg.home_page", "pkg.home_page"]

    @pytest.mark.asyncio
    async def test_default_importer_loads_real_module(self) -> None:
        loader = ViewLoader()
        render = await loader.load("access")
        assert callable(render)
