# File: tests/conftest.py
from __future__ import annotations

import asyncio
import re
from collections import Counter
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from aiohttp import web

from spa_nav.config import NavigatorConfig
from spa_nav.engine import NavigatorSession

NAV = (
    '<aside>'
    '<a class="nav-link" href="index.html">Home</a>'
    '<a class="nav-link" href="discover.html">Discover</a>'
    '<a class="nav-link" href="trending.html">Trending</a>'
    '<a class="nav-link" href="albums.html">Albums</a>'
    '</aside>'
)


def page(title: str | None, main: str | None, *, body_class: str = "", styles: tuple[str, ...] = ()) -> str:
    """Build a demo page with the shared sidebar."""
    head = "".join(f'<link rel="stylesheet" href="{href}">' for href in styles)
    if title is not None:
        head = f"<title>{title}</title>" + head
    body_attr = f' class="{body_class}"' if body_class else ""
    main_html = f"<main>{main}</main>" if main is not None else ""
    return f"<!DOCTYPE html><html><head>{head}</head><body{body_attr}>{NAV}{main_html}</body></html>"


@dataclass
class DemoSite:
    url: str
    hits: Counter = field(default_factory=Counter)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)

    def image(self, name: str) -> str:
        return f"{self.url}/img/{name}"


def build_pages(site: DemoSite) -> dict[str, str]:
    return {
        "index.html": page(
            "Home",
            f'<h1>Home</h1><img src="{site.image("cover1.jpg")}">',
            body_class="page-home",
            styles=("css/base.css", "https://fonts.example.org/inter.css"),
        ),
        "discover.html": page(
            "Discover", "X", body_class="page-discover", styles=("css/base.css", "discover.css")
        ),
        "trending.html": page(
            "Trending",
            f'<h1>Trending</h1><img loading="lazy" src="{site.image("hot.jpg")}">'
            '<div data-id="7" data-title="Song" data-artist="Band" data-image="a.jpg">Song</div>',
            body_class="page-trending",
            styles=("css/base.css", "trending.css"),
        ),
        "albums.html": page(
            "Albums",
            f'<h1>Albums</h1><img src="{site.image("album.jpg")}">',
            body_class="page-albums",
            styles=("css/base.css", "missing.css"),
        ),
        "untitled.html": page(None, None),
        "slow.html": page("Slow", "slow content", body_class="page-slow"),
    }


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def demo_site(unused_tcp_port: int) -> AsyncIterator[DemoSite]:
    site = DemoSite(url=f"http://localhost:{unused_tcp_port}")
    pages = build_pages(site)

    @web.middleware
    async def count_hits(request, handler):
        site.hits[request.path.lstrip("/")] += 1
        return await handler(request)

    async def handle_page(request):
        name = request.match_info["name"]
        gate = site.gates.get(name)
        if gate is not None:
            await gate.wait()
        if name == "broken.html":
            return web.Response(status=500, text="boom")
        if name == "binary.html":
            return web.Response(body=b"\x89PNG", content_type="image/png")
        if name not in pages:
            raise web.HTTPNotFound()
        return web.Response(text=pages[name], content_type="text/html")

    async def handle_root(_):
        return web.Response(text=pages["index.html"], content_type="text/html")

    async def handle_css(request):
        name = request.match_info["name"]
        if name == "missing.css":
            raise web.HTTPNotFound()
        return web.Response(text="main { color: red; }", content_type="text/css")

    async def handle_image(_):
        return web.Response(body=b"\xff\xd8\xff", content_type="image/jpeg")

    app = web.Application(middlewares=[count_hits])
    app.router.add_get("/", handle_root)
    app.router.add_get("/img/{name}", handle_image)
    app.router.add_get("/css/{name}", handle_css)
    app.router.add_get(r"/{name:[\w-]+\.css}", handle_css)
    app.router.add_get(r"/{name:[\w-]+\.html}", handle_page)

    async for _ in _serve_app(app, unused_tcp_port):
        yield site


@pytest.fixture()
def nav_config(demo_site: DemoSite) -> NavigatorConfig:
    """Config pointed at the demo site, with short delays so tests stay quick."""
    return NavigatorConfig(
        base_url=demo_site.url,
        fade_out_ms=20,
        preload_delay_ms=50,
        image_host_pattern=re.escape(demo_site.url) + r"/img/[^\"]+",
        timeout=5.0,
    )


@pytest_asyncio.fixture
async def session(nav_config: NavigatorConfig) -> AsyncIterator[NavigatorSession]:
    """Session with index.html fully loaded; idle preloading is held back."""
    cfg = nav_config.model_copy(update={"preload_delay_ms": 60_000})
    async with NavigatorSession(cfg) as s:
        await s.open("index.html")
        yield s
