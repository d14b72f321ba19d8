# File: tests/test_browser.py
"""Headless document, event target and history model."""
from __future__ import annotations

import asyncio

import pytest

from spa_nav.browser.dom import Document
from spa_nav.browser.events import Event, EventTarget
from spa_nav.browser.history import History
from spa_nav.browser.window import Window

PAGE = (
    '<html><head><title>Home</title><link rel="stylesheet" href="css/base.css"></head>'
    '<body class="page-home"><a class="nav-link active" href="index.html">Home</a>'
    '<a class="nav-link" href="albums.html">Albums</a><main><p>hi</p></main></body></html>'
)


# --------------------------------------------------------------------------- #
#                                  Document                                   #
# --------------------------------------------------------------------------- #


def test_document_reads_page_parts():
    doc = Document(PAGE)
    assert doc.title == "Home"
    assert doc.body_class == "page-home"
    assert doc.main_html == "<p>hi</p>"
    assert doc.stylesheet_hrefs() == ["css/base.css"]
    assert [a["href"] for a in doc.nav_links("nav-link")] == ["index.html", "albums.html"]


def test_document_writes():
    doc = Document(PAGE)
    doc.replace_main("<h1>New</h1><p>body</p>")
    doc.title = "Albums"
    doc.body_class = "page-albums"
    doc.append_stylesheet("albums.css")

    assert doc.main_html == "<h1>New</h1><p>body</p>"
    assert doc.title == "Albums"
    assert doc.body_class == "page-albums"
    assert doc.stylesheet_hrefs() == ["css/base.css", "albums.css"]
    assert doc.soup.head.find_all("link")[-1]["href"] == "albums.css"


def test_document_creates_missing_head_and_title():
    doc = Document("<main>bare</main>")
    doc.title = "Made up"
    doc.append_stylesheet("x.css")
    assert doc.title == "Made up"
    assert doc.count_stylesheets("x.css") == 1
    assert doc.main_html == "bare"


def test_replace_main_without_region_raises():
    doc = Document("<html><body><p>no region</p></body></html>")
    with pytest.raises(LookupError):
        doc.replace_main("<p>x</p>")


def test_toggle_class():
    doc = Document(PAGE)
    home, albums = doc.nav_links("nav-link")
    doc.toggle_class(home, "active", False)
    doc.toggle_class(albums, "active", True)
    doc.toggle_class(albums, "active", True)
    assert home["class"] == ["nav-link"]
    assert albums["class"] == ["nav-link", "active"]


def test_empty_body_class_removes_attribute():
    doc = Document(PAGE)
    doc.body_class = ""
    assert "class" not in doc.body.attrs
    assert doc.body_class == ""


def test_content_region_lifecycle():
    region = Document(PAGE).region
    region.dim(0.5)
    assert (region.opacity, region.interactive) == (0.5, False)
    region.fade_out(150)
    assert region.opacity == 0.0
    assert region.transition == "opacity 0.15s ease"
    region.restore()
    assert region.is_idle


# --------------------------------------------------------------------------- #
#                                 EventTarget                                 #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_dispatch_schedules_coroutine_listeners():
    target = EventTarget()
    seen = []

    async def on_async(event):
        await asyncio.sleep(0)
        seen.append(("async", event.detail))
        return "done"

    target.add_listener("ping", lambda event: seen.append(("sync", event.detail)))
    target.add_listener("ping", on_async)

    tasks = target.emit("ping", detail=1)
    assert seen == [("sync", 1)]
    assert await asyncio.gather(*tasks) == ["done"]
    assert seen == [("sync", 1), ("async", 1)]


def test_failing_listener_does_not_stop_others():
    target = EventTarget()
    seen = []

    def broken(_event):
        raise ValueError("boom")

    target.add_listener("ping", broken)
    target.add_listener("ping", lambda event: seen.append(event.type))
    assert target.emit("ping") == []
    assert seen == ["ping"]


def test_listener_registration():
    target = EventTarget()

    def listener(_event):
        return None

    target.add_listener("x", listener)
    target.add_listener("x", listener)
    assert target.listener_count("x") == 1
    target.remove_listener("x", listener)
    target.remove_listener("x", listener)
    assert target.listener_count("x") == 0


def test_prevent_default():
    event = Event("click")
    assert event.default_prevented is False
    event.prevent_default()
    assert event.default_prevented is True


# --------------------------------------------------------------------------- #
#                                   History                                   #
# --------------------------------------------------------------------------- #


def test_push_truncates_forward_entries():
    history = History(EventTarget(), "index.html")
    history.push_state({"url": "a.html"}, "A", "a.html")
    history.push_state({"url": "b.html"}, "B", "b.html")
    history.go(-2)
    history.push_state({"url": "c.html"}, "C", "c.html")
    assert [e.url for e in history.entries] == ["index.html", "c.html"]
    assert history.index == 1


def test_traversal_fires_popstate_with_entry_state():
    events = EventTarget()
    popped = []
    events.add_listener("popstate", lambda event: popped.append(event.detail))
    history = History(events, "index.html")
    history.replace_state({"url": "index.html"}, "Home", "index.html")
    history.push_state({"url": "a.html"}, "A", "a.html")

    history.back()
    history.back()  # already at the first entry
    history.forward()
    history.forward()  # already at the last entry

    assert popped == [{"url": "index.html"}, {"url": "a.html"}]


def test_window_hard_navigation():
    calls = []
    window = Window(Document(PAGE), "index.html", on_hard_navigate=calls.append)
    window.assign("broken.html")
    assert window.hard_navigations == ["broken.html"]
    assert window.location == "broken.html"
    assert window.history.length == 2
    assert calls == ["broken.html"]


def test_window_keeps_history_across_documents():
    first = Window(Document(PAGE), "index.html")
    first.history.push_state({"url": "a.html"}, "A", "a.html")
    second = Window(Document(PAGE), "a.html", history=first.history)

    popped = []
    second.events.add_listener("popstate", lambda event: popped.append(event.detail))
    second.history.back()
    assert second.history.length == 2
    assert popped == [None]
    assert second.pathname == "/index.html"
