"""Tests for the SAX filter base used by renderers."""

import xml.sax
from io import StringIO
from xml.sax.saxutils import XMLFilterBase, XMLGenerator
from xml.sax.xmlreader import AttributesImpl

import pytest

from dirstreamlib import (
    DirectoryFilterBase,
    FilterConfig,
    HandlerRegistrationWarning,
    InvalidCallbackError,
    PruneConfig,
    replay,
)
from dirstreamlib.testing import ListingBuilder, RecordingSink


class ItemRenderer(DirectoryFilterBase):
    """Writes one <item> per file, RSS style."""

    HANDLER_EVENTS = ("title",)
    CALLBACK_EVENTS = ("title", "link")

    def start_node(self, event):
        if event.name != "file":
            return
        sink = self.getContentHandler()
        sink.startElement("item", self.attributes(id=self.generate_id()))

        sink.startElement("title", self.attributes())
        text = self.dispatch("title", self.location(), event.node_name)
        if text is not None:
            sink.characters(text)
        sink.endElement("title")

        self.emit("link", self.make_link(event))
        media_type = self.mtype(event.node_name)
        if media_type:
            self.emit("type", media_type)

    def end_node(self, event):
        if event.name == "file":
            self.getContentHandler().endElement("item")


class TitleHandler(XMLFilterBase):
    def parse_uri(self, path, title):
        self.startElement("me:woot", AttributesImpl({}))
        self.characters(path)
        self.endElement("me:woot")


def listing():
    return (ListingBuilder("root", head={"title": "My files", "path": "/home/me"})
            .directory("docs")
            .file("a.txt", size=12)
            .up()
            .directory(".git")
            .file("config")
            .up()
            .file("b.pdf")
            .events())


def render(events, **kwargs):
    sink = RecordingSink()
    renderer = ItemRenderer(**kwargs)
    renderer.setContentHandler(sink)
    return renderer, sink, events


class TestRendering:
    """Hooks see the normalized traversal state."""

    def test_items_for_every_file(self):
        renderer, sink, events = render(listing())
        replay(events, renderer)

        links = [record[1] for record in sink.records if record[0] == "text"]
        assert "/root/docs/a.txt" in links
        assert "/root/.git/config" in links
        assert "/root/b.pdf" in links
        assert len(sink.started("item")) == 3

    def test_item_ids_follow_location(self):
        first, first_sink, events = render(listing())
        replay(events, first)
        second, second_sink, events = render(listing())
        replay(events, second)

        ids = [attrs["id"] for _, attrs in first_sink.started("item")]
        assert ids == [attrs["id"] for _, attrs in second_sink.started("item")]
        assert len(set(ids)) == 3
        assert all(item_id.startswith("ID") for item_id in ids)

    def test_pruned_subtree_produces_nothing(self):
        config = FilterConfig(prune=PruneConfig(exclude_patterns={".*"}))
        renderer, sink, events = render(listing(), config=config)
        replay(events, renderer)

        assert len(sink.started("item")) == 2
        assert "config" not in sink.text()
        assert renderer.cwd() == ""

    def test_item_ends_match_starts(self):
        config = FilterConfig(prune=PruneConfig(exclude_patterns={"*.txt"}))
        renderer, sink, events = render(listing(), config=config)
        replay(events, renderer)

        ends = [record for record in sink.records if record == ("end", "item")]
        assert len(ends) == len(sink.started("item")) == 2

    def test_root_prefix(self):
        renderer, sink, events = render(listing(), config=FilterConfig(root_prefix="file://"))
        replay(events, renderer)

        assert "file:///root/b.pdf" in sink.text()

    def test_media_types(self):
        renderer, sink, events = render(listing())
        replay(events, renderer)

        types = [record for record in sink.records if record[0] == "start" and record[1] == "type"]
        assert len(types) == 2  # "config" has no extension
        assert renderer.mtype("b.pdf") == "application"

    def test_header_capture_and_accessors(self):
        renderer, sink, events = render(listing())
        replay(events, renderer)

        assert renderer.captured("title") == "My files"
        assert renderer.header_fields() == {"title": "My files", "path": "/home/me"}
        assert renderer.start_level() == 2


class TestExtensions:
    """Handlers and callbacks registered on the filter."""

    def test_link_callback(self):
        renderer, sink, events = render(listing())
        renderer.set_callbacks({"link": lambda uri: "https://example.org" + uri})
        replay(events, renderer)

        assert "https://example.org/root/b.pdf" in sink.text()

    def test_title_handler_wins_over_callback(self):
        renderer, sink, events = render(listing())
        handler = TitleHandler()
        handler.setContentHandler(sink)

        renderer.set_handlers({"title": handler})
        renderer.set_callbacks({"title": str.upper})
        replay(events, renderer)

        assert len(sink.started("me:woot")) == 3
        assert "/root/docs/a.txt" in sink.text()
        assert "A.TXT" not in sink.text()

    def test_title_callback_without_handler(self):
        renderer, sink, events = render(listing())
        renderer.set_callbacks({"title": str.upper})
        replay(events, renderer)

        assert "A.TXT" in sink.text()

    def test_allow_lists_come_from_the_class(self):
        assert ItemRenderer.handler_events() == ("title",)
        assert ItemRenderer.callback_events() == ("title", "link")
        assert DirectoryFilterBase.handler_events() == ()

        renderer = ItemRenderer()
        assert renderer.set_handlers({"link": TitleHandler()}) == []
        assert renderer.get_handler("link") is None

    def test_invalid_registrations(self):
        renderer = ItemRenderer()

        with pytest.warns(HandlerRegistrationWarning):
            renderer.set_handlers({"title": object()})
        with pytest.raises(InvalidCallbackError):
            renderer.set_callbacks({"link": "https://example.org"})

        assert renderer.get_handler("title") is None
        assert renderer.get_callback("link") is None


class TestSaxIntegration:
    """The filter works as a regular SAX content handler."""

    XML = (
        '<dirtree><head><title>Feed</title></head>'
        '<directory name="root">'
        '<file name="a.txt"><size>3</size></file>'
        '<directory name="sub"><file name="b.html"/></directory>'
        '</directory></dirtree>'
    )

    def test_parse_string_through_filter(self):
        sink = RecordingSink()
        renderer = ItemRenderer()
        renderer.setContentHandler(sink)

        xml.sax.parseString(self.XML.encode("utf-8"), renderer)

        assert renderer.captured("title") == "Feed"
        assert "/root/sub/b.html" in sink.text()
        assert renderer.traversal.paths.depth() == (0, 0)

    def test_output_through_xml_generator(self):
        out = StringIO()
        renderer = ItemRenderer()
        renderer.setContentHandler(XMLGenerator(out))

        renderer.startDocument()
        for event in ListingBuilder("root").file("a.txt").events():
            renderer.push(event)
        renderer.endDocument()

        assert "<link>/root/a.txt</link>" in out.getvalue()
        assert "<type>text</type>" in out.getvalue()

    def test_attributes_helper_is_sorted(self):
        attrs = DirectoryFilterBase.attributes(zeta="1", alpha=2)

        assert list(attrs.getNames()) == ["alpha", "zeta"]
        assert attrs.getValue("alpha") == "2"
