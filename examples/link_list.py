#!/usr/bin/env python3
"""Demo renderer built on DirStreamLib.

Walks a directory on disk, turns it into a listing event stream and renders
an XHTML-ish link list through XMLGenerator. Hidden entries are pruned, the
title of each entry goes through an optional handler or callback, and every
link is rewritten by a "link" callback.

Usage:
    python examples/link_list.py [ROOT] [--base-url URL]
"""

import argparse
import logging
import sys
from pathlib import Path
from xml.sax.saxutils import XMLFilterBase, XMLGenerator
from xml.sax.xmlreader import AttributesImpl

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dirstreamlib import DirectoryFilterBase, FilterConfig, PruneConfig, replay
from dirstreamlib.testing import ListingBuilder


class LinkList(DirectoryFilterBase):
    """Renders <ul><li><a href=...>title</a></li>...</ul>."""

    HANDLER_EVENTS = ("title",)
    CALLBACK_EVENTS = ("title", "link")

    def start_node(self, event):
        if event.name == "directory" and self.traversal.depth == self.start_level():
            self.getContentHandler().startElement("ul", self.attributes())
            return
        if event.name != "file":
            return

        sink = self.getContentHandler()
        sink.startElement("li", self.attributes(id=self.generate_id()))
        media_type = self.mtype(event.node_name)
        attrs = {"href": self.make_link(event)}
        if media_type:
            attrs["type"] = media_type
        sink.startElement("a", self.attributes(**attrs))

        title = self.dispatch("title", self.location(), event.node_name)
        if title is not None:
            sink.characters(title)

        sink.endElement("a")
        sink.endElement("li")

    def end_node(self, event):
        if event.name == "directory" and self.traversal.depth == self.start_level():
            self.getContentHandler().endElement("ul")


class EmphasisTitle(XMLFilterBase):
    """Title handler writing the file name inside <em>."""

    def parse_uri(self, path, title):
        self.startElement("em", AttributesImpl({"title": path}))
        self.characters(title)
        self.endElement("em")


def listing_from_path(root: Path) -> ListingBuilder:
    """Build a listing for root, directories first."""
    builder = ListingBuilder(root.name or str(root), head={"path": str(root.resolve())})

    def add(directory: Path):
        entries = sorted(directory.iterdir(), key=lambda p: (not p.is_dir(), p.name))
        for entry in entries:
            if entry.is_dir():
                builder.directory(entry.name)
                add(entry)
                builder.up()
            else:
                builder.file(entry.name, size=entry.stat().st_size)

    add(root)
    return builder


def render(root: Path, base_url: str, emphasis: bool = False):
    config = FilterConfig(prune=PruneConfig(exclude_patterns={".*", "__pycache__"}))
    links = LinkList(config=config)
    links.setContentHandler(XMLGenerator(sys.stdout, encoding="utf-8"))

    root_path = "/" + (root.name or str(root))
    links.set_callbacks({
        "title": str.title,
        "link": lambda uri: base_url.rstrip("/") + uri[len(root_path):],
    })
    if emphasis:
        handler = EmphasisTitle()
        handler.setContentHandler(links.getContentHandler())
        links.set_handlers({"title": handler})

    replay(listing_from_path(root).events(), links)
    print()

    print(f"\nListing of {links.captured('path')}", file=sys.stderr)
    print(f"Media types: {links.media_types.get_stats()}", file=sys.stderr)


def main():
    parser = argparse.ArgumentParser(description="Render a directory as a link list")
    parser.add_argument("root", nargs="?", default=".", help="Directory to list")
    parser.add_argument("--base-url", default="https://example.org/files",
                        help="URL the root directory is served under")
    parser.add_argument("--emphasis", action="store_true",
                        help="Use the <em> title handler instead of the title callback")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    root = Path(args.root)
    if not root.is_dir():
        print(f"Error: {root} is not a directory", file=sys.stderr)
        return 1

    render(root, args.base_url, emphasis=args.emphasis)
    return 0


if __name__ == "__main__":
    sys.exit(main())
