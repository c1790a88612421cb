"""Test fixtures for DirStreamLib consumers.

These fixtures build listing event streams without touching a real
filesystem and record what a filter writes downstream, so renderers can be
tested in isolation.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from xml.sax.handler import ContentHandler

from ..config import DIRECTORY, FILE, HEAD
from ..core.events import NodeEvent


class _Entry:
    def __init__(self, kind: str, name: str, meta: Mapping[str, Any]):
        self.kind = kind
        self.name = name
        self.meta = dict(meta)
        self.children: List["_Entry"] = []


class ListingBuilder:
    """Builds the event stream of a directory listing.

    The stream has the shape produced by directory-to-XML walkers::

        <dirtree>
          <head><path>/home/me</path>...</head>
          <directory name="root">
            <file name="a.txt"><size>12</size></file>
          </directory>
        </dirtree>

    Example:
        events = (ListingBuilder("root", head={"title": "My files"})
                  .directory("sub")
                      .file("a.txt", size=12)
                  .up()
                  .file("b.txt")
                  .events())
    """

    def __init__(self, root: str = "root",
                 head: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]] = None,
                 wrapper: Optional[str] = "dirtree"):
        """Initialize the builder.

        Args:
            root: Name of the root directory
            head: Header tags and their text, as a mapping or (tag, text)
                  pairs (pairs allow a tag to repeat); None for no <head>
            wrapper: Name of the document element, None for none
        """
        self._root = _Entry(DIRECTORY, root, {})
        self._cursor = [self._root]
        if head is None:
            self._head = None
        elif isinstance(head, Mapping):
            self._head = list(head.items())
        else:
            self._head = list(head)
        self._wrapper = wrapper

    def directory(self, name: str, **meta: Any) -> "ListingBuilder":
        """Add a directory to the current one and descend into it."""
        entry = _Entry(DIRECTORY, name, meta)
        self._cursor[-1].children.append(entry)
        self._cursor.append(entry)
        return self

    def file(self, name: str, **meta: Any) -> "ListingBuilder":
        """Add a file to the current directory.

        Keyword arguments become child elements with text, e.g. size=12.
        """
        self._cursor[-1].children.append(_Entry(FILE, name, meta))
        return self

    def up(self) -> "ListingBuilder":
        """Return to the parent directory."""
        if len(self._cursor) == 1:
            raise ValueError("Already at the root directory")
        self._cursor.pop()
        return self

    def events(self) -> List[NodeEvent]:
        """Return the complete event stream."""
        events: List[NodeEvent] = []
        if self._wrapper:
            events.append(NodeEvent.start(self._wrapper))
        if self._head is not None:
            events.append(NodeEvent.start(HEAD))
            for tag, text in self._head:
                events.append(NodeEvent.start(tag))
                events.append(NodeEvent.characters(str(text)))
                events.append(NodeEvent.end(tag))
            events.append(NodeEvent.end(HEAD))
        self._emit_entry(self._root, events)
        if self._wrapper:
            events.append(NodeEvent.end(self._wrapper))
        return events

    def _emit_entry(self, entry: _Entry, events: List[NodeEvent]) -> None:
        events.append(NodeEvent.start(entry.kind, name=entry.name))
        for key, value in entry.meta.items():
            events.append(NodeEvent.start(key))
            events.append(NodeEvent.characters(str(value)))
            events.append(NodeEvent.end(key))
        for child in entry.children:
            self._emit_entry(child, events)
        events.append(NodeEvent.end(entry.kind))


class RecordingSink(ContentHandler):
    """Content handler that records every event it receives.

    Records are tuples: ("start", name, attrs dict), ("end", name) and
    ("text", content).
    """

    def __init__(self):
        super().__init__()
        self.records: List[Tuple] = []

    def startElement(self, name, attrs):
        self.records.append(("start", name, {key: attrs.getValue(key) for key in attrs.getNames()}))

    def endElement(self, name):
        self.records.append(("end", name))

    def characters(self, content):
        self.records.append(("text", content))

    def started(self, name: Optional[str] = None) -> List[Tuple[str, Dict[str, str]]]:
        """Return (name, attrs) of recorded element starts, optionally filtered by name."""
        return [(record[1], record[2]) for record in self.records
                if record[0] == "start" and (name is None or record[1] == name)]

    def text(self) -> str:
        """Return all recorded character data joined together."""
        return "".join(record[1] for record in self.records if record[0] == "text")
