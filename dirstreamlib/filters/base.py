"""
SAX filter base for directory listing renderers.

Renderers that turn a directory listing into something else (RSS, Atom, a
link list) subclass DirectoryFilterBase and override the node hooks. The base
keeps the traversal state, so by the time a hook runs ``cwd()``,
``generate_id()`` and ``make_link()`` already describe the node in hand:

    class LinkList(DirectoryFilterBase):
        CALLBACK_EVENTS = ("link",)

        def start_node(self, event):
            if event.name == "file":
                link = self.make_link(event)
                self.emit("a", event.node_name, {"href": link})

    writer = XMLGenerator(out)
    links = LinkList(config=FilterConfig(root_prefix="file://"))
    links.setContentHandler(writer)
    links.set_callbacks({"link": to_web_url})
"""

from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from xml.sax.saxutils import XMLFilterBase
from xml.sax.xmlreader import AttributesImpl

from ..caching.media_types import MediaTypeCache, MimeTypesResolver
from ..config import FilterConfig
from ..core.events import EventKind, NodeEvent, encode_attributes
from ..core.identity import NodeIdentity
from ..core.registry import ExtensionRegistry, UriHandler
from ..core.traversal import TraversalStateMachine


class DirectoryFilterBase(XMLFilterBase):
    """
    Base class for SAX filters over directory listing events.

    Subclasses declare which events accept handlers and callbacks through
    HANDLER_EVENTS and CALLBACK_EVENTS, and override:

    - ``start_node(event)`` for nodes that are started and not pruned
    - ``end_node(event)`` for the matching exits
    - ``node_text(content)`` for character data outside pruned subtrees

    Attributes:
        config: FilterConfig in effect
        traversal: TraversalStateMachine for the current document
        registry: ExtensionRegistry of handlers and callbacks
        identity: NodeIdentity building ids and links
        media_types: MediaTypeCache for mtype()
    """

    HANDLER_EVENTS: Tuple[str, ...] = ()
    CALLBACK_EVENTS: Tuple[str, ...] = ()

    def __init__(self, parent=None, config: Optional[FilterConfig] = None,
                 pruning=None, resolver_factory: Optional[Callable[[], Any]] = None):
        """
        Initialize the filter.

        Args:
            parent: Optional upstream XMLReader
            config: FilterConfig (root prefix, prune rules)
            pruning: PruningPolicy overriding the one built from config
            resolver_factory: Builds the media-type resolver on first use
        """
        super().__init__(parent)
        self.config = config or FilterConfig()

        if pruning is None:
            pruning = self.config.build_pruning_policy()
        if resolver_factory is None:
            resolver_factory = partial(MimeTypesResolver,
                                       major_only=self.config.media_types_major_only)

        self.traversal = TraversalStateMachine(pruning)
        self.registry = ExtensionRegistry(self.handler_events(), self.callback_events())
        self.identity = NodeIdentity(self.traversal.paths, self.registry, self.config.root_prefix)
        self.media_types = MediaTypeCache(resolver_factory)

    # Class-level declarations

    @classmethod
    def handler_events(cls) -> Tuple[str, ...]:
        """Event names that accept handlers."""
        return tuple(cls.HANDLER_EVENTS)

    @classmethod
    def callback_events(cls) -> Tuple[str, ...]:
        """Event names that accept callbacks."""
        return tuple(cls.CALLBACK_EVENTS)

    @staticmethod
    def attributes(**attrs: Any) -> AttributesImpl:
        """Build SAX attributes for a downstream startElement call."""
        encoded = encode_attributes(attrs)
        return AttributesImpl({name: attr.value for name, attr in encoded.items()})

    # Extension registry

    def set_handlers(self, handlers: Mapping[str, Any]) -> List[str]:
        """Register handlers, see ExtensionRegistry.register_handlers."""
        return self.registry.register_handlers(handlers)

    def get_handler(self, event: str) -> Optional[UriHandler]:
        return self.registry.lookup_handler(event)

    def set_callbacks(self, callbacks: Mapping[str, Callable[[str], str]]) -> List[str]:
        """Register callbacks, see ExtensionRegistry.register_callbacks."""
        return self.registry.register_callbacks(callbacks)

    def get_callback(self, event: str) -> Optional[Callable[[str], str]]:
        return self.registry.lookup_callback(event)

    def dispatch(self, event: str, path: str, value: str) -> Optional[str]:
        """Apply the handler or callback for event; see ExtensionRegistry.dispatch."""
        return self.registry.dispatch(event, path, value)

    # Traversal accessors

    def start_level(self) -> Optional[int]:
        """Depth of the root directory, or None before it is entered."""
        return self.traversal.start_depth

    def cwd(self) -> str:
        """Current working directory, relative to the root prefix."""
        return self.traversal.cwd

    def location(self) -> str:
        """Absolute location of the current node, root prefix included."""
        return self.identity.location

    def captured(self, name: str) -> Optional[str]:
        """First text seen for a header tag."""
        return self.traversal.captured(name)

    def header_fields(self) -> Dict[str, str]:
        return self.traversal.captured_fields

    def generate_id(self) -> str:
        return self.identity.identify()

    def build_uri(self, event: NodeEvent) -> str:
        return self.identity.build_uri(event)

    def make_link(self, event: NodeEvent) -> str:
        return self.identity.make_link(event)

    def mtype(self, filename: str) -> Optional[str]:
        """Media type of filename, e.g. "application" for "report.pdf"."""
        return self.media_types.resolve(filename)

    # SAX ContentHandler methods

    def startElement(self, name, attrs):
        event = NodeEvent.from_sax(name, attrs)
        if self.traversal.on_enter_node(event):
            self.start_node(event)

    def endElement(self, name):
        event = NodeEvent.end(name)
        self.traversal.on_exit_head_check(event)
        if self.traversal.accepts_exit(event):
            self.end_node(event)
        self.traversal.on_exit_node(event)

    def characters(self, content):
        self.traversal.on_characters(content)
        if self.traversal.is_active():
            self.node_text(content)

    def push(self, event: NodeEvent) -> None:
        """Push a NodeEvent through the SAX methods."""
        if event.text is not None:
            self.characters(event.text)
        elif event.kind is EventKind.START:
            self.startElement(event.name, event.sax_attributes())
        else:
            self.endElement(event.name)

    # Hooks for subclasses

    def start_node(self, event: NodeEvent) -> None:
        pass

    def end_node(self, event: NodeEvent) -> None:
        pass

    def node_text(self, content: str) -> None:
        pass

    # Helpers for subclasses

    def emit(self, tag: str, text: Optional[str] = None,
             attrs: Optional[Mapping[str, Any]] = None) -> None:
        """Write <tag attrs>text</tag> to the downstream handler."""
        sink = self.getContentHandler()
        sink.startElement(tag, self.attributes(**(attrs or {})))
        if text:
            sink.characters(text)
        sink.endElement(tag)
