"""High-level API for DirStreamLib.

This module provides simple, functional interfaces over the traversal core
for the common cases: replaying a recorded listing into a SAX handler,
walking a listing with pruning applied, and pulling links or header fields
out of a listing.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .config import DIRECTORY, FILE, FilterConfig, PruneConfig
from .core.events import EventKind, NodeEvent
from .core.identity import NodeIdentity
from .core.registry import ExtensionRegistry
from .core.traversal import TraversalStateMachine


def replay(events: Iterable[NodeEvent], handler) -> None:
    """Push NodeEvents into a SAX content handler.

    The events are wrapped in startDocument/endDocument, so a filter with an
    XMLGenerator downstream produces a complete document.

    Args:
        events: Listing events in stream order
        handler: Any SAX ContentHandler, typically a DirectoryFilterBase

    Example:
        >>> links = LinkList()
        >>> links.setContentHandler(XMLGenerator(out))
        >>> replay(ListingBuilder("root").file("a.txt").events(), links)
    """
    handler.startDocument()
    for event in events:
        if event.kind is EventKind.START:
            handler.startElement(event.name, event.sax_attributes())
        elif event.kind is EventKind.END:
            handler.endElement(event.name)
        else:
            handler.characters(event.text or "")
    handler.endDocument()


def walk_events(
    events: Iterable[NodeEvent],
    pruning=None,
    prune: Optional[PruneConfig] = None,
) -> Iterator[Tuple[NodeEvent, bool, TraversalStateMachine]]:
    """Drive a state machine over a listing.

    Args:
        events: Listing events in stream order
        pruning: PruningPolicy to use
        prune: PruneConfig to build a policy from when pruning is not given

    Yields:
        (event, accepted, machine) for every event; accepted is the enter
        result for START events and whether the node produced output for
        END events. The machine reflects the state right after the event
        was applied (for END events, right before the stacks shrink).
    """
    if pruning is None:
        pruning = FilterConfig(prune=prune).build_pruning_policy()
    machine = TraversalStateMachine(pruning)

    for event in events:
        if event.kind is EventKind.END:
            machine.on_exit_head_check(event)
            accepted = machine.accepts_exit(event)
            yield event, accepted, machine
            machine.on_exit_node(event)
        else:
            accepted = machine.feed(event)
            yield event, accepted, machine


def collect_links(
    events: Iterable[NodeEvent],
    root_prefix: str = "",
    prune: Optional[PruneConfig] = None,
    link_callback: Optional[Callable[[str], str]] = None,
    include_directories: bool = True,
) -> List[Tuple[str, str]]:
    """Collect (node id, link) for every file and directory that is not pruned.

    Args:
        events: Listing events in stream order
        root_prefix: Prepended to every location and link
        prune: Optional prune rules
        link_callback: Optional str -> str rewrite of each link
        include_directories: Also report directory nodes

    Returns:
        List of (identifier, link) tuples in stream order

    Example:
        >>> events = ListingBuilder("root").file("a.txt").events()
        >>> collect_links(events, root_prefix="file://")
        [('ID...', 'file:///root'), ('ID...', 'file:///root/a.txt')]
    """
    registry = ExtensionRegistry(callback_events=("link",))
    if link_callback is not None:
        registry.register_callbacks({"link": link_callback})

    links = []
    identity = None
    for event, accepted, machine in walk_events(events, prune=prune):
        if identity is None:
            identity = NodeIdentity(machine.paths, registry, root_prefix)
        if event.kind is not EventKind.START or not accepted:
            continue
        if event.name == FILE or (include_directories and event.name == DIRECTORY):
            links.append((identity.identify(), identity.make_link(event)))
    return links


def header_fields(events: Iterable[NodeEvent]) -> Dict[str, str]:
    """Return the text captured from the listing's <head> block.

    Args:
        events: Listing events in stream order

    Returns:
        Tag name to the first text seen for it inside <head>
    """
    machine = TraversalStateMachine()
    for event in events:
        machine.feed(event)
    return machine.captured_fields
