"""Node identity and URI building for DirStreamLib."""

import hashlib
from typing import Optional

from ..config import FILE
from .events import NodeEvent
from .path_stack import PathStack
from .registry import ExtensionRegistry


# Output formats such as XML IDs forbid a leading digit
ID_PREFIX = "ID"

LINK_EVENT = "link"


class NodeIdentity:
    """Derives identifiers and URIs from the current path stacks.

    Attributes:
        paths: PathStack of the running traversal
        registry: Registry consulted for the "link" callback
        root_prefix: Prepended to locations and URIs
    """

    def __init__(self, paths: PathStack, registry: Optional[ExtensionRegistry] = None,
                 root_prefix: str = ""):
        self.paths = paths
        self.registry = registry
        self.root_prefix = root_prefix

    @property
    def location(self) -> str:
        """Absolute location of the current node."""
        return self.root_prefix + self.paths.location

    def identify(self) -> str:
        """Return a stable identifier for the current location.

        The same location always yields the same identifier, different
        locations yield different ones.
        """
        digest = hashlib.md5(self.location.encode("utf-8")).hexdigest()
        return ID_PREFIX + digest

    def build_uri(self, event: NodeEvent) -> str:
        """Return the absolute URI of the node described by event.

        Directories address themselves (the cwd already ends with their
        name), files address the file inside the cwd.
        """
        uri = self.root_prefix + self.paths.cwd
        if event.name == FILE:
            uri += "/" + (event.node_name or "")
        return uri

    def make_link(self, event: NodeEvent) -> str:
        """Return build_uri(event), filtered through the "link" callback if one is registered."""
        link = self.build_uri(event)
        if self.registry is not None:
            callback = self.registry.lookup_callback(LINK_EVENT)
            if callback is not None:
                link = callback(link)
        return link
