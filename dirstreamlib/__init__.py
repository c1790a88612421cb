"""DirStreamLib - Directory Listing Event Filters.

DirStreamLib tracks where a stream of directory listing events currently is
(working directory, absolute location, node identifier, output URI) so that
renderers turning a listing into RSS, Atom or anything else only have to
decide what to write.

Typical use:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dirstreamlib import DirectoryFilterBase, FilterConfig

    class MyFeed(DirectoryFilterBase):
        def start_node(self, event):
            ...
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .config import (
    DIRECTORY,
    FILE,
    HEAD,
    NodeType,
    PruneConfig,
    FilterConfig,
)
from .core import (
    Attribute,
    EventKind,
    NodeEvent,
    encode_attributes,
    PathStack,
    PathStackUnderflowError,
    TraversalState,
    ContentSink,
    UriHandler,
    ExtensionRegistry,
    InvalidCallbackError,
    HandlerRegistrationWarning,
    NodeIdentity,
    TraversalStateMachine,
)
from .pruning_policies import (
    PruningPolicy,
    LevelPruningPolicy,
    NullPruningPolicy,
    RulePruningPolicy,
    PredicatePruningPolicy,
)
from .caching import MediaTypeCache, MediaTypeResolver, MimeTypesResolver
from .filters import DirectoryFilterBase
from .api import replay, walk_events, collect_links, header_fields

__all__ = [
    "__version__",
    # Config
    "DIRECTORY",
    "FILE",
    "HEAD",
    "NodeType",
    "PruneConfig",
    "FilterConfig",
    # Core
    "Attribute",
    "EventKind",
    "NodeEvent",
    "encode_attributes",
    "PathStack",
    "PathStackUnderflowError",
    "TraversalState",
    "ContentSink",
    "UriHandler",
    "ExtensionRegistry",
    "InvalidCallbackError",
    "HandlerRegistrationWarning",
    "NodeIdentity",
    "TraversalStateMachine",
    # Pruning
    "PruningPolicy",
    "LevelPruningPolicy",
    "NullPruningPolicy",
    "RulePruningPolicy",
    "PredicatePruningPolicy",
    # Caching
    "MediaTypeCache",
    "MediaTypeResolver",
    "MimeTypesResolver",
    # Filters
    "DirectoryFilterBase",
    # API
    "replay",
    "walk_events",
    "collect_links",
    "header_fields",
]
