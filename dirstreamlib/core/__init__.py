"""Core abstractions for DirStreamLib.

This package contains the event model, the path stacks, node identity, the
extension registry and the traversal state machine.
"""

from .events import Attribute, EventKind, NodeEvent, encode_attributes
from .path_stack import PathStack, PathStackUnderflowError
from .state import TraversalState
from .registry import (
    ContentSink,
    UriHandler,
    ExtensionRegistry,
    InvalidCallbackError,
    HandlerRegistrationWarning,
)
from .identity import NodeIdentity
from .traversal import TraversalStateMachine

__all__ = [
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
]
