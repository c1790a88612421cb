"""Traversal state machine for DirStreamLib.

The state machine consumes enter/exit/character events one at a time and
keeps the path stacks, depth and header capture in sync. Renderers ask it
whether a node should produce output:

    if machine.on_enter_node(event):
        emit_item(event)

A False answer is a normal refusal (not started yet, or pruned), never an
error.
"""

import logging
from typing import Dict, Optional

from ..config import HEAD, ROOT_NODE
from .events import EventKind, NodeEvent
from .path_stack import PathStack
from .state import TraversalState


logger = logging.getLogger(__name__)


class TraversalStateMachine:
    """Tracks where a listing stream currently is.

    The machine is in the "not started" state until the first ``directory``
    node is entered; that node is the root, it is never pruned. Afterwards
    every node is checked against the pruning policy before the path stacks
    are grown, so pruned branches never touch them.

    Attributes:
        state: TraversalState for this document
        paths: PathStack holding location and cwd segments
        pruning: PruningPolicy consulted for every node once started
    """

    def __init__(self, pruning=None):
        """Initialize the state machine.

        Args:
            pruning: PruningPolicy to consult (default: include everything)
        """
        if pruning is None:
            from ..pruning_policies import NullPruningPolicy
            pruning = NullPruningPolicy()

        self.state = TraversalState()
        self.paths = PathStack()
        self.pruning = pruning

    # Accessors

    @property
    def started(self) -> bool:
        return self.state.started

    @property
    def start_depth(self) -> Optional[int]:
        return self.state.start_depth

    @property
    def depth(self) -> int:
        return self.state.depth

    @property
    def in_header(self) -> bool:
        return self.state.in_header

    @property
    def captured_fields(self) -> Dict[str, str]:
        return dict(self.state.captured_fields)

    def captured(self, name: str) -> Optional[str]:
        """Return the header text captured for a tag, if any."""
        return self.state.captured_fields.get(name)

    @property
    def cwd(self) -> str:
        return self.paths.cwd

    @property
    def location(self) -> str:
        return self.paths.location

    def accepts_exit(self, event: NodeEvent) -> bool:
        """Check if the node being exited produced output on enter."""
        return self.started and not self.pruning.is_excluded(event)

    def is_active(self) -> bool:
        """Check if the current position is started and not pruned."""
        return self.started and not self.pruning.is_excluded(None)

    # Event handling

    def on_enter_node(self, event: NodeEvent) -> bool:
        """Track a node enter.

        Returns:
            True if the node should produce output, False if the traversal
            has not started yet or the node is pruned
        """
        self.state.depth += 1
        self.pruning.enter_level(event)
        self.state.last_node_name = event.name

        if event.name == HEAD:
            self.state.in_header = True

        if not self.started:
            if event.name != ROOT_NODE:
                return False
            self.state.start_depth = self.state.depth
            self.paths.grow(event)
            logger.debug("Traversal started at <%s name=%r>, depth %d",
                         event.name, event.node_name, self.state.depth)
            return True

        self.pruning.record_comparison(event)
        if self.pruning.is_excluded(event):
            return False

        self.paths.grow(event)
        return True

    def on_exit_head_check(self, event: NodeEvent) -> bool:
        """Close the header capture on </head>.

        Runs before on_exit_node, whether or not the node was pruned.
        """
        if event.name == HEAD:
            self.state.in_header = False
        return True

    def on_exit_node(self, event: NodeEvent) -> bool:
        """Track a node exit, shrinking the stacks for nodes that grew them."""
        if self.accepts_exit(event):
            self.paths.shrink(event)

        self.pruning.exit_level(event)
        self.state.depth -= 1
        return True

    def on_characters(self, text: str) -> bool:
        """Capture header text, keeping the first value seen per tag."""
        if self.state.in_header and self.state.last_node_name is not None:
            self.state.captured_fields.setdefault(self.state.last_node_name, text)
        return True

    def feed(self, event: NodeEvent) -> bool:
        """Dispatch a NodeEvent to the matching handler.

        Returns:
            The enter result for START events, True otherwise
        """
        if event.kind is EventKind.START:
            return self.on_enter_node(event)
        if event.kind is EventKind.END:
            self.on_exit_head_check(event)
            return self.on_exit_node(event)
        return self.on_characters(event.text or "")
