"""Path stack management for DirStreamLib.

Two stacks are kept side by side: the location stack (every entered file or
directory) used for identity hashing, and the cwd stack (directories only)
used for URI building. Strings are only assembled when read.
"""

from typing import List, Tuple

from ..config import DIRECTORY, NodeType
from .events import NodeEvent


class PathStackUnderflowError(RuntimeError):
    """Raised when shrinking for a node that was never grown."""
    pass


class PathStack:
    """Location and working-directory stacks for one traversal.

    Only the traversal state machine mutates a PathStack, and only for nodes
    that were not pruned.
    """

    def __init__(self):
        self._location: List[str] = []
        self._cwd: List[str] = []

    def grow(self, event: NodeEvent) -> None:
        """Push the node's name onto the stacks it belongs to."""
        if not NodeType.is_path_node(event.name):
            return

        segment = event.node_name or ""
        self._location.append(segment)
        if event.name == DIRECTORY:
            self._cwd.append(segment)

    def shrink(self, event: NodeEvent) -> None:
        """Pop the segment pushed by the matching grow().

        Raises:
            PathStackUnderflowError: If the stack has nothing to pop
        """
        if not NodeType.is_path_node(event.name):
            return

        if event.name == DIRECTORY and not self._cwd:
            raise PathStackUnderflowError(f"cwd stack is empty on exit of <{event.name}>")
        if not self._location:
            raise PathStackUnderflowError(f"location stack is empty on exit of <{event.name}>")

        self._location.pop()
        if event.name == DIRECTORY:
            self._cwd.pop()

    @staticmethod
    def _join(segments: List[str]) -> str:
        return "".join("/" + segment for segment in segments)

    @property
    def location(self) -> str:
        """Absolute location of the current node, e.g. ``/root/sub/a.txt``."""
        return self._join(self._location)

    @property
    def cwd(self) -> str:
        """Current working directory, e.g. ``/root/sub``."""
        return self._join(self._cwd)

    @property
    def location_stack(self) -> Tuple[str, ...]:
        return tuple(self._location)

    @property
    def cwd_stack(self) -> Tuple[str, ...]:
        return tuple(self._cwd)

    def depth(self) -> Tuple[int, int]:
        """Return (location depth, cwd depth)."""
        return len(self._location), len(self._cwd)

    def __repr__(self) -> str:
        return f"PathStack(location={self.location!r}, cwd={self.cwd!r})"
