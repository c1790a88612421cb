"""Traversal state for DirStreamLib."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class TraversalState:
    """Mutable state of one document's traversal.

    Owned by a single TraversalStateMachine, created once per document and
    never reset.
    """

    depth: int = 0                                # Enter/exit nesting depth
    start_depth: Optional[int] = None             # Depth of the root directory
    last_node_name: Optional[str] = None          # Keys captured header text
    in_header: bool = False                       # Between <head> and </head>
    captured_fields: Dict[str, str] = field(default_factory=dict)

    @property
    def started(self) -> bool:
        return self.start_depth is not None
