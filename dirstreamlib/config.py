"""Configuration system for DirStreamLib.

This module defines the node vocabulary of a directory listing and how users
describe what to prune and where links should point.
"""

from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase
from typing import Optional, Callable, Set, Any


# Node names of a directory listing stream
DIRECTORY = "directory"
FILE = "file"
HEAD = "head"

# The first DIRECTORY entered starts the traversal
ROOT_NODE = DIRECTORY


class NodeType(Enum):
    """Structural node names the core reacts to."""
    DIRECTORY = DIRECTORY   # Grows both the location and the cwd
    FILE = FILE             # Grows the location only
    HEAD = HEAD             # Brackets the header capture

    @classmethod
    def is_path_node(cls, name: str) -> bool:
        """Check if a node name contributes a path segment."""
        return name in (DIRECTORY, FILE)


@dataclass
class PruneConfig:
    """Configuration for excluding subtrees from the output."""

    # Name-based rules (fnmatch globs on the node's ``name`` attribute)
    include_patterns: Optional[Set[str]] = None  # Files must match one of these
    exclude_patterns: Optional[Set[str]] = None  # Files or directories matching are pruned

    # Custom predicates, called with the NodeEvent
    include_filter: Optional[Callable[[Any], bool]] = None
    exclude_filter: Optional[Callable[[Any], bool]] = None

    # Apply exclude_patterns to directories as well as files
    exclude_directories: bool = True

    def should_exclude(self, event) -> bool:
        """Check if a node should be pruned based on the rules.

        Only ``file`` and ``directory`` nodes are judged; everything else
        (``mode``, ``size`` and friends) inherits its parent's fate.

        Args:
            event: NodeEvent for the node being entered

        Returns:
            True if the node and its subtree must be excluded
        """
        if not NodeType.is_path_node(event.name):
            return False

        name = event.node_name or ""

        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(event):
            return True

        if self.exclude_patterns and (event.name == FILE or self.exclude_directories):
            if any(fnmatchcase(name, pattern) for pattern in self.exclude_patterns):
                return True

        # Include rules only narrow down files, directories must stay
        # reachable so their files can be matched
        if event.name == DIRECTORY:
            return False

        if self.include_patterns is not None:
            if not any(fnmatchcase(name, pattern) for pattern in self.include_patterns):
                return True

        if self.include_filter:
            return not self.include_filter(event)

        return False


@dataclass
class FilterConfig:
    """Complete configuration for a directory filter."""

    # Prepended to every location and URI (e.g. "file://" or "/srv/www")
    root_prefix: str = ""

    prune: Optional[PruneConfig] = None

    # Report "text" rather than "text/plain"
    media_types_major_only: bool = True

    def build_pruning_policy(self):
        """Create the pruning policy described by this config.

        Returns:
            RulePruningPolicy when prune rules are set, otherwise a policy
            that includes every node
        """
        from .pruning_policies import NullPruningPolicy, RulePruningPolicy

        if self.prune is None:
            return NullPruningPolicy()
        return RulePruningPolicy(self.prune)
