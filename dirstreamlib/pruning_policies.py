"""
Pruning policies for DirStreamLib.

This module provides the collaborator the traversal state machine asks
"is the current node excluded?". Policies track the nesting level
themselves so an exclusion decided at one node is inherited by every
descendant until the pruned node is exited.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .config import PruneConfig
from .core.events import NodeEvent


logger = logging.getLogger(__name__)


class PruningPolicy(ABC):
    """
    Base class for pruning policies.

    The state machine calls, for every node:

    - ``enter_level`` on enter, always
    - ``record_comparison`` then ``is_excluded`` on enter, once started
    - ``is_excluded`` then ``exit_level`` on exit
    """

    @abstractmethod
    def enter_level(self, event: NodeEvent) -> None:
        """Note that a node has been entered."""
        pass

    @abstractmethod
    def exit_level(self, event: NodeEvent) -> None:
        """Note that a node has been exited."""
        pass

    @abstractmethod
    def current_level(self) -> int:
        """Return the current nesting level."""
        pass

    @abstractmethod
    def skip_level(self) -> Optional[int]:
        """Return the level the excluded subtree started at, or None."""
        pass

    @abstractmethod
    def record_comparison(self, event: NodeEvent) -> None:
        """Compare the node just entered against the policy's rules."""
        pass

    @abstractmethod
    def is_excluded(self, event: Optional[NodeEvent] = None) -> bool:
        """
        Check whether the current position is inside an excluded subtree.

        Args:
            event: The node being entered or exited, or None when asked
                   about character data at the current position
        """
        pass


class LevelPruningPolicy(PruningPolicy):
    """
    Policy that keeps level bookkeeping and inherits exclusions downwards.

    Subclasses only decide whether a single node should be excluded via
    ``should_exclude``; once a node is excluded, nothing below it is compared
    again until its exit.
    """

    def __init__(self):
        self._level = 0
        self._skip_level: Optional[int] = None
        self.pruned_count = 0

    def enter_level(self, event: NodeEvent) -> None:
        self._level += 1

    def exit_level(self, event: NodeEvent) -> None:
        if self._skip_level is not None and self._level == self._skip_level:
            self._skip_level = None
        self._level -= 1

    def current_level(self) -> int:
        return self._level

    def skip_level(self) -> Optional[int]:
        return self._skip_level

    def record_comparison(self, event: NodeEvent) -> None:
        if self._skip_level is not None:
            return

        if self.should_exclude(event):
            self._skip_level = self._level
            self.pruned_count += 1
            logger.debug("Pruning <%s name=%r> at level %d",
                         event.name, event.node_name, self._level)

    def is_excluded(self, event: Optional[NodeEvent] = None) -> bool:
        return self._skip_level is not None

    @abstractmethod
    def should_exclude(self, event: NodeEvent) -> bool:
        """Return True to prune this node and its subtree."""
        pass


class NullPruningPolicy(LevelPruningPolicy):
    """Policy that never excludes anything."""

    def should_exclude(self, event: NodeEvent) -> bool:
        return False


class RulePruningPolicy(LevelPruningPolicy):
    """
    Policy driven by a PruneConfig.

    Example:
        policy = RulePruningPolicy(PruneConfig(exclude_patterns={".*", "CVS"}))
    """

    def __init__(self, config: PruneConfig):
        """
        Initialize the policy.

        Args:
            config: Include/exclude rules
        """
        super().__init__()
        self.config = config

    def should_exclude(self, event: NodeEvent) -> bool:
        return self.config.should_exclude(event)


class PredicatePruningPolicy(LevelPruningPolicy):
    """Policy that prunes every node for which ``predicate(event)`` is true."""

    def __init__(self, predicate):
        super().__init__()
        self.predicate = predicate

    def should_exclude(self, event: NodeEvent) -> bool:
        return bool(self.predicate(event))
