"""Testing utilities for DirStreamLib consumers."""

from .fixtures import ListingBuilder, RecordingSink

__all__ = ['ListingBuilder', 'RecordingSink']
