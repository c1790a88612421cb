"""SAX filters for DirStreamLib."""

from .base import DirectoryFilterBase

__all__ = ['DirectoryFilterBase']
