"""
Media-type caching for DirStreamLib.

Resolves file names to media types through an external resolver and
memoizes the answer per extension, including "no known type" answers, so
each extension is looked up at most once per document.
"""

import logging
import mimetypes
import operator
import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from cachetools import cachedmethod


logger = logging.getLogger(__name__)

# Everything after the last dot; the part before it may be empty (".bashrc")
_EXTENSION_RE = re.compile(r"^(.*)\.([^.]+)$", re.DOTALL)

_UNBUILT = object()


class MediaTypeResolver(ABC):
    """External lookup of a media type by file extension."""

    @abstractmethod
    def lookup(self, extension: str) -> Optional[str]:
        """
        Return the media type for an extension, or None if unknown.

        Args:
            extension: Lower-cased extension without the dot, e.g. "pdf"
        """
        pass


class MimeTypesResolver(MediaTypeResolver):
    """
    Resolver backed by the ``mimetypes`` database.

    By default only the top-level media type is reported ("application" for
    a PDF, "text" for a plain text file).
    """

    def __init__(self, major_only: bool = True, strict: bool = False):
        """
        Initialize the resolver.

        Args:
            major_only: Report "text" instead of "text/plain"
            strict: Only use IANA registered types
        """
        self.major_only = major_only
        self.strict = strict
        self._db = mimetypes.MimeTypes()

    def lookup(self, extension: str) -> Optional[str]:
        mime, _ = self._db.guess_type("file." + extension, strict=self.strict)
        if not mime:
            return None
        if self.major_only:
            return mime.split("/", 1)[0]
        return mime


def extension_of(filename: str) -> Optional[str]:
    """Return the lower-cased extension of filename, or None."""
    match = _EXTENSION_RE.match(filename)
    if match is None:
        return None
    return match.group(2).lower()


class MediaTypeCache:
    """
    Per-document memo of extension to media type.

    The resolver is built from ``resolver_factory`` on the first cache miss,
    exactly once. If building it fails, every lookup answers None from then
    on without trying again.

    Example:
        cache = MediaTypeCache()
        cache.resolve("report.pdf")   # resolver consulted
        cache.resolve("REPORT.PDF")   # served from cache
    """

    def __init__(self, resolver_factory: Optional[Callable[[], MediaTypeResolver]] = None):
        """
        Initialize the cache.

        Args:
            resolver_factory: Zero-argument callable returning a resolver
                              (default: MimeTypesResolver)
        """
        self._resolver_factory = resolver_factory or MimeTypesResolver
        self._resolver = _UNBUILT
        # Never evicted, grows with the extensions seen in one document
        self._types: Dict[str, Optional[str]] = {}

        # Statistics
        self.hits = 0
        self.misses = 0

    def resolve(self, filename: str) -> Optional[str]:
        """
        Return the media type of filename.

        Args:
            filename: File name, e.g. "report.pdf"

        Returns:
            Media type, or None when the file has no extension or the type
            is unknown
        """
        extension = extension_of(filename)
        if extension is None:
            return None

        if extension in self._types:
            self.hits += 1
        return self._lookup(extension)

    @cachedmethod(operator.attrgetter("_types"), key=lambda self, extension: extension)
    def _lookup(self, extension: str) -> Optional[str]:
        self.misses += 1
        resolver = self._get_resolver()
        if resolver is None:
            return None
        return resolver.lookup(extension)

    def _get_resolver(self) -> Optional[MediaTypeResolver]:
        if self._resolver is _UNBUILT:
            try:
                self._resolver = self._resolver_factory()
            except Exception as e:
                logger.warning("Media type resolver unavailable, types will not be resolved: %s", e)
                self._resolver = None
        return self._resolver

    def __contains__(self, extension: str) -> bool:
        return extension.lower() in self._types

    def __len__(self) -> int:
        return len(self._types)

    def get_stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        return {
            'cached_extensions': len(self._types),
            'hits': self.hits,
            'misses': self.misses,
        }
