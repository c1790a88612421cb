"""Caching for DirStreamLib."""

from .media_types import MediaTypeCache, MediaTypeResolver, MimeTypesResolver, extension_of

__all__ = ['MediaTypeCache', 'MediaTypeResolver', 'MimeTypesResolver', 'extension_of']
