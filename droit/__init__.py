"""
DROIT — couche de persistance et de synchronisation du contenu bilingue (fr/ar).

Usage :
    >>> from droit import MemoryKeyValueStore, build_context
    >>> ctx = build_context(MemoryKeyValueStore())
    >>> ctx.initializer.ensure_initialized()
    >>> [p.slug for p in ctx.repository.get_all_pages()]
"""
from .database import ContentContext, build_context, open_store
from .errors import (
    ApiError,
    ContentError,
    MalformedPayloadError,
    NotFoundError,
    StorageError,
    UnknownRouteError,
    ValidationError,
)
from .models import BilingualText, EditEntry, NewsItem, Page, Resource, Section, StoreMetadata, Template
from .store import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore

__version__ = "1.0.0"

__all__ = [
    "ContentContext", "build_context", "open_store",
    "ApiError", "ContentError", "MalformedPayloadError", "NotFoundError",
    "StorageError", "UnknownRouteError", "ValidationError",
    "BilingualText", "EditEntry", "NewsItem", "Page", "Resource", "Section",
    "StoreMetadata", "Template",
    "KeyValueStore", "MemoryKeyValueStore", "SqlKeyValueStore",
]
