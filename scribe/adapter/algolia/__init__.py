"""Algolia search index adapter."""

from .client import AlgoliaSearchIndex, MockSearchIndex, build_user_document

__all__ = ["AlgoliaSearchIndex", "MockSearchIndex", "build_user_document"]
