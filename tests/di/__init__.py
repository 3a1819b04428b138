"""Mock providers for testing."""

from .newsletter import MockNewsletterProvider
from .persistence import MockPersistenceProvider
from .search import MockSearchProvider
from .container import build_test_container

__all__ = [
    "MockNewsletterProvider",
    "MockPersistenceProvider",
    "MockSearchProvider",
    "build_test_container",
]
