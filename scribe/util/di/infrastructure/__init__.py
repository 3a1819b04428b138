"""Infrastructure providers."""

# Import bases
from .jobs import JobQueueProvider
from .newsletter import NewsletterProvider
from .persistence import PersistenceProvider
from .search import SearchProvider

# Import implementations (needed for __subclasses__())
from .newsletter import ProdNewsletterProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .search import ProdSearchProvider  # noqa: F401

__all__ = [
    "JobQueueProvider",
    "NewsletterProvider",
    "PersistenceProvider",
    "ProdNewsletterProvider",
    "ProdPersistenceProvider",
    "ProdSearchProvider",
    "SearchProvider",
]
