"""In-memory repository implementations for testing."""

from .follow import InMemoryFollowRepository
from .identity import InMemoryIdentityRepository
from .organization import InMemoryOrganizationRepository
from .tag import InMemoryTagRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryFollowRepository",
    "InMemoryIdentityRepository",
    "InMemoryOrganizationRepository",
    "InMemoryTagRepository",
    "InMemoryUserRepository",
]
