"""Repository interfaces for Scribe domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from scribe.domain.repository.follow import FollowRepository
from scribe.domain.repository.identity import IdentityRepository
from scribe.domain.repository.organization import OrganizationRepository
from scribe.domain.repository.tag import TagRepository
from scribe.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "IdentityRepository",
    "OrganizationRepository",
    "TagRepository",
    "FollowRepository",
]
