"""PostgreSQL repository implementations."""

from scribe.persistence.repository.follow import PostgresFollowRepository
from scribe.persistence.repository.identity import PostgresIdentityRepository
from scribe.persistence.repository.organization import PostgresOrganizationRepository
from scribe.persistence.repository.tag import PostgresTagRepository
from scribe.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresIdentityRepository",
    "PostgresOrganizationRepository",
    "PostgresTagRepository",
    "PostgresFollowRepository",
]
