"""Mock persistence providers for testing."""

from dishka import Scope, provide

from scribe.adapter.jobs import JobScope
from scribe.domain.repository import (
    FollowRepository,
    IdentityRepository,
    OrganizationRepository,
    TagRepository,
    UserRepository,
)
from scribe.persistence.repository.inmemory import (
    InMemoryFollowRepository,
    InMemoryIdentityRepository,
    InMemoryOrganizationRepository,
    InMemoryTagRepository,
    InMemoryUserRepository,
)
from scribe.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(self) -> IdentityRepository:
        """Provide in-memory identity repository."""
        return InMemoryIdentityRepository()

    @provide(scope=Scope.REQUEST)
    def get_organization_repository(self) -> OrganizationRepository:
        """Provide in-memory organization repository."""
        return InMemoryOrganizationRepository()

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self) -> TagRepository:
        """Provide in-memory tag repository."""
        return InMemoryTagRepository()

    @provide(scope=Scope.REQUEST)
    def get_follow_repository(self) -> FollowRepository:
        """Provide in-memory follow repository."""
        return InMemoryFollowRepository()

    @provide(scope=Scope.REQUEST)
    def get_job_scope(self) -> JobScope:
        """Provide a pass-through job scope; in-memory writes are not transactional."""
        return JobScope()
