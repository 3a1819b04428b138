"""In-memory implementation of Organization repository for testing."""

from typing import Optional

from scribe.domain.model.organization import Organization
from scribe.domain.repository.organization import OrganizationRepository
from scribe.domain.value import OrganizationId


class InMemoryOrganizationRepository(OrganizationRepository):
    """In-memory implementation of OrganizationRepository for testing."""

    def __init__(self) -> None:
        self._organizations: dict[OrganizationId, Organization] = {}

    async def find_by_id(self, organization_id: OrganizationId) -> Optional[Organization]:
        """Find organization by ID."""
        return self._organizations.get(organization_id)

    async def find_by_slug(self, slug: str) -> Optional[Organization]:
        """Find organization by slug, ignoring case."""
        for organization in self._organizations.values():
            if organization.slug.lower() == slug.lower():
                return organization
        return None

    async def slug_exists(self, slug: str) -> bool:
        """Check whether any organization uses the slug."""
        return await self.find_by_slug(slug) is not None

    async def save(self, organization: Organization) -> Organization:
        """Save or update an organization."""
        self._organizations[organization.id] = organization
        return organization
