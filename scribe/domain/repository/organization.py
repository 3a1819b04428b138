"""Organization repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scribe.domain.model.organization import Organization
from scribe.domain.value import OrganizationId


class OrganizationRepository(ABC):
    """Repository for Organization entity."""

    @abstractmethod
    async def find_by_id(self, organization_id: OrganizationId) -> Optional[Organization]:
        """Find an organization by ID.

        Args:
            organization_id: Organization identifier

        Returns:
            The organization if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Organization]:
        """Find an organization by slug, ignoring case.

        Args:
            slug: Organization slug

        Returns:
            The organization if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        """Check whether a slug is taken by an organization, ignoring case.

        Args:
            slug: Slug (or candidate username) to check

        Returns:
            True if an organization holds the slug
        """
        pass

    @abstractmethod
    async def save(self, organization: Organization) -> Organization:
        """Save an organization (create or update).

        Args:
            organization: Organization to save

        Returns:
            The saved organization
        """
        pass
