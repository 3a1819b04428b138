"""PostgreSQL implementation of Organization repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.model import Organization
from scribe.domain.repository import OrganizationRepository
from scribe.domain.value import OrganizationId
from scribe.persistence.mappers import organization_to_dict, row_to_organization
from scribe.persistence.tables import organizations_table


class PostgresOrganizationRepository(OrganizationRepository):
    """PostgreSQL implementation of OrganizationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, organization_id: OrganizationId) -> Optional[Organization]:
        """Find organization by ID."""
        stmt = select(organizations_table).where(
            organizations_table.c.id == organization_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_organization(row._asdict()) if row else None

    async def find_by_slug(self, slug: str) -> Optional[Organization]:
        """Find organization by slug, ignoring case."""
        stmt = select(organizations_table).where(
            func.lower(organizations_table.c.slug) == slug.lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_organization(row._asdict()) if row else None

    async def slug_exists(self, slug: str) -> bool:
        """Check whether any organization uses the slug, ignoring case."""
        stmt = (
            select(organizations_table.c.id)
            .where(func.lower(organizations_table.c.slug) == slug.lower())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, organization: Organization) -> Organization:
        """Save or update an organization."""
        organization_dict = organization_to_dict(organization)

        existing = await self.find_by_id(organization.id)

        if existing:
            stmt = (
                update(organizations_table)
                .where(organizations_table.c.id == organization.id)
                .values(**organization_dict)
            )
        else:
            stmt = insert(organizations_table).values(**organization_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return organization
