"""Identity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.model import Identity
from scribe.domain.repository import IdentityRepository
from scribe.domain.value import AuthProvider, IdentityId, UserId
from scribe.persistence.mappers import identity_to_dict, row_to_identity
from scribe.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, identity: Identity) -> Identity:
        """Save identity to database.

        Args:
            identity: Identity to save

        Returns:
            Saved Identity

        Raises:
            IntegrityError: If (provider, uid) or (user, provider) is taken
        """
        identity_dict = identity_to_dict(identity)

        # Check if identity exists
        existing = await self.find_by_id(identity.id)

        if existing:
            stmt = (
                identities_table.update()
                .where(identities_table.c.id == identity.id)
                .values(**identity_dict)
            )
        else:
            stmt = identities_table.insert().values(**identity_dict)

        # Savepoint keeps the request transaction usable after a unique violation
        async with self.session.begin_nested():
            await self.session.execute(stmt)

        return identity

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Get identity by ID.

        Args:
            identity_id: Identity ID to look up

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(identities_table.c.id == identity_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity(dict(row))

    async def find_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Optional[Identity]:
        """Get identity by provider and provider account id.

        Args:
            provider: Authentication provider
            uid: Account id on the provider

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(
            and_(
                identities_table.c.provider == provider.value,
                identities_table.c.uid == uid,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[Identity]:
        """Get the identity a user has for a provider.

        Args:
            user_id: User ID
            provider: Authentication provider

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(
            and_(
                identities_table.c.user_id == user_id,
                identities_table.c.provider == provider.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_identity(dict(row)) if row else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[Identity]:
        """Get all identities for a user, oldest first.

        Args:
            user_id: User ID

        Returns:
            List of identities (may be empty)
        """
        stmt = (
            select(identities_table)
            .where(identities_table.c.user_id == user_id)
            .order_by(identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_identity(dict(row)) for row in result.mappings().all()]
