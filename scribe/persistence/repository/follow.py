"""PostgreSQL implementation of Follow repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.model import Follow
from scribe.domain.repository import FollowRepository
from scribe.domain.value import FollowableType, FollowId, UserId
from scribe.persistence.mappers import follow_to_dict, row_to_follow
from scribe.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find(
        self,
        follower_id: UserId,
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> Optional[Follow]:
        """Find a specific follow."""
        stmt = select(follows_table).where(
            and_(
                follows_table.c.follower_id == follower_id,
                follows_table.c.followable_type == followable_type.value,
                follows_table.c.followable_id == followable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_follow(row._asdict()) if row else None

    async def find_all_by_follower(self, follower_id: UserId) -> list[Follow]:
        """Get every follow held by a user, oldest first."""
        stmt = (
            select(follows_table)
            .where(follows_table.c.follower_id == follower_id)
            .order_by(follows_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(row._asdict()) for row in result.fetchall()]

    async def save(self, follow: Follow) -> Follow:
        """Create a follow.

        The insert runs in a savepoint so a duplicate leaves the transaction
        usable.

        Raises:
            IntegrityError: If the user already follows the target
        """
        async with self.session.begin_nested():
            await self.session.execute(
                follows_table.insert().values(**follow_to_dict(follow))
            )
        return follow

    async def delete(self, follow_id: FollowId) -> None:
        """Delete a follow."""
        stmt = delete(follows_table).where(follows_table.c.id == follow_id)
        await self.session.execute(stmt)
        await self.session.flush()
