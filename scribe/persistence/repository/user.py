"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.model import User
from scribe.domain.repository import UserRepository
from scribe.domain.value import AuthProvider, FollowableType, UserId
from scribe.persistence.mappers import row_to_user, user_to_dict
from scribe.persistence.tables import users_table

FOLLOW_COUNT_COLUMNS = {
    FollowableType.USER: "following_users_count",
    FollowableType.TAG: "following_tags_count",
    FollowableType.ORGANIZATION: "following_orgs_count",
}


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, ignoring case.

        Args:
            username: Username to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(
            func.lower(users_table.c.username) == username.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_provider_username(
        self, provider: AuthProvider, username: str
    ) -> Optional[User]:
        """Find a user by their cached provider username.

        Args:
            provider: Provider whose username column to search
            username: Username on that provider

        Returns:
            User if found, None otherwise
        """
        column = users_table.c[f"{provider.value}_username"]
        stmt = select(users_table).where(column == username)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def username_taken(
        self, username: str, exclude_user_id: Optional[UserId] = None
    ) -> bool:
        """Check whether a username is held by a user, ignoring case.

        Args:
            username: Username to check
            exclude_user_id: User to ignore

        Returns:
            True if another user holds the username
        """
        stmt = select(users_table.c.id).where(
            func.lower(users_table.c.username) == username.lower()
        )
        if exclude_user_id is not None:
            stmt = stmt.where(users_table.c.id != exclude_user_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Writes run inside a savepoint so a unique violation leaves the
        surrounding transaction usable for a retry. Updates leave the follow
        counters alone; only the atomic counter methods change them.

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            IntegrityError: If a unique column is already held by another user
        """
        # Check if user exists
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            for column in FOLLOW_COUNT_COLUMNS.values():
                user_dict.pop(column)
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        async with self.session.begin_nested():
            await self.session.execute(stmt)

        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user; identities and follows cascade.

        Args:
            user_id: User ID to delete
        """
        stmt = users_table.delete().where(users_table.c.id == user_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically increment a follow counter by 1.

        Args:
            user_id: User ID to update
            followable_type: Counter to increment
        """
        column = users_table.c[FOLLOW_COUNT_COLUMNS[followable_type]]
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values({column: column + 1})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically decrement a follow counter by 1 (minimum 0).

        Args:
            user_id: User ID to update
            followable_type: Counter to decrement
        """
        column = users_table.c[FOLLOW_COUNT_COLUMNS[followable_type]]
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values({column: case((column > 0, column - 1), else_=0)})
        )
        await self.session.execute(stmt)
        await self.session.flush()
