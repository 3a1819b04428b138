"""In-memory user repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from scribe.domain.model.user import User
from scribe.domain.repository.user import UserRepository
from scribe.domain.value import AuthProvider, FollowableType, UserId

FOLLOW_COUNT_FIELDS = {
    FollowableType.USER: "following_users_count",
    FollowableType.TAG: "following_tags_count",
    FollowableType.ORGANIZATION: "following_orgs_count",
}


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Mirrors the database unique indexes: usernames are unique ignoring case,
    cached provider usernames are unique per provider.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, ignoring case."""
        for user in self._users.values():
            if user.username.lower() == username.lower():
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_provider_username(
        self, provider: AuthProvider, username: str
    ) -> Optional[User]:
        """Find a user by their cached provider username."""
        field = f"{provider.value}_username"
        for user in self._users.values():
            if getattr(user, field) == username:
                return user
        return None

    async def username_taken(
        self, username: str, exclude_user_id: Optional[UserId] = None
    ) -> bool:
        """Check whether another user holds the username, ignoring case."""
        user = await self.find_by_username(username)
        return user is not None and user.id != exclude_user_id

    async def save(self, user: User) -> User:
        """Save or update a user.

        Updates keep the stored follow counters; only the counter methods
        change them.

        Raises:
            IntegrityError: If a unique field is held by another user
        """
        if await self.username_taken(user.username, user.id):
            raise IntegrityError("Duplicate username", None, Exception())

        for provider in AuthProvider:
            value = getattr(user, f"{provider.value}_username")
            if not value:
                continue
            holder = await self.find_by_provider_username(provider, value)
            if holder and holder.id != user.id:
                raise IntegrityError(
                    f"Duplicate {provider.value} username", None, Exception()
                )

        stored = self._users.get(user.id)
        if stored:
            user = user.model_copy(
                update={
                    field: getattr(stored, field)
                    for field in FOLLOW_COUNT_FIELDS.values()
                }
            )

        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user if present."""
        self._users.pop(user_id, None)

    async def increment_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically increment a follow counter by 1."""
        user = self._users.get(user_id)
        if user:
            field = FOLLOW_COUNT_FIELDS[followable_type]
            self._users[user_id] = user.model_copy(
                update={field: getattr(user, field) + 1}
            )

    async def decrement_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically decrement a follow counter by 1 (minimum 0)."""
        user = self._users.get(user_id)
        if user:
            field = FOLLOW_COUNT_FIELDS[followable_type]
            self._users[user_id] = user.model_copy(
                update={field: max(0, getattr(user, field) - 1)}
            )
