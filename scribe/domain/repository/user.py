"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scribe.domain.model.user import User
from scribe.domain.value import AuthProvider, FollowableType, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, ignoring case.

        Args:
            username: The username to look up

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_username(
        self, provider: AuthProvider, username: str
    ) -> Optional[User]:
        """Find a user by their cached provider username.

        Args:
            provider: The provider whose username column to search
            username: The username on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def username_taken(
        self, username: str, exclude_user_id: Optional[UserId] = None
    ) -> bool:
        """Check whether a username is held by a user, ignoring case.

        Args:
            username: Username to check
            exclude_user_id: User to ignore (the one being validated)

        Returns:
            True if another user holds the username
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            IntegrityError: If the username is already held by another user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user and, through the foreign keys, their identities.

        Args:
            user_id: The user to delete
        """
        pass

    @abstractmethod
    async def increment_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically increment the user's follow counter for a type by 1.

        Args:
            user_id: The follower
            followable_type: Which counter to increment
        """
        pass

    @abstractmethod
    async def decrement_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically decrement the user's follow counter for a type (minimum 0).

        Args:
            user_id: The follower
            followable_type: Which counter to decrement
        """
        pass
