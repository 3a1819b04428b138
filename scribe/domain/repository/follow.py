"""Follow repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from scribe.domain.model.follow import Follow
from scribe.domain.value import FollowableType, FollowId, UserId


class FollowRepository(ABC):
    """Repository for Follow entity."""

    @abstractmethod
    async def find(
        self,
        follower_id: UserId,
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> Optional[Follow]:
        """Find a specific follow.

        Args:
            follower_id: The following user
            followable_type: Type of the followed entity
            followable_id: ID of the followed entity

        Returns:
            The follow if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_follower(self, follower_id: UserId) -> list[Follow]:
        """Get every follow held by a user, oldest first.

        Args:
            follower_id: The following user

        Returns:
            List of follows (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, follow: Follow) -> Follow:
        """Create a follow.

        Args:
            follow: Follow to save

        Returns:
            The saved follow

        Raises:
            IntegrityError: If the user already follows the target
        """
        pass

    @abstractmethod
    async def delete(self, follow_id: FollowId) -> None:
        """Delete a follow.

        Args:
            follow_id: The follow to delete
        """
        pass
