"""In-memory follow repository for testing."""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from scribe.domain.model.follow import Follow
from scribe.domain.repository.follow import FollowRepository
from scribe.domain.value import FollowableType, FollowId, UserId


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._follows: list[Follow] = []

    async def find(
        self,
        follower_id: UserId,
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> Optional[Follow]:
        """Find a specific follow."""
        for follow in self._follows:
            if (
                follow.follower_id == follower_id
                and follow.followable_type == followable_type
                and follow.followable_id == followable_id
            ):
                return follow
        return None

    async def find_all_by_follower(self, follower_id: UserId) -> list[Follow]:
        """Get every follow held by a user, oldest first."""
        matches = [f for f in self._follows if f.follower_id == follower_id]
        matches.sort(key=lambda f: f.created_at)
        return matches

    async def save(self, follow: Follow) -> Follow:
        """Save a follow.

        Raises:
            IntegrityError: If the user already follows the target
        """
        existing = await self.find(
            follow.follower_id, follow.followable_type, follow.followable_id
        )
        if existing:
            raise IntegrityError("Duplicate follow", None, Exception())

        self._follows.append(follow)
        return follow

    async def delete(self, follow_id: FollowId) -> None:
        """Delete a follow by ID."""
        self._follows = [f for f in self._follows if f.id != follow_id]
