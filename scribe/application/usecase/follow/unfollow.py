"""Unfollow use case."""

from uuid import UUID

from pydantic import BaseModel

from scribe.domain.service import FollowService
from scribe.domain.value import FollowableType, UserId


class UnfollowRequest(BaseModel):
    """Unfollow request."""

    followable_type: FollowableType
    followable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class UnfollowResponse(BaseModel):
    """Unfollow response."""

    success: bool


class UnfollowUseCase:
    """Use case for unfollowing a user, tag or organization."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize unfollow use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: UnfollowRequest) -> UnfollowResponse:
        """Execute unfollow flow.

        Raises:
            NotFoundError: If the user does not follow the target
        """
        await self.follow_service.unfollow(
            UserId(UUID(request.user_id)),
            request.followable_type,
            UUID(request.followable_id),
        )
        return UnfollowResponse(success=True)
