"""Follow use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from scribe.domain.service import FollowService
from scribe.domain.value import FollowableType, UserId


class FollowRequest(BaseModel):
    """Follow request."""

    followable_type: FollowableType
    followable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class FollowResponse(BaseModel):
    """Follow response."""

    follow_id: str
    followable_type: FollowableType
    followable_id: str
    created_at: datetime


class FollowUseCase:
    """Use case for following a user, tag or organization."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize follow use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Execute follow flow.

        Args:
            request: Follow request

        Returns:
            Follow response with follow details

        Raises:
            NotFoundError: If the target does not exist
            BusinessRuleViolationError: If already following or following oneself
        """
        follow = await self.follow_service.follow(
            UserId(UUID(request.user_id)),
            request.followable_type,
            UUID(request.followable_id),
        )

        return FollowResponse(
            follow_id=str(follow.id),
            followable_type=follow.followable_type,
            followable_id=str(follow.followable_id),
            created_at=follow.created_at,
        )
