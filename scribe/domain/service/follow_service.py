"""Follow domain service."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from scribe.domain.error import BusinessRuleViolationError, NotFoundError
from scribe.domain.model.follow import Follow
from scribe.domain.repository import (
    FollowRepository,
    OrganizationRepository,
    TagRepository,
    UserRepository,
)
from scribe.domain.value import (
    FollowableType,
    FollowId,
    OrganizationId,
    TagId,
    UserId,
)

from .base import Service
from .user_service import UserService


class FollowService(Service):
    """Domain service for following users, tags and organizations.

    Keeps the follower's cached counters (``following_users_count`` and
    friends) in step with the follow records.
    """

    def __init__(
        self,
        follow_repository: FollowRepository,
        user_service: UserService,
        user_repository: UserRepository,
        tag_repository: TagRepository,
        organization_repository: OrganizationRepository,
    ) -> None:
        """Initialize follow service.

        Args:
            follow_repository: Follow repository
            user_service: User domain service (counters)
            user_repository: User repository (followed users lookup)
            tag_repository: Tag repository (followed tags lookup)
            organization_repository: Organization repository
        """
        self.follow_repository = follow_repository
        self.user_service = user_service
        self.user_repository = user_repository
        self.tag_repository = tag_repository
        self.organization_repository = organization_repository

    async def _ensure_followable_exists(
        self, followable_type: FollowableType, followable_id: UUID
    ) -> None:
        if followable_type == FollowableType.USER:
            found = await self.user_repository.find_by_id(UserId(followable_id))
        elif followable_type == FollowableType.TAG:
            found = await self.tag_repository.find_by_id(TagId(followable_id))
        else:
            found = await self.organization_repository.find_by_id(
                OrganizationId(followable_id)
            )
        if not found:
            logfire.warn(
                "Follow target not found",
                followable_type=followable_type.value,
                followable_id=str(followable_id),
            )
            raise NotFoundError(followable_type.value.capitalize(), str(followable_id))

    async def follow(
        self,
        follower_id: UserId,
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> Follow:
        """Follow a user, tag or organization.

        Args:
            follower_id: The following user
            followable_type: Type of the target
            followable_id: ID of the target

        Returns:
            Created follow

        Raises:
            NotFoundError: If the target does not exist
            BusinessRuleViolationError: If following oneself or already following
        """
        with logfire.span(
            "follow_service.follow",
            follower_id=str(follower_id),
            followable_type=followable_type.value,
            followable_id=str(followable_id),
        ):
            if followable_type == FollowableType.USER and followable_id == follower_id:
                raise BusinessRuleViolationError("Users cannot follow themselves")

            await self._ensure_followable_exists(followable_type, followable_id)

            follow = Follow(
                id=FollowId(uuid4()),
                follower_id=follower_id,
                followable_type=followable_type,
                followable_id=followable_id,
                created_at=datetime.now(timezone.utc),
            )

            try:
                saved = await self.follow_repository.save(follow)
            except IntegrityError:
                logfire.warn(
                    "Duplicate follow attempt",
                    follower_id=str(follower_id),
                    followable_id=str(followable_id),
                )
                raise BusinessRuleViolationError(
                    f"Already following this {followable_type.value}"
                )

            await self.user_service.increment_follow_count(follower_id, followable_type)
            logfire.info("Follow created", follow_id=str(saved.id))
            return saved

    async def unfollow(
        self,
        follower_id: UserId,
        followable_type: FollowableType,
        followable_id: UUID,
    ) -> None:
        """Stop following a user, tag or organization.

        Args:
            follower_id: The following user
            followable_type: Type of the target
            followable_id: ID of the target

        Raises:
            NotFoundError: If the user does not follow the target
        """
        with logfire.span(
            "follow_service.unfollow",
            follower_id=str(follower_id),
            followable_type=followable_type.value,
            followable_id=str(followable_id),
        ):
            follow = await self.follow_repository.find(
                follower_id, followable_type, followable_id
            )
            if not follow:
                raise NotFoundError("Follow", str(followable_id))

            await self.follow_repository.delete(follow.id)
            await self.user_service.decrement_follow_count(follower_id, followable_type)
            logfire.info("Follow removed", follow_id=str(follow.id))

    async def list_follows(self, follower_id: UserId) -> list[Follow]:
        """Get every follow held by a user.

        Args:
            follower_id: The following user

        Returns:
            List of follows, oldest first
        """
        return await self.follow_repository.find_all_by_follower(follower_id)
