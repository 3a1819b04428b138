"""User domain service."""

import re
from collections import defaultdict
from typing import Optional

import logfire

from scribe.domain.error import NotFoundError, UserValidationError
from scribe.domain.model import User
from scribe.domain.repository import OrganizationRepository, UserRepository
from scribe.domain.value import AuthProvider, FollowableType, ProviderProfile, UserId
from scribe.domain.value.types import (
    SUMMARY_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
)

from .base import Service

PROFILE_URL_PATTERN = re.compile(r"^https?://")
PROFILE_URL_FIELDS = ("website_url", "employer_url")


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            organization_repository: Organization repository (slug namespace)
        """
        self.user_repository = user_repository
        self.organization_repository = organization_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), username=user.username)
            return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email", email=email):
            user = await self.user_repository.find_by_email(email)
            if user:
                logfire.info("User found", email=email, user_id=str(user.id))
            else:
                logfire.info("No user with email", email=email)
            return user

    async def get_user_by_username(self, username: str) -> User | None:
        """Get user by username, ignoring case.

        Args:
            username: Username

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_username", username=username):
            return await self.user_repository.find_by_username(username)

    async def validate(self, user: User, previous: Optional[User] = None) -> None:
        """Validate a user before it is saved.

        The summary length is only enforced when the summary differs from the
        previously persisted one, so an over-long legacy summary stays valid
        until it is edited.

        Args:
            user: User about to be saved
            previous: Persisted version of the user, None for new users

        Raises:
            UserValidationError: With the failing fields and their messages
        """
        errors: dict[str, list[str]] = defaultdict(list)

        username = user.username
        if not username:
            errors["username"].append("can't be blank")
        else:
            if len(username) < USERNAME_MIN_LENGTH:
                errors["username"].append(
                    f"is too short (minimum is {USERNAME_MIN_LENGTH} characters)"
                )
            if len(username) > USERNAME_MAX_LENGTH:
                errors["username"].append(
                    f"is too long (maximum is {USERNAME_MAX_LENGTH} characters)"
                )
            if not USERNAME_PATTERN.match(username):
                errors["username"].append("is invalid")
            if await self.user_repository.username_taken(username, user.id):
                errors["username"].append("has already been taken")
            if await self.organization_repository.slug_exists(username):
                errors["username"].append("is taken by an organization")

        for field in PROFILE_URL_FIELDS:
            value = getattr(user, field)
            if value and not PROFILE_URL_PATTERN.match(value):
                errors[field].append("must start with http:// or https://")

        summary_changed = previous is None or previous.summary != user.summary
        if summary_changed and user.summary and len(user.summary) > SUMMARY_MAX_LENGTH:
            errors["summary"].append(
                f"is too long (maximum is {SUMMARY_MAX_LENGTH} characters)"
            )

        for provider in AuthProvider:
            field = f"{provider.value}_username"
            value = getattr(user, field)
            if not value:
                continue
            holder = await self.user_repository.find_by_provider_username(
                provider, value
            )
            if holder and holder.id != user.id:
                errors[field].append("has already been taken")

        if errors:
            logfire.info(
                "User validation failed",
                user_id=str(user.id),
                fields=sorted(errors),
            )
            raise UserValidationError(dict(errors))

    async def apply_provider_profile(
        self, user: User, provider: AuthProvider, profile: ProviderProfile
    ) -> User:
        """Copy a provider's normalized profile onto the user's cached fields.

        The provider username is skipped when another user already holds it.

        Args:
            user: User to update
            provider: Provider the profile came from
            profile: Normalized provider profile

        Returns:
            Updated copy of the user (not saved)
        """
        updates: dict = {}

        if profile.username:
            holder = await self.user_repository.find_by_provider_username(
                provider, profile.username
            )
            if holder is None or holder.id == user.id:
                updates[f"{provider.value}_username"] = profile.username
            else:
                logfire.warn(
                    "Provider username held by another user",
                    provider=provider.value,
                    provider_username=profile.username,
                    user_id=str(user.id),
                    holder_id=str(holder.id),
                )

        if provider == AuthProvider.TWITTER:
            updates["twitter_followers_count"] = profile.followers_count
            updates["twitter_following_count"] = profile.following_count
            updates["twitter_created_at"] = profile.created_at
        elif provider == AuthProvider.GITHUB:
            updates["github_created_at"] = profile.created_at

        if profile.image and not user.profile_image_url:
            updates["profile_image_url"] = profile.image

        return user.model_copy(update=updates)

    async def increment_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically increment one of the user's follow counters.

        Args:
            user_id: User ID
            followable_type: Counter to increment
        """
        with logfire.span(
            "user_service.increment_follow_count",
            user_id=str(user_id),
            followable_type=followable_type.value,
        ):
            await self.user_repository.increment_follow_count(user_id, followable_type)

    async def decrement_follow_count(
        self, user_id: UserId, followable_type: FollowableType
    ) -> None:
        """Atomically decrement one of the user's follow counters.

        Args:
            user_id: User ID
            followable_type: Counter to decrement
        """
        with logfire.span(
            "user_service.decrement_follow_count",
            user_id=str(user_id),
            followable_type=followable_type.value,
        ):
            await self.user_repository.decrement_follow_count(user_id, followable_type)

    async def save(self, user: User) -> User:
        """Save user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span(
            "user_service.save", user_id=str(user.id), username=user.username
        ):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), username=saved.username)
            return saved

    async def delete(self, user_id: UserId) -> None:
        """Delete a user.

        Args:
            user_id: User ID
        """
        with logfire.span("user_service.delete", user_id=str(user_id)):
            await self.user_repository.delete(user_id)
            logfire.info("User deleted", user_id=str(user_id))
