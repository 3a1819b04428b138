"""Update user profile use case."""

from datetime import datetime, timezone
from uuid import UUID

import logfire
from pydantic import BaseModel

from scribe.domain.service import IntegrationService, UserService
from scribe.domain.value import UserId


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request.

    Fields left as None are unchanged; an empty string clears an optional field.
    """

    user_id: str  # From authenticated user
    username: str | None = None
    name: str | None = None
    email: str | None = None
    summary: str | None = None
    website_url: str | None = None
    employer_url: str | None = None


class UpdateUserProfileResponse(BaseModel):
    """Update user profile response."""

    user_id: str
    username: str
    old_username: str | None
    old_old_username: str | None
    name: str | None
    email: str | None
    summary: str | None
    website_url: str | None
    employer_url: str | None
    updated_at: datetime


class UpdateUserProfileUseCase:
    """Use case for editing a user's profile.

    A username change rotates the previous usernames into
    ``old_username`` / ``old_old_username``.
    """

    OPTIONAL_FIELDS = ("name", "email", "summary", "website_url", "employer_url")

    def __init__(
        self,
        user_service: UserService,
        integration_service: IntegrationService,
    ) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
            integration_service: Search re-indexing
        """
        self.user_service = user_service
        self.integration_service = integration_service

    async def execute(
        self, request: UpdateUserProfileRequest
    ) -> UpdateUserProfileResponse:
        """Execute update user profile flow.

        Steps:
        1. Get user by ID
        2. Apply rename and changed fields
        3. Validate against the persisted version
        4. Save and re-index

        Args:
            request: Request with user ID and fields to update

        Returns:
            Updated user profile information

        Raises:
            NotFoundError: If user not found
            UserValidationError: If the updated profile is invalid
        """
        user_id = UserId(UUID(request.user_id))
        current = await self.user_service.get_by_id(user_id)

        updated = current
        if request.username is not None:
            updated = updated.rename(request.username)

        updates = {
            field: getattr(request, field) or None
            for field in self.OPTIONAL_FIELDS
            if getattr(request, field) is not None
        }
        updates["updated_at"] = datetime.now(timezone.utc)
        updated = updated.model_copy(update=updates)

        await self.user_service.validate(updated, previous=current)
        saved = await self.user_service.save(updated)

        if saved.username != current.username:
            logfire.info(
                "Username changed",
                user_id=str(saved.id),
                old_username=current.username,
                username=saved.username,
            )

        await self.integration_service.index_user(saved)

        return UpdateUserProfileResponse(
            user_id=str(saved.id),
            username=saved.username,
            old_username=saved.old_username,
            old_old_username=saved.old_old_username,
            name=saved.name,
            email=saved.email,
            summary=saved.summary,
            website_url=saved.website_url,
            employer_url=saved.employer_url,
            updated_at=saved.updated_at,
        )
