"""Get user profile use case."""

from datetime import datetime

from pydantic import BaseModel

from scribe.domain.service import IdentityService, UserService
from scribe.domain.value import AuthProvider


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    username: str


class IdentityInfo(BaseModel):
    """Linked identity information for response."""

    provider: AuthProvider
    provider_username: str | None
    linked_at: datetime


class GetUserProfileResponse(BaseModel):
    """Get user profile response."""

    user_id: str
    username: str
    name: str | None
    summary: str | None
    website_url: str | None
    employer_url: str | None
    profile_image_url: str | None
    twitter_username: str | None
    github_username: str | None
    following_users_count: int
    following_tags_count: int
    following_orgs_count: int
    created_at: datetime
    identities: list[IdentityInfo]


class GetUserProfileUseCase:
    """Use case for getting a user's public profile by username."""

    def __init__(
        self,
        user_service: UserService,
        identity_service: IdentityService,
    ) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
            identity_service: Identity domain service
        """
        self.user_service = user_service
        self.identity_service = identity_service

    async def execute(
        self, request: GetUserProfileRequest
    ) -> GetUserProfileResponse | None:
        """Execute get user profile flow.

        Args:
            request: Request with username

        Returns:
            User profile information if user exists, None otherwise
        """
        user = await self.user_service.get_user_by_username(request.username)
        if not user:
            return None

        identities = await self.identity_service.get_all_identities_for_user(user.id)

        return GetUserProfileResponse(
            user_id=str(user.id),
            username=user.username,
            name=user.name,
            summary=user.summary,
            website_url=user.website_url,
            employer_url=user.employer_url,
            profile_image_url=user.profile_image_url,
            twitter_username=user.twitter_username,
            github_username=user.github_username,
            following_users_count=user.following_users_count,
            following_tags_count=user.following_tags_count,
            following_orgs_count=user.following_orgs_count,
            created_at=user.created_at,
            identities=[
                IdentityInfo(
                    provider=identity.provider,
                    provider_username=identity.provider_username,
                    linked_at=identity.created_at,
                )
                for identity in identities
            ],
        )
