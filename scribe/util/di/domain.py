"""Domain layer DI providers."""

from dishka import Scope, provide

from scribe.config import RegistrationSettings
from scribe.domain.repository import (
    FollowRepository,
    IdentityRepository,
    OrganizationRepository,
    TagRepository,
    UserRepository,
)
from scribe.domain.service import (
    FollowService,
    IdentityService,
    IntegrationService,
    JobQueue,
    LanguageService,
    NewsletterClient,
    SearchIndex,
    UserService,
    UsernameService,
)
from scribe.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            organization_repository=organization_repository,
        )

    @provide
    def get_username_service(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        settings: RegistrationSettings,
    ) -> UsernameService:
        """Provide username generation service."""
        return UsernameService(
            user_repository=user_repository,
            organization_repository=organization_repository,
            settings=settings,
        )

    @provide
    def get_identity_service(
        self, identity_repository: IdentityRepository
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(identity_repository=identity_repository)

    @provide
    def get_language_service(
        self,
        user_repository: UserRepository,
        identity_repository: IdentityRepository,
    ) -> LanguageService:
        """Provide language estimation service."""
        return LanguageService(
            user_repository=user_repository,
            identity_repository=identity_repository,
        )

    @provide
    def get_integration_service(
        self,
        search_index: SearchIndex,
        newsletter_client: NewsletterClient,
        job_queue: JobQueue,
        language_service: LanguageService,
    ) -> IntegrationService:
        """Provide sign-up side effects service."""
        return IntegrationService(
            search_index=search_index,
            newsletter_client=newsletter_client,
            job_queue=job_queue,
            language_service=language_service,
        )

    @provide
    def get_follow_service(
        self,
        follow_repository: FollowRepository,
        user_service: UserService,
        user_repository: UserRepository,
        tag_repository: TagRepository,
        organization_repository: OrganizationRepository,
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(
            follow_repository=follow_repository,
            user_service=user_service,
            user_repository=user_repository,
            tag_repository=tag_repository,
            organization_repository=organization_repository,
        )
