"""Application layer DI providers."""

from dishka import Scope, provide

from scribe.application.usecase.auth import ResolveIdentityUseCase
from scribe.application.usecase.follow import FollowUseCase, UnfollowUseCase
from scribe.application.usecase.user import (
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from scribe.domain.service import (
    FollowService,
    IdentityService,
    IntegrationService,
    UserService,
    UsernameService,
)
from scribe.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_resolve_identity_use_case(
        self,
        user_service: UserService,
        identity_service: IdentityService,
        username_service: UsernameService,
        integration_service: IntegrationService,
    ) -> ResolveIdentityUseCase:
        """Provide resolve identity use case."""
        return ResolveIdentityUseCase(
            user_service=user_service,
            identity_service=identity_service,
            username_service=username_service,
            integration_service=integration_service,
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_user_profile_use_case(
        self,
        user_service: UserService,
        identity_service: IdentityService,
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(
            user_service=user_service,
            identity_service=identity_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self,
        user_service: UserService,
        integration_service: IntegrationService,
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(
            user_service=user_service,
            integration_service=integration_service,
        )

    # Follow use cases
    @provide(scope=Scope.REQUEST)
    def get_follow_use_case(self, follow_service: FollowService) -> FollowUseCase:
        """Provide follow use case."""
        return FollowUseCase(follow_service=follow_service)

    @provide(scope=Scope.REQUEST)
    def get_unfollow_use_case(self, follow_service: FollowService) -> UnfollowUseCase:
        """Provide unfollow use case."""
        return UnfollowUseCase(follow_service=follow_service)
