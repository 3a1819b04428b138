"""Unit tests for GetUserProfileUseCase."""

import pytest

from scribe.application.usecase.auth import ResolveIdentityUseCase
from scribe.application.usecase.auth.resolve_identity import ResolveIdentityRequest
from scribe.application.usecase.user import GetUserProfileUseCase
from scribe.application.usecase.user.get_user_profile import GetUserProfileRequest
from scribe.domain.value import AuthProvider
from tests.factories import github_payload, twitter_payload
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetUserProfileUseCase:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_profile_with_identities(self, unit_env):
        """Should return the profile and every linked provider."""
        resolve = await unit_env.get(ResolveIdentityUseCase)
        registered = await resolve.execute(
            ResolveIdentityRequest(payload=twitter_payload(email="ada@example.com"))
        )
        await resolve.execute(
            ResolveIdentityRequest(payload=github_payload(email="ada@example.com"))
        )
        use_case = await unit_env.get(GetUserProfileUseCase)

        profile = await use_case.execute(GetUserProfileRequest(username="ADA"))

        assert profile is not None
        assert profile.user_id == registered.user_id
        assert profile.twitter_username == "ada"
        assert profile.github_username == "ada"
        assert [i.provider for i in profile.identities] == [
            AuthProvider.TWITTER,
            AuthProvider.GITHUB,
        ]

    @pytest.mark.asyncio
    async def test_unknown_username(self, unit_env):
        """Should return None for unknown usernames."""
        use_case = await unit_env.get(GetUserProfileUseCase)

        assert await use_case.execute(GetUserProfileRequest(username="nobody")) is None
