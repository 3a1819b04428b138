"""Unit tests for UserService."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from scribe.domain.error import NotFoundError, UserValidationError
from scribe.domain.model import Organization
from scribe.domain.service import UserService
from scribe.domain.value import (
    AuthProvider,
    FollowableType,
    OrganizationId,
    ProviderProfile,
    UserId,
)
from scribe.persistence.repository.inmemory import (
    InMemoryOrganizationRepository,
    InMemoryUserRepository,
)
from tests.factories import make_user


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def org_repo():
    return InMemoryOrganizationRepository()


@pytest.fixture
def service(user_repo, org_repo):
    return UserService(user_repo, org_repo)


async def _errors(service: UserService, user, previous=None) -> dict[str, list[str]]:
    with pytest.raises(UserValidationError) as exc_info:
        await service.validate(user, previous=previous)
    return exc_info.value.errors


class TestValidateUsername:
    """Username rules in UserService.validate()."""

    @pytest.mark.asyncio
    async def test_valid_user_passes(self, service):
        """Should accept a well-formed user."""
        await service.validate(
            make_user("ada_lovelace", website_url="https://ada.dev")
        )

    @pytest.mark.asyncio
    async def test_blank_username(self, service):
        """Should reject an empty username."""
        errors = await _errors(service, make_user(""))

        assert errors == {"username": ["can't be blank"]}

    @pytest.mark.asyncio
    async def test_too_short(self, service):
        """Should reject one-character usernames."""
        errors = await _errors(service, make_user("a"))

        assert "is too short (minimum is 2 characters)" in errors["username"]

    @pytest.mark.asyncio
    async def test_too_long(self, service):
        """Should reject usernames over 30 characters."""
        errors = await _errors(service, make_user("a" * 31))

        assert "is too long (maximum is 30 characters)" in errors["username"]

    @pytest.mark.asyncio
    async def test_invalid_characters(self, service):
        """Should reject characters outside [A-Za-z0-9_]."""
        errors = await _errors(service, make_user("invalid.username"))

        assert errors["username"] == ["is invalid"]

    @pytest.mark.asyncio
    async def test_taken_by_other_user_ignoring_case(self, service, user_repo):
        """Should reject a username another user holds in any case."""
        await user_repo.save(make_user("Ada"))

        errors = await _errors(service, make_user("ada"))

        assert errors["username"] == ["has already been taken"]

    @pytest.mark.asyncio
    async def test_own_username_is_not_taken(self, service, user_repo):
        """Should not flag the user's own persisted username."""
        user = await user_repo.save(make_user("ada"))

        await service.validate(user, previous=user)

    @pytest.mark.asyncio
    async def test_taken_by_organization(self, service, org_repo):
        """Should reject a username equal to an organization slug."""
        await org_repo.save(
            Organization(id=OrganizationId(uuid4()), name="Acme", slug="acme")
        )

        errors = await _errors(service, make_user("Acme"))

        assert errors["username"] == ["is taken by an organization"]


class TestValidateProfileFields:
    """URL, summary and provider username rules in UserService.validate()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["website_url", "employer_url"])
    async def test_url_needs_scheme(self, service, field):
        """Should require http(s) URLs."""
        errors = await _errors(service, make_user("ada", **{field: "ada.dev"}))

        assert errors == {field: ["must start with http:// or https://"]}

    @pytest.mark.asyncio
    async def test_new_user_summary_too_long(self, service):
        """Should reject a summary over 200 characters on a new user."""
        errors = await _errors(service, make_user("ada", summary="x" * 201))

        assert errors == {"summary": ["is too long (maximum is 200 characters)"]}

    @pytest.mark.asyncio
    async def test_unchanged_long_summary_is_grandfathered(self, service, user_repo):
        """Should keep accepting an over-long summary until it is edited."""
        legacy = await user_repo.save(make_user("ada", summary="x" * 250))
        renamed = legacy.model_copy(update={"name": "Ada"})

        await service.validate(renamed, previous=legacy)

    @pytest.mark.asyncio
    async def test_edited_long_summary_is_rejected(self, service, user_repo):
        """Should enforce the limit once the summary changes."""
        legacy = await user_repo.save(make_user("ada", summary="x" * 250))
        edited = legacy.model_copy(update={"summary": "y" * 250})

        errors = await _errors(service, edited, previous=legacy)

        assert "summary" in errors

    @pytest.mark.asyncio
    async def test_provider_username_taken(self, service, user_repo):
        """Should reject a provider username held by another user."""
        await user_repo.save(make_user("first", twitter_username="ada"))

        errors = await _errors(service, make_user("second", twitter_username="ada"))

        assert errors == {"twitter_username": ["has already been taken"]}

    @pytest.mark.asyncio
    async def test_collects_all_failures(self, service):
        """Should report every failing field at once."""
        errors = await _errors(
            service, make_user("a", website_url="ada.dev", summary="x" * 201)
        )

        assert set(errors) == {"username", "website_url", "summary"}


class TestApplyProviderProfile:
    """Tests for UserService.apply_provider_profile()."""

    @pytest.mark.asyncio
    async def test_twitter_profile(self, service):
        """Should copy Twitter username, counts and creation time."""
        created = datetime(2018, 10, 10, 20, 19, 24, tzinfo=timezone.utc)
        user = make_user("ada")

        updated = await service.apply_provider_profile(
            user,
            AuthProvider.TWITTER,
            ProviderProfile(
                username="ada_tw",
                followers_count=100,
                following_count=42,
                created_at=created,
                image="https://img.example/ada.jpg",
            ),
        )

        assert updated.twitter_username == "ada_tw"
        assert updated.twitter_followers_count == 100
        assert updated.twitter_following_count == 42
        assert updated.twitter_created_at == created
        assert updated.profile_image_url == "https://img.example/ada.jpg"
        assert user.twitter_username is None  # original untouched

    @pytest.mark.asyncio
    async def test_github_profile(self, service):
        """Should copy GitHub username and creation time."""
        created = datetime(2014, 3, 2, 10, 11, 12, tzinfo=timezone.utc)

        updated = await service.apply_provider_profile(
            make_user("ada"),
            AuthProvider.GITHUB,
            ProviderProfile(username="ada-gh", created_at=created),
        )

        assert updated.github_username == "ada-gh"
        assert updated.github_created_at == created
        assert updated.twitter_username is None

    @pytest.mark.asyncio
    async def test_skips_provider_username_held_by_other_user(
        self, service, user_repo
    ):
        """Should leave the provider username unset when someone else has it."""
        await user_repo.save(make_user("first", twitter_username="ada"))

        updated = await service.apply_provider_profile(
            make_user("second"),
            AuthProvider.TWITTER,
            ProviderProfile(username="ada", followers_count=5),
        )

        assert updated.twitter_username is None
        assert updated.twitter_followers_count == 5

    @pytest.mark.asyncio
    async def test_keeps_existing_profile_image(self, service):
        """Should not overwrite an existing profile image."""
        updated = await service.apply_provider_profile(
            make_user("ada", profile_image_url="https://img.example/own.jpg"),
            AuthProvider.GITHUB,
            ProviderProfile(image="https://img.example/gh.jpg"),
        )

        assert updated.profile_image_url == "https://img.example/own.jpg"


class TestLookupsAndCounters:
    """Tests for lookups and follow counters."""

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, service):
        """Should raise NotFoundError for unknown ids."""
        with pytest.raises(NotFoundError):
            await service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_user_by_username_ignores_case(self, service, user_repo):
        """Should find users regardless of username case."""
        user = await user_repo.save(make_user("Ada"))

        found = await service.get_user_by_username("ADA")

        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_follow_counters(self, service, user_repo):
        """Should increment counters and never go below zero."""
        user = await user_repo.save(make_user("ada"))

        await service.increment_follow_count(user.id, FollowableType.TAG)
        await service.increment_follow_count(user.id, FollowableType.TAG)
        await service.decrement_follow_count(user.id, FollowableType.TAG)
        await service.decrement_follow_count(user.id, FollowableType.ORGANIZATION)

        stored = await service.get_by_id(user.id)
        assert stored.following_tags_count == 1
        assert stored.following_orgs_count == 0
