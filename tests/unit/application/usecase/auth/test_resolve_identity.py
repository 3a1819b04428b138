"""Unit tests for ResolveIdentityUseCase."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from scribe.adapter.algolia import MockSearchIndex
from scribe.adapter.jobs import InProcessJobQueue
from scribe.adapter.mailchimp import MockNewsletterClient
from scribe.application.usecase.auth import ResolveIdentityUseCase
from scribe.application.usecase.auth.resolve_identity import ResolveIdentityRequest
from scribe.config import RegistrationSettings
from scribe.domain.error import (
    IdentityConflictError,
    NotFoundError,
    RegistrationError,
)
from scribe.domain.model import Organization
from scribe.domain.repository import (
    IdentityRepository,
    OrganizationRepository,
    UserRepository,
)
from scribe.domain.service import (
    IdentityService,
    IntegrationService,
    LanguageService,
    NewsletterClient,
    SearchIndex,
    UserService,
    UsernameService,
)
from scribe.domain.value import AuthProvider, OrganizationId, UserId
from scribe.persistence.repository.inmemory import (
    InMemoryIdentityRepository,
    InMemoryOrganizationRepository,
    InMemoryUserRepository,
)
from tests.factories import github_payload, make_user, twitter_payload
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _resolve(env, payload, **kwargs):
    use_case = await env.get(ResolveIdentityUseCase)
    return await use_case.execute(ResolveIdentityRequest(payload=payload, **kwargs))


class TestRegistration:
    """First sign-in with an unknown provider account."""

    @pytest.mark.asyncio
    async def test_creates_user_and_identity(self, unit_env):
        """Should register a user named after the nickname."""
        response = await _resolve(unit_env, twitter_payload(uid="1001"))

        assert response.is_new_user is True
        assert response.username == "ada"

        user_repo = await unit_env.get(UserRepository)
        identity_repo = await unit_env.get(IdentityRepository)
        user = await user_repo.find_by_id(UserId(UUID(response.user_id)))
        identities = await identity_repo.find_all_by_user_id(user.id)

        assert user.name == "Ada Lovelace"
        assert len(identities) == 1
        assert identities[0].uid == "1001"
        assert identities[0].auth_data_dump["provider"] == "twitter"

    @pytest.mark.asyncio
    async def test_caches_twitter_profile(self, unit_env):
        """Should copy Twitter counts and account creation time."""
        response = await _resolve(unit_env, twitter_payload(followers_count=100))

        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.find_by_username(response.username)

        assert user.twitter_username == "ada"
        assert user.twitter_followers_count == 100
        assert user.twitter_following_count == 100
        assert isinstance(user.twitter_created_at, datetime)
        assert user.twitter_created_at == datetime(
            2018, 10, 10, 20, 19, 24, tzinfo=timezone.utc
        )

    @pytest.mark.asyncio
    async def test_caches_github_profile(self, unit_env):
        """Should copy GitHub username and account creation time."""
        response = await _resolve(unit_env, github_payload(nickname="ada-gh"))

        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.find_by_username(response.username)

        assert response.username == "adagh"
        assert user.github_username == "ada-gh"
        assert user.github_created_at == datetime(
            2014, 3, 2, 10, 11, 12, tzinfo=timezone.utc
        )

    @pytest.mark.asyncio
    async def test_strips_invalid_characters(self, unit_env):
        """Should turn "invalid.username" into "invalidusername"."""
        response = await _resolve(unit_env, twitter_payload(nickname="invalid.username"))

        assert response.username == "invalidusername"

    @pytest.mark.asyncio
    async def test_keeps_valid_username(self, unit_env):
        """Should keep a nickname that is already a valid username."""
        response = await _resolve(unit_env, twitter_payload(nickname="valid_username"))

        assert response.username == "valid_username"

    @pytest.mark.asyncio
    async def test_taken_username_gets_new_one(self, unit_env):
        """Should pick another username when the nickname is taken."""
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("ada", email="other@example.com"))

        response = await _resolve(unit_env, twitter_payload())

        assert response.is_new_user is True
        assert response.username != "ada"
        assert response.username.startswith("ada_")

    @pytest.mark.asyncio
    async def test_organization_slug_collision(self, unit_env):
        """Should not use a nickname that matches an organization slug."""
        org_repo = await unit_env.get(OrganizationRepository)
        await org_repo.save(
            Organization(id=OrganizationId(uuid4()), name="Ada Inc", slug="ada")
        )

        response = await _resolve(unit_env, twitter_payload())

        assert response.username != "ada"
        assert not await org_repo.slug_exists(response.username)

    @pytest.mark.asyncio
    async def test_records_signup_variant(self, unit_env):
        """Should store the CTA variant and queue onboarding."""
        response = await _resolve(
            unit_env, twitter_payload(), signup_cta_variant="navbar_basic"
        )

        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.find_by_username(response.username)
        assert user.signup_cta_variant == "navbar_basic"
        assert user.saw_onboarding is False

    @pytest.mark.asyncio
    async def test_without_variant_skips_onboarding(self, unit_env):
        """Should mark onboarding as seen without a CTA variant."""
        response = await _resolve(unit_env, twitter_payload())

        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.find_by_username(response.username)
        assert user.signup_cta_variant is None
        assert user.saw_onboarding is True

    @pytest.mark.asyncio
    async def test_runs_signup_side_effects(self, unit_env):
        """Should index, subscribe and estimate the language of new users."""
        response = await _resolve(
            unit_env, twitter_payload(email="ada@example.com", lang="fr")
        )

        search_index = await unit_env.get(SearchIndex)
        newsletter = await unit_env.get(NewsletterClient)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.find_by_username(response.username)

        assert search_index.documents[response.user_id]["username"] == "ada"
        assert newsletter.subscribed == ["ada@example.com"]
        assert user.estimated_default_language == "fr"

    @pytest.mark.asyncio
    async def test_skips_provider_username_held_by_other_user(self, unit_env):
        """Should register without the cached handle someone else holds."""
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("someone", twitter_username="ada"))

        response = await _resolve(unit_env, twitter_payload(uid="9"))

        user = await user_repo.find_by_username(response.username)
        assert response.is_new_user is True
        assert user.twitter_username is None


class TestReturningAndLinking:
    """Known accounts, email matches and signed-in linking."""

    @pytest.mark.asyncio
    async def test_returning_user(self, unit_env):
        """Should sign in the owner and refresh the identity."""
        first = await _resolve(unit_env, twitter_payload(uid="1001"))
        second = await _resolve(
            unit_env, twitter_payload(uid="1001", followers_count=250)
        )

        assert second.is_new_user is False
        assert second.user_id == first.user_id
        assert second.identity_id == first.identity_id

        identity_repo = await unit_env.get(IdentityRepository)
        identity = await identity_repo.find_by_provider(AuthProvider.TWITTER, "1001")
        assert identity.followers_count == 250

    @pytest.mark.asyncio
    async def test_links_by_email(self, unit_env):
        """Should attach the identity to the user holding the email."""
        user_repo = await unit_env.get(UserRepository)
        existing = await user_repo.save(make_user("lovelace", email="ada@example.com"))

        response = await _resolve(unit_env, github_payload(email="ada@example.com"))

        assert response.is_new_user is False
        assert response.user_id == str(existing.id)
        assert response.username == "lovelace"
        user = await user_repo.find_by_id(existing.id)
        assert user.github_username == "ada"

    @pytest.mark.asyncio
    async def test_same_email_across_providers(self, unit_env):
        """Should keep one user with one identity per provider."""
        user_repo = await unit_env.get(UserRepository)
        identity_repo = await unit_env.get(IdentityRepository)
        email = "ada@example.com"
        counts = []

        for payload in (
            twitter_payload(uid="1", email=email),
            github_payload(uid="2", email=email),
            twitter_payload(uid="1", email=email),
            github_payload(uid="2", email=email),
        ):
            response = await _resolve(unit_env, payload)
            user = await user_repo.find_by_email(email)
            assert str(user.id) == response.user_id
            counts.append(len(await identity_repo.find_all_by_user_id(user.id)))

        assert counts == [1, 2, 2, 2]

    @pytest.mark.asyncio
    async def test_signed_in_user_links_provider(self, unit_env):
        """Should link to the signed-in user and keep their variant."""
        user_repo = await unit_env.get(UserRepository)
        current = await user_repo.save(make_user("ada", email="ada@example.com"))

        response = await _resolve(
            unit_env,
            github_payload(email="different@example.com"),
            current_user_id=str(current.id),
            signup_cta_variant="navbar_basic",
        )

        assert response.is_new_user is False
        assert response.user_id == str(current.id)
        user = await user_repo.find_by_id(current.id)
        assert user.signup_cta_variant is None
        assert user.saw_onboarding is True
        assert user.github_username == "ada"

    @pytest.mark.asyncio
    async def test_signed_in_user_not_found(self, unit_env):
        """Should raise NotFoundError for an unknown signed-in user."""
        with pytest.raises(NotFoundError):
            await _resolve(
                unit_env, github_payload(), current_user_id=str(uuid4())
            )

    @pytest.mark.asyncio
    async def test_identity_owned_by_other_user(self, unit_env):
        """Should refuse to move an identity between users."""
        await _resolve(unit_env, github_payload(uid="2001"))
        user_repo = await unit_env.get(UserRepository)
        other = await user_repo.save(make_user("ben"))

        with pytest.raises(IdentityConflictError):
            await _resolve(
                unit_env, github_payload(uid="2001"), current_user_id=str(other.id)
            )

    @pytest.mark.asyncio
    async def test_second_account_for_same_provider(self, unit_env):
        """Should refuse a second identity for a provider already linked."""
        first = await _resolve(unit_env, twitter_payload(uid="1"))

        with pytest.raises(IdentityConflictError):
            await _resolve(
                unit_env,
                twitter_payload(uid="2", nickname="ada_alt"),
                current_user_id=first.user_id,
            )


class FlakyUserRepository(InMemoryUserRepository):
    """Raises IntegrityError on the first ``failures`` inserts."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempted: list[str] = []

    async def save(self, user):
        if await self.find_by_id(user.id) is None:
            self.attempted.append(user.username)
            if self.failures > 0:
                self.failures -= 1
                raise IntegrityError("Duplicate username", None, Exception())
        return await super().save(user)


class BrokenSearchIndex(SearchIndex):
    async def index_user(self, user):
        raise RuntimeError("search is down")


class LaggingIdentityRepository(InMemoryIdentityRepository):
    """Misses the next ``misses`` provider lookups.

    Stands in for another request linking the account between the lookup
    and the insert.
    """

    def __init__(self, misses: int = 0) -> None:
        super().__init__()
        self.misses = misses

    async def find_by_provider(self, provider, uid):
        if self.misses > 0:
            self.misses -= 1
            return None
        return await super().find_by_provider(provider, uid)


class RejectingIdentityRepository(InMemoryIdentityRepository):
    """Fails every insert with a unique violation."""

    async def save(self, identity):
        raise IntegrityError("Duplicate identity", None, Exception())


def _build_use_case(
    user_repo, search_index=None, identity_repo=None
) -> ResolveIdentityUseCase:
    org_repo = InMemoryOrganizationRepository()
    identity_repo = identity_repo or InMemoryIdentityRepository()
    return ResolveIdentityUseCase(
        user_service=UserService(user_repo, org_repo),
        identity_service=IdentityService(identity_repo),
        username_service=UsernameService(user_repo, org_repo, RegistrationSettings()),
        integration_service=IntegrationService(
            search_index=search_index or MockSearchIndex(),
            newsletter_client=MockNewsletterClient(),
            job_queue=InProcessJobQueue(),
            language_service=LanguageService(user_repo, identity_repo),
        ),
    )


class TestInsertRace:
    """Username taken between the availability check and the insert."""

    @pytest.mark.asyncio
    async def test_retries_with_suffixed_username(self):
        """Should retry once with a suffixed username."""
        user_repo = FlakyUserRepository(failures=1)
        use_case = _build_use_case(user_repo)

        response = await use_case.execute(
            ResolveIdentityRequest(payload=twitter_payload())
        )

        assert user_repo.attempted[0] == "ada"
        assert response.username == user_repo.attempted[1]
        assert response.username.startswith("ada_")

    @pytest.mark.asyncio
    async def test_gives_up_after_retry(self):
        """Should raise RegistrationError when the retry collides too."""
        user_repo = FlakyUserRepository(failures=2)
        use_case = _build_use_case(user_repo)

        with pytest.raises(RegistrationError):
            await use_case.execute(ResolveIdentityRequest(payload=twitter_payload()))

        assert len(user_repo.attempted) == 2

    @pytest.mark.asyncio
    async def test_side_effect_failure_does_not_block_signup(self):
        """Should register even when the search index is down."""
        user_repo = InMemoryUserRepository()
        use_case = _build_use_case(user_repo, search_index=BrokenSearchIndex())

        response = await use_case.execute(
            ResolveIdentityRequest(payload=twitter_payload())
        )

        assert response.is_new_user is True
        assert await user_repo.find_by_username("ada") is not None

    @pytest.mark.asyncio
    async def test_account_registered_concurrently(self):
        """Should drop the new user and sign in the account's owner."""
        user_repo = InMemoryUserRepository()
        identity_repo = LaggingIdentityRepository()
        search_index = MockSearchIndex()
        use_case = _build_use_case(user_repo, search_index, identity_repo)
        first = await use_case.execute(
            ResolveIdentityRequest(payload=twitter_payload(uid="1"))
        )

        identity_repo.misses = 1
        second = await use_case.execute(
            ResolveIdentityRequest(payload=twitter_payload(uid="1"))
        )

        assert second.is_new_user is False
        assert second.user_id == first.user_id
        assert second.identity_id == first.identity_id
        assert len(user_repo._users) == 1
        assert list(search_index.documents) == [first.user_id]

    @pytest.mark.asyncio
    async def test_identity_insert_failure_is_registration_error(self):
        """Should raise RegistrationError and keep no user behind."""
        user_repo = InMemoryUserRepository()
        use_case = _build_use_case(
            user_repo, identity_repo=RejectingIdentityRepository()
        )

        with pytest.raises(RegistrationError):
            await use_case.execute(ResolveIdentityRequest(payload=twitter_payload()))

        assert await user_repo.find_by_username("ada") is None

    @pytest.mark.asyncio
    async def test_link_races_with_other_user(self):
        """Should raise IdentityConflictError and leave the user untouched."""
        user_repo = InMemoryUserRepository()
        identity_repo = LaggingIdentityRepository()
        use_case = _build_use_case(user_repo, identity_repo=identity_repo)
        await use_case.execute(
            ResolveIdentityRequest(payload=github_payload(uid="2001"))
        )
        ben = await user_repo.save(make_user("ben"))

        identity_repo.misses = 1
        with pytest.raises(IdentityConflictError):
            await use_case.execute(
                ResolveIdentityRequest(
                    payload=github_payload(uid="2001"), current_user_id=str(ben.id)
                )
            )

        assert (await user_repo.find_by_id(ben.id)).github_username is None
        assert await identity_repo.find_all_by_user_id(ben.id) == []
