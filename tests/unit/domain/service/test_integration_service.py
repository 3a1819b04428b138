"""Unit tests for IntegrationService."""

import pytest

from scribe.adapter.algolia import MockSearchIndex
from scribe.adapter.jobs import InProcessJobQueue
from scribe.adapter.mailchimp import MockNewsletterClient
from scribe.domain.service import IntegrationService, LanguageService, SearchIndex
from scribe.persistence.repository.inmemory import (
    InMemoryIdentityRepository,
    InMemoryUserRepository,
)
from tests.factories import make_user


class BrokenSearchIndex(SearchIndex):
    async def index_user(self, user):
        raise RuntimeError("search is down")


class RecordingJobQueue(InProcessJobQueue):
    def __init__(self):
        super().__init__()
        self.names: list[str] = []

    async def enqueue(self, name, job):
        self.names.append(name)
        await super().enqueue(name, job)


def _service(search_index=None, job_queue=None):
    user_repo = InMemoryUserRepository()
    newsletter = MockNewsletterClient()
    service = IntegrationService(
        search_index=search_index or MockSearchIndex(),
        newsletter_client=newsletter,
        job_queue=job_queue or InProcessJobQueue(),
        language_service=LanguageService(user_repo, InMemoryIdentityRepository()),
    )
    return service, user_repo, newsletter


class TestUserRegistered:
    """Tests for IntegrationService.user_registered()."""

    @pytest.mark.asyncio
    async def test_runs_all_side_effects(self):
        """Should estimate language, index and subscribe the new user."""
        queue = RecordingJobQueue()
        service, user_repo, newsletter = _service(job_queue=queue)
        user = await user_repo.save(make_user("taro", email="taro@example.jp"))

        await service.user_registered(user)

        assert queue.names == ["estimate_default_language"]
        assert str(user.id) in service.search_index.documents
        assert newsletter.subscribed == ["taro@example.jp"]
        stored = await user_repo.find_by_id(user.id)
        assert stored.estimated_default_language == "ja"

    @pytest.mark.asyncio
    async def test_skips_newsletter_without_email(self):
        """Should not subscribe users without an email."""
        service, user_repo, newsletter = _service()
        user = await user_repo.save(make_user("ada"))

        await service.user_registered(user)

        assert newsletter.subscribed == []

    @pytest.mark.asyncio
    async def test_search_failure_is_not_raised(self):
        """Should log and swallow search index failures."""
        service, user_repo, newsletter = _service(search_index=BrokenSearchIndex())
        user = await user_repo.save(make_user("ada", email="ada@example.com"))

        await service.user_registered(user)

        assert newsletter.subscribed == ["ada@example.com"]
