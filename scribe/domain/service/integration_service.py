"""Outbound integrations triggered by user lifecycle events."""

from typing import Any, Awaitable, Callable

import logfire

from scribe.domain.model import User

from .base import Service
from .language_service import LanguageService


class SearchIndex:
    """Search index interface for public user documents."""

    async def index_user(self, user: User) -> None:
        """Insert or replace the user's search document.

        Args:
            user: User to index
        """
        raise NotImplementedError


class NewsletterClient:
    """Newsletter provider interface."""

    async def subscribe(self, user: User) -> bool:
        """Subscribe the user's email to the newsletter list.

        Args:
            user: User with an email address

        Returns:
            True if the provider accepted the subscription
        """
        raise NotImplementedError


class JobQueue:
    """Background job interface."""

    async def enqueue(self, name: str, job: Callable[[], Awaitable[Any]]) -> None:
        """Schedule a job.

        Implementations must not propagate the job's own failures.

        Args:
            name: Job name for logging
            job: Zero-argument coroutine factory
        """
        raise NotImplementedError


class IntegrationService(Service):
    """Fires the side effects of sign-up and profile changes.

    Every call here is fire-and-forget: failures are logged and never reach
    the caller, so an unavailable search or mail backend cannot block
    registration.
    """

    def __init__(
        self,
        search_index: SearchIndex,
        newsletter_client: NewsletterClient,
        job_queue: JobQueue,
        language_service: LanguageService,
    ) -> None:
        """Initialize integration service.

        Args:
            search_index: Search index client
            newsletter_client: Newsletter client
            job_queue: Background job queue
            language_service: Language estimation service (run as a job)
        """
        self.search_index = search_index
        self.newsletter_client = newsletter_client
        self.job_queue = job_queue
        self.language_service = language_service

    async def user_registered(self, user: User) -> None:
        """Run the sign-up side effects for a newly created user.

        Args:
            user: The new user
        """
        with logfire.span("integration_service.user_registered", user_id=str(user.id)):
            await self.job_queue.enqueue(
                "estimate_default_language",
                lambda: self.language_service.estimate_default_language(user.id),
            )
            await self.index_user(user)
            if user.email:
                await self.subscribe_to_newsletter(user)

    async def index_user(self, user: User) -> None:
        """Upsert the user into the search index, logging failures.

        Args:
            user: User to index
        """
        try:
            await self.search_index.index_user(user)
        except Exception as e:
            logfire.warn(
                "Search indexing failed",
                user_id=str(user.id),
                error=str(e),
                error_type=type(e).__name__,
            )

    async def subscribe_to_newsletter(self, user: User) -> bool:
        """Subscribe the user to the newsletter, logging failures.

        Args:
            user: User to subscribe

        Returns:
            True if subscribed, False on any failure
        """
        try:
            return await self.newsletter_client.subscribe(user)
        except Exception as e:
            logfire.warn(
                "Newsletter subscription failed",
                user_id=str(user.id),
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
