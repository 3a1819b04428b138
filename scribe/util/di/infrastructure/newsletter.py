"""Newsletter infrastructure providers."""

from dishka import Scope, provide
import logfire

from scribe.adapter.mailchimp import MailchimpNewsletterClient, MockNewsletterClient
from scribe.config import Settings
from scribe.domain.service import NewsletterClient
from scribe.util.di.base import ProviderBase
from scribe.util.error import ConfigurationError


class NewsletterProvider(ProviderBase):
    """Newsletter component base."""

    __mock_component__ = "newsletter"


class ProdNewsletterProvider(NewsletterProvider):
    """Production newsletter provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_newsletter_client(self, settings: Settings) -> NewsletterClient:
        """Provide newsletter client.

        Falls back to an in-memory client when no Mailchimp key is set.

        Raises:
            ConfigurationError: If a key is set without a list id
        """
        newsletter = settings.newsletter
        if not newsletter.api_key:
            logfire.warn("Mailchimp not configured, newsletter subscriptions disabled")
            return MockNewsletterClient()
        if not newsletter.list_id:
            raise ConfigurationError("Mailchimp list id must be configured")

        return MailchimpNewsletterClient(
            api_key=newsletter.api_key,
            list_id=newsletter.list_id,
            data_center=newsletter.data_center,
            timeout=newsletter.timeout,
        )
