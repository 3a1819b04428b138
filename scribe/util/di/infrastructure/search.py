"""Search index infrastructure providers."""

from dishka import Scope, provide
import logfire

from scribe.adapter.algolia import AlgoliaSearchIndex, MockSearchIndex
from scribe.config import Settings
from scribe.domain.service import SearchIndex
from scribe.util.di.base import ProviderBase
from scribe.util.error import ConfigurationError
from scribe.util.observability import instrument_httpx


class SearchProvider(ProviderBase):
    """Search component base."""

    __mock_component__ = "search"


class ProdSearchProvider(SearchProvider):
    """Production search provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_search_index(self, settings: Settings) -> SearchIndex:
        """Provide search index client.

        Falls back to an in-memory index when no Algolia app id is set.

        Raises:
            ConfigurationError: If an app id is set without an API key
        """
        search = settings.search
        if not search.app_id:
            logfire.warn("Algolia not configured, using in-memory search index")
            return MockSearchIndex()
        if not search.api_key:
            raise ConfigurationError("Algolia API key must be configured")

        instrument_httpx()
        return AlgoliaSearchIndex(
            app_id=search.app_id,
            api_key=search.api_key,
            index_name=search.users_index,
            timeout=search.timeout,
        )
