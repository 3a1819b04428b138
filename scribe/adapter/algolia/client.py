"""Algolia search index client.

Keeps one public document per user in the users index, keyed by user id.
"""

from typing import Any

import httpx
import logfire

from scribe.adapter.error import SearchIndexError
from scribe.domain.model import User
from scribe.domain.service import SearchIndex


def build_user_document(user: User) -> dict[str, Any]:
    """Build the public search document for a user.

    Args:
        user: User to index

    Returns:
        Document with only public profile fields
    """
    return {
        "objectID": str(user.id),
        "username": user.username,
        "name": user.name,
        "summary": user.summary,
        "profile_image_url": user.profile_image_url,
        "twitter_username": user.twitter_username,
        "github_username": user.github_username,
    }


class AlgoliaSearchIndex(SearchIndex):
    """Search index backed by the Algolia REST API."""

    def __init__(
        self,
        app_id: str,
        api_key: str,
        index_name: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Algolia client.

        Args:
            app_id: Algolia application id
            api_key: Algolia admin API key
            index_name: Name of the users index
            timeout: Request timeout in seconds
        """
        self.app_id = app_id
        self.api_key = api_key
        self.index_name = index_name
        self.timeout = timeout
        self.base_url = f"https://{app_id}.algolia.net/1/indexes/{index_name}"

    async def index_user(self, user: User) -> None:
        """Replace the user's document in the index.

        Args:
            user: User to index

        Raises:
            SearchIndexError: If the request fails
        """
        document = build_user_document(user)
        url = f"{self.base_url}/{document['objectID']}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.put(
                    url,
                    json=document,
                    headers={
                        "X-Algolia-Application-Id": self.app_id,
                        "X-Algolia-API-Key": self.api_key,
                    },
                    timeout=self.timeout,
                )

                if response.status_code not in (200, 201):
                    logfire.error(
                        "Algolia index request failed",
                        status_code=response.status_code,
                        error=response.text,
                        user_id=str(user.id),
                    )
                    raise SearchIndexError(
                        f"Index request failed: {response.status_code}"
                    )

        except httpx.HTTPError as e:
            logfire.error("Algolia HTTP error", error=str(e), user_id=str(user.id))
            raise SearchIndexError(f"HTTP error indexing user: {e}")

        logfire.info("User indexed", user_id=str(user.id), index=self.index_name)


class MockSearchIndex(SearchIndex):
    """Mock search index for testing and for running without Algolia.

    Keeps the latest document per user in memory.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}

    async def index_user(self, user: User) -> None:
        """Store the user's document in memory."""
        document = build_user_document(user)
        self.documents[document["objectID"]] = document
