"""Unit tests for the Algolia search index client."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from scribe.adapter.algolia import AlgoliaSearchIndex, MockSearchIndex
from scribe.adapter.error import SearchIndexError
from tests.factories import make_user


def _index() -> AlgoliaSearchIndex:
    return AlgoliaSearchIndex(app_id="APP", api_key="secret", index_name="users")


class TestAlgoliaSearchIndex:
    """Tests for AlgoliaSearchIndex.index_user()."""

    @pytest.mark.asyncio
    async def test_puts_public_document(self):
        """Should PUT the user's public fields keyed by user id."""
        user = make_user("ada", name="Ada", email="ada@example.com")
        mock_response = MagicMock()
        mock_response.status_code = 200

        with patch("httpx.AsyncClient") as mock_client:
            put = mock_client.return_value.__aenter__.return_value.put = AsyncMock(
                return_value=mock_response
            )

            await _index().index_user(user)

            put.assert_called_once()
            url = put.call_args.args[0]
            kwargs = put.call_args.kwargs
            assert url == f"https://APP.algolia.net/1/indexes/users/{user.id}"
            assert kwargs["json"]["username"] == "ada"
            assert "email" not in kwargs["json"]
            assert kwargs["headers"]["X-Algolia-API-Key"] == "secret"
            assert kwargs["timeout"] == 10.0

    @pytest.mark.asyncio
    async def test_raises_on_error_status(self):
        """Should raise SearchIndexError on a non-success status."""
        mock_response = MagicMock()
        mock_response.status_code = 403
        mock_response.text = "forbidden"

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.put = AsyncMock(
                return_value=mock_response
            )

            with pytest.raises(SearchIndexError):
                await _index().index_user(make_user("ada"))

    @pytest.mark.asyncio
    async def test_raises_on_http_error(self):
        """Should wrap transport failures in SearchIndexError."""
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.put = AsyncMock(
                side_effect=httpx.ConnectError("connection refused")
            )

            with pytest.raises(SearchIndexError):
                await _index().index_user(make_user("ada"))


class TestMockSearchIndex:
    """Tests for MockSearchIndex."""

    @pytest.mark.asyncio
    async def test_keeps_latest_document(self):
        """Should replace the stored document on re-index."""
        index = MockSearchIndex()
        user = make_user("ada")

        await index.index_user(user)
        await index.index_user(user.rename("countess"))

        assert len(index.documents) == 1
        assert index.documents[str(user.id)]["username"] == "countess"
