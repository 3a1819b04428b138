"""In-memory implementation of Tag repository for testing."""

from copy import deepcopy
from typing import Optional

from scribe.domain.model.tag import Tag
from scribe.domain.repository.tag import TagRepository
from scribe.domain.value import TagId


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._tags: dict[TagId, Tag] = {}

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        self._tags[tag.id] = deepcopy(tag)
        return deepcopy(tag)

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        tag = self._tags.get(tag_id)
        return deepcopy(tag) if tag else None
