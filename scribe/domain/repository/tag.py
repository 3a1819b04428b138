"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scribe.domain.model.tag import Tag
from scribe.domain.value import TagId


class TagRepository(ABC):
    """Repository interface for Tag entity."""

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag.

        Args:
            tag: Tag to save

        Returns:
            Saved tag
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID.

        Args:
            tag_id: Tag identifier

        Returns:
            Tag if found, None otherwise
        """
        pass
