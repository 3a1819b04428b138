"""Tag entity."""

from datetime import datetime

from pydantic import Field

from scribe.domain.model.common import DomainModel
from scribe.domain.value import TagId, TagName


class Tag(DomainModel):
    """Tag articles are filed under; users can follow tags."""

    id: TagId
    name: TagName
    created_at: datetime = Field(default_factory=datetime.now)
