"""Server listing entity.

Only the fields the voting service needs are modelled here; listings
themselves are managed elsewhere.
"""

from datetime import datetime

from pydantic import Field

from toplist.domain.model.common import DomainModel
from toplist.domain.model.vote import utcnow
from toplist.domain.value import ServerId, Slug


class Server(DomainModel):
    """A server listing that can receive votes."""

    id: ServerId
    slug: Slug
    name: str = Field(min_length=3, max_length=100)
    owner_id: str
    created_at: datetime = Field(default_factory=utcnow)
