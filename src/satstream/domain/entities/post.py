"""
Post entity - the tippable unit of content.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Post:
    """Feed post. Only the author matters to the ledger."""

    id: UUID = field(default_factory=uuid4)
    user_id: UUID = field(default_factory=uuid4)
    content: str = field(default="")
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.content.strip():
            raise ValueError("Post content is required")

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "content": self.content,
            "created_at": self.created_at.isoformat(),
        }
