"""Comment operations."""

from __future__ import annotations

from typing import Any

from ..models import ResourceType
from .base import ResourceBase


class CommentsResource(ResourceBase):
    """Read, edit and remove individual comments."""

    def get(self, comment_id: str) -> dict[str, Any]:
        return self._execute(self._builder.get(ResourceType.COMMENT, comment_id))

    def update(self, comment_id: str, message: str) -> dict[str, Any]:
        return self._execute(
            self._builder.update(ResourceType.COMMENT, comment_id, message=message)
        )

    def delete(self, comment_id: str) -> Any:
        return self._execute(self._builder.delete_comment(comment_id))
