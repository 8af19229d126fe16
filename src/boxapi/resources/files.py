"""File operations."""

from __future__ import annotations

from typing import Any

from ..models import ResourceType, SharedLink
from .base import ResourceBase


class FilesResource(ResourceBase):
    """Interact with Box files and their content."""

    def get(self, file_id: str) -> dict[str, Any]:
        return self._execute(self._builder.get(ResourceType.FILE, file_id))

    def upload(self, parent_id: str, name: str, content: bytes) -> dict[str, Any]:
        """Upload a new file into ``parent_id``.

        Args:
            parent_id: Identifier of the destination folder.
            name: File name as stored in Box.
            content: File bytes.
        """
        return self._execute(self._builder.create_file(parent_id, name, content))

    def read(self, file_id: str) -> bytes:
        content = self._execute(self._builder.read(file_id))
        return content or b""

    def write(self, file_id: str, name: str, content: bytes) -> dict[str, Any]:
        return self._execute(self._builder.write(file_id, name, content))

    def delete(self, file_id: str, *, etag: str | None = None) -> Any:
        return self._execute(self._builder.delete_file(file_id, etag))

    def copy(self, file_id: str, new_parent_id: str, name: str) -> dict[str, Any]:
        return self._execute(self._builder.copy(ResourceType.FILE, file_id, new_parent_id, name))

    def update(
        self,
        file_id: str,
        *,
        parent_id: str | None = None,
        name: str | None = None,
        description: str | None = None,
        shared_link: SharedLink | None = None,
    ) -> dict[str, Any]:
        return self._execute(
            self._builder.update(
                ResourceType.FILE,
                file_id,
                parent_id=parent_id,
                name=name,
                description=description,
                shared_link=shared_link,
            )
        )

    def add_comment(self, file_id: str, message: str) -> dict[str, Any]:
        return self._execute(self._builder.add_comment(file_id, message))

    def comments(self, file_id: str) -> dict[str, Any]:
        return self._execute(self._builder.get_comments(ResourceType.FILE, file_id))
