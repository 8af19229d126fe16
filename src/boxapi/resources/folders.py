"""Folder operations."""

from __future__ import annotations

from typing import Any

from ..models import ResourceType, SharedLink
from .base import ResourceBase


class FoldersResource(ResourceBase):
    """Interact with Box folders."""

    def get(self, folder_id: str) -> dict[str, Any]:
        return self._execute(self._builder.get(ResourceType.FOLDER, folder_id))

    def items(self, folder_id: str) -> dict[str, Any]:
        return self._execute(self._builder.get_items(folder_id))

    def list_entries(self, folder_id: str) -> list[dict[str, Any]]:
        """Return the child entries of a folder, or an empty list."""

        payload = self.items(folder_id) or {}
        entries = payload.get("entries") if isinstance(payload, dict) else None
        return list(entries or [])

    def create(self, parent_id: str, name: str) -> dict[str, Any]:
        return self._execute(self._builder.create_folder(parent_id, name))

    def delete(self, folder_id: str, *, recursive: bool = False) -> Any:
        return self._execute(self._builder.delete_folder(folder_id, recursive))

    def copy(self, folder_id: str, new_parent_id: str, name: str) -> dict[str, Any]:
        return self._execute(
            self._builder.copy(ResourceType.FOLDER, folder_id, new_parent_id, name)
        )

    def update(
        self,
        folder_id: str,
        *,
        parent_id: str | None = None,
        name: str | None = None,
        description: str | None = None,
        shared_link: SharedLink | None = None,
    ) -> dict[str, Any]:
        """Change folder attributes; arguments left as ``None`` are untouched."""
        return self._execute(
            self._builder.update(
                ResourceType.FOLDER,
                folder_id,
                parent_id=parent_id,
                name=name,
                description=description,
                shared_link=shared_link,
            )
        )

    def comments(self, folder_id: str) -> dict[str, Any]:
        return self._execute(self._builder.get_comments(ResourceType.FOLDER, folder_id))
