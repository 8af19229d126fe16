"""Typed values exchanged with the Box v2.0 API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ERROR_TYPE = "error"


class ResourceType(Enum):
    """Resource families addressable under the versioned API root."""

    FOLDER = "folder"
    FILE = "file"
    COMMENT = "comment"

    @property
    def wire_name(self) -> str:
        return wire_name(self)


_WIRE_NAMES: dict[ResourceType, str] = {
    ResourceType.FOLDER: "folder",
    ResourceType.FILE: "file",
    ResourceType.COMMENT: "comment",
}


def wire_name(resource_type: ResourceType) -> str:
    """Return the URL path segment used for ``resource_type``."""

    return _WIRE_NAMES[resource_type]


@dataclass(frozen=True, slots=True)
class SharedLinkPermissions:
    can_download: bool | None = None
    can_preview: bool | None = None


@dataclass(frozen=True, slots=True)
class SharedLink:
    """Shared link settings sent verbatim in an update body."""

    access: str | None = None
    unshared_at: str | None = None
    permissions: SharedLinkPermissions | None = None


@dataclass(slots=True)
class Error:
    """A single error envelope returned by the API.

    ``type`` is only populated when the payload carries the ``"error"`` tag;
    other tags (``"error_collection"`` for instance) decode as ``None`` so the
    caller can tell that a different envelope shape was returned.
    """

    type: str | None = None
    status: int | None = None
    code: str | None = None
    help_url: str | None = None
    message: str | None = None
    request_id: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Error:
        tag = payload.get("type")
        return cls(
            type=tag if tag == ERROR_TYPE else None,
            status=_coerce_int(payload.get("status")),
            code=payload.get("code"),
            help_url=payload.get("help_url"),
            message=payload.get("message"),
            request_id=payload.get("request_id"),
        )


@dataclass(slots=True)
class ErrorCollection:
    """Several errors wrapped in one response."""

    total_count: str | None = None
    entries: list[Error] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ErrorCollection:
        total = payload.get("total_count")
        entries = payload.get("entries")
        decoded: list[Error] = []
        if isinstance(entries, list):
            for entry in entries:
                if isinstance(entry, Mapping):
                    decoded.append(Error.from_payload(entry))
        return cls(
            total_count=None if total is None else str(total),
            entries=decoded,
        )


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


__all__ = [
    "ERROR_TYPE",
    "Error",
    "ErrorCollection",
    "ResourceType",
    "SharedLink",
    "SharedLinkPermissions",
    "wire_name",
]
