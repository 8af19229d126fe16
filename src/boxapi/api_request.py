"""Immutable description of one outbound API call."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any
from urllib.parse import quote

_SEGMENT_PATTERN = re.compile(r"\{(\w+)\}")

Pairs = tuple[tuple[str, str], ...]
Serializer = Callable[[Any], str]


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class DataFormat(Enum):
    """How the body is encoded and how the response should be read."""

    JSON = "json"
    RAW = "raw"


@dataclass(frozen=True, slots=True)
class FileParameter:
    """A file attached as one multipart field."""

    name: str
    content: bytes
    filename: str


@dataclass(frozen=True, slots=True)
class ApiRequest:
    """Fully-formed request ready to hand to a transport.

    The body is stored as a read-only copy and takes no part in hashing.
    """

    method: Method
    resource: str
    url_segments: Pairs = ()
    params: Pairs = ()
    form: Pairs = ()
    headers: Pairs = ()
    body: Mapping[str, Any] | None = field(default=None, hash=False)
    files: tuple[FileParameter, ...] = ()
    data_format: DataFormat = DataFormat.RAW
    serializer: Serializer | None = None

    def __post_init__(self) -> None:
        if self.body is not None:
            object.__setattr__(self, "body", _freeze(self.body))

    @property
    def path(self) -> str:
        """Resource template with every URL segment substituted and encoded."""

        segments = dict(self.url_segments)

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in segments:
                return match.group(0)
            return _encode_segment(segments[name])

        return _SEGMENT_PATTERN.sub(_substitute, self.resource)

    @property
    def is_json(self) -> bool:
        return self.data_format is DataFormat.JSON

    def serialize_body(self) -> str | None:
        if self.body is None or self.serializer is None:
            return None
        return self.serializer(self.body)

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def with_segment(self, name: str, value: str) -> ApiRequest:
        return replace(self, url_segments=self.url_segments + ((name, value),))

    def with_param(self, name: str, value: str) -> ApiRequest:
        return replace(self, params=self.params + ((name, value),))

    def with_form(self, name: str, value: str) -> ApiRequest:
        return replace(self, form=self.form + ((name, value),))

    def with_header(self, name: str, value: str) -> ApiRequest:
        return replace(self, headers=self.headers + ((name, value),))

    def with_body(self, body: Mapping[str, Any]) -> ApiRequest:
        return replace(self, body=body)

    def with_file(self, name: str, content: bytes, filename: str) -> ApiRequest:
        attachment = FileParameter(name=name, content=bytes(content), filename=filename)
        return replace(self, files=self.files + (attachment,))


def _encode_segment(value: str) -> str:
    # "." and ".." would be collapsed as dot segments by URL normalization.
    if value in (".", ".."):
        return "%2E" * len(value)
    return quote(value, safe="")


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


__all__ = ["ApiRequest", "DataFormat", "FileParameter", "Method"]
